"""Command line interface for modsync."""
