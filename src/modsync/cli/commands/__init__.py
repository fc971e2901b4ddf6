"""
modsync CLI commands.

Each command lives in its own module and is registered on the main
group in cli/main.py.
"""
