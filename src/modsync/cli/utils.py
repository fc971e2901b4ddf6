"""
CLI Utilities - Shared helper functions for command line operations.

This module provides common functionality used across the CLI commands:
formatted printing, logging setup and project loading.
"""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from ..config import MANIFEST_NAME
from ..core.project import ModProject

# Options shared by every command that works on a project
project_dir_option = click.option(
    "--project-dir",
    "-p",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Project directory containing modsync.toml",
)


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    """
    Print a warning message with a yellow alert symbol.

    Args:
        message (str): The warning message to display.
    """
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def configure_logging(level: str) -> None:
    """
    Route library logging through rich.

    Args:
        level (str): Logging level name, e.g. "INFO" or "DEBUG".
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _verbose_requested() -> bool:
    ctx = click.get_current_context(silent=True)
    while ctx is not None:
        if isinstance(ctx.obj, dict) and ctx.obj.get("verbose"):
            return True
        ctx = ctx.parent
    return False


def load_project(project_dir: str) -> ModProject:
    """
    Load the project in ``project_dir`` or exit with an error.

    Also configures logging from the project's settings, or at DEBUG
    level when ``-v`` was given to the main command.

    Args:
        project_dir (str): Directory containing modsync.toml.

    Returns:
        ModProject: The loaded project.
    """
    project_root = Path(project_dir).resolve()
    if not (project_root / MANIFEST_NAME).exists():
        echo_error(f"No {MANIFEST_NAME} found in {project_root}")
        sys.exit(1)

    try:
        project = ModProject.load(project_root)
    except ValueError as e:
        echo_error(str(e))
        sys.exit(1)

    configure_logging("DEBUG" if _verbose_requested() else project.settings.log_level)
    return project


def display_path(path: Path, root: Path) -> str:
    """Show ``path`` relative to ``root`` when possible."""
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)
