"""
Run Command - Collect mods, then launch the application.

Available when the project declares the "application" plugin. The mod
directory is always synchronized before the application starts.

Usage:
    modsync run
"""

from __future__ import annotations

import sys

import click
from rich.console import Console
from rich.markup import escape

from ...core.errors import ModSyncError
from ...core.tasks import RUN_TASK
from ..utils import load_project, project_dir_option

console = Console()


@click.command()
@project_dir_option
def run(project_dir: str):
    """
    Run the application with up-to-date mods.

    Executes collectMods and then the [application] command.
    """
    project = load_project(project_dir)

    try:
        tasks = project.tasks()
        if not tasks.has(RUN_TASK):
            console.print("[red]Error:[/red] The 'application' plugin is not enabled")
            console.print("Add plugins = [\"application\"] to [project] in modsync.toml.", markup=False)
            sys.exit(1)

        for name in tasks.execution_order(RUN_TASK):
            console.print(f"[dim]> Task :{name}[/dim]")
        tasks.execute(RUN_TASK)
    except (ModSyncError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        sys.exit(1)
