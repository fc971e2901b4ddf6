"""
Plan Command - Show the computed layout.

Resolves and partitions the declared mods and prints where every file
would go, without touching the mod directory.

Usage:
    modsync plan           # Table of target paths
    modsync plan --json    # Machine-readable plan
"""

from __future__ import annotations

import json
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...core.errors import ModSyncError
from ...core.types import Classification
from ..utils import display_path, load_project, project_dir_option

console = Console()


@click.command()
@project_dir_option
@click.option("--json", "as_json", is_flag=True, help="Output the plan as JSON")
def plan(project_dir: str, as_json: bool):
    """
    Show the layout plan.

    Lists every target path inside the mod directory together with the
    file it is copied from.
    """
    project = load_project(project_dir)

    try:
        layout = project.collector().plan()
    except (ModSyncError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        sys.exit(1)

    if as_json:
        entries = [entry.model_dump(mode="json") for entry in layout]
        click.echo(json.dumps({"output": project.manifest.output, "entries": entries}, indent=2))
        return

    if not len(layout):
        console.print("[dim]Nothing to place in the mod directory[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Target", style="cyan")
    table.add_column("Kind")
    table.add_column("Source", style="dim")

    for entry in layout:
        kind = "shared" if entry.classification == Classification.SHARED else f"private ({entry.owner})"
        table.add_row(entry.target, kind, display_path(entry.source, project.root))

    console.print(table)
    console.print(f"\n[dim]{len(layout)} file(s) planned for {project.manifest.output}[/dim]")
