"""
Collect Command - Synchronize the mod directory.

Resolves every mod declared in modsync.toml and makes the output
directory match: shared libraries at the root, private libraries in one
folder per mod, nothing the host already ships.

Usage:
    modsync collect            # Sync build/mods
    modsync collect --dry-run  # Report changes without writing
"""

from __future__ import annotations

import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...core.errors import ModSyncError
from ...core.pipeline import CollectResult
from ..utils import load_project, project_dir_option

console = Console()


@click.command()
@project_dir_option
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show what would change without touching the mod directory",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress output except errors",
)
def collect(project_dir: str, dry_run: bool, quiet: bool):
    """
    Collect mods into the mod directory.

    Running it again with unchanged declarations writes nothing.

    \b
    Examples:
        modsync collect
        modsync collect --dry-run
        modsync collect -p ../my-game
    """
    project = load_project(project_dir)

    if not project.manifest.has_mods() and not quiet:
        console.print("[dim]No mods declared in modsync.toml[/dim]")

    if not quiet:
        mode = " [yellow](dry run)[/yellow]" if dry_run else ""
        console.print(f"[bold]📦 Collecting mods into {project.manifest.output}{mode}...[/bold]\n")

    try:
        result = project.collector().resolve_and_materialize(dry_run=dry_run)
    except (ModSyncError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        sys.exit(1)

    if quiet:
        return

    _print_results(result)

    report = result.report
    if not report.changed:
        console.print("\n[green]✓ Mod directory is up to date[/green]")
    elif dry_run:
        console.print(f"\n[yellow]{report.writes} change(s) would be made[/yellow]")
    else:
        console.print(f"\n[green]✓ Applied {report.writes} change(s)[/green]")


def _print_results(result: CollectResult) -> None:
    """Print the sync report as a table."""
    report = result.report
    table = Table(show_header=True, header_style="bold")
    table.add_column("Target", style="cyan")
    table.add_column("Status")

    for target in report.copied:
        table.add_row(target, "[green]added[/green]")
    for target in report.updated:
        table.add_row(target, "[yellow]updated[/yellow]")
    for target in report.removed:
        table.add_row(target, "[red]removed[/red]")

    if table.row_count:
        console.print(table)

    console.print(
        f"[dim]{len(result.plan.shared())} shared, {len(result.plan.private())} private, "
        f"{len(report.unchanged)} unchanged[/dim]"
    )
