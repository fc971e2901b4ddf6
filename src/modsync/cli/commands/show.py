"""
Show Command - Inspect the mod directory on disk.

Reads the output directory the way the mod loader does: files at the
root are shared, every folder is one mod.

Usage:
    modsync show
"""

from __future__ import annotations

import click
from rich.console import Console
from rich.tree import Tree

from ...core.installed import InstalledLayout
from ..utils import echo_warning, load_project, project_dir_option

console = Console()


@click.command()
@project_dir_option
def show(project_dir: str):
    """
    Show the installed mod directory.

    Lists shared files and each mod folder with its files, and flags
    folders that no declared mod owns.
    """
    project = load_project(project_dir)
    output = project.output_dir
    declared = [spec.dependency for spec in project.manifest.mods.values()]

    if not output.is_dir():
        console.print(f"[dim]{project.manifest.output} does not exist yet. Run 'modsync collect'.[/dim]")
        return

    layout = InstalledLayout.read(output, declared=declared)

    tree = Tree(f"📁 [bold]{project.manifest.output}[/bold]")
    shared_branch = tree.add(f"🔗 Shared ({len(layout.shared)})")
    for path in layout.shared:
        shared_branch.add(path.name)

    for name, mod in layout.mods.items():
        branch = tree.add(f"🧩 [cyan]{name}/[/cyan] ({len(mod.files)})")
        for path in mod.files:
            branch.add(path.relative_to(output / name).as_posix())

    console.print(tree)

    for name in layout.unknown_folders():
        echo_warning(f"Folder '{name}' does not belong to any declared mod")
