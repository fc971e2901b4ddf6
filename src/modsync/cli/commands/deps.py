"""
Deps Command - Dependency inspection.

Shows each declared mod together with the libraries that end up in its
private folder, and the libraries shared by all mods.

Usage:
    modsync deps tree              # Show mod tree
    modsync deps tree --show-paths # Include source paths
"""

from __future__ import annotations

import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from ...core.errors import ModSyncError
from ...core.identity import folder_name
from ..utils import display_path, load_project, project_dir_option

console = Console()


@click.group()
def deps():
    """
    Inspect mod dependencies.

    View the mods declared in modsync.toml and how their libraries are
    split between the shared and private classpaths.
    """
    pass


@deps.command("tree")
@project_dir_option
@click.option(
    "--show-paths",
    is_flag=True,
    help="Show resolved source paths",
)
def deps_tree(project_dir: str, show_paths: bool):
    """
    Show the mod tree.

    Displays all declared mods, their private libraries and the shared
    libraries.
    """
    project = load_project(project_dir)
    manifest = project.manifest

    tree = Tree(f"📦 [bold]{manifest.name}[/bold] ({manifest.version})")

    if not manifest.has_mods():
        tree.add("[dim]No mods declared[/dim]")
        console.print(tree)
        return

    try:
        partition = project.collector().partition()
    except (ModSyncError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        sys.exit(1)

    def _label(artifact) -> str:
        if show_paths:
            return f"{artifact.file_name} [dim]→ {display_path(artifact.file, project.root)}[/dim]"
        return artifact.file_name

    mods_branch = tree.add("🧩 Mods")
    for mod, artifacts in partition.private.items():
        spec = manifest.mods.get(mod.name)
        source = f"path: {spec.path}" if spec is not None and spec.is_local else str(mod)
        branch = mods_branch.add(f"[cyan]{folder_name(mod)}/[/cyan] [dim]{source}[/dim]")
        if not artifacts:
            branch.add("[dim]nothing private[/dim]")
        for artifact in artifacts:
            branch.add(_label(artifact))

    shared_branch = tree.add("🔗 Shared")
    if not partition.shared:
        shared_branch.add("[dim]nothing shared[/dim]")
    for artifact in partition.shared:
        shared_branch.add(f"{_label(artifact)} [dim]({artifact.dependency})[/dim]")

    console.print(tree)
