"""
Installed layout reader.

Reads a synchronized mod directory back the way a mod-loading runtime
does at startup: files at the root form the shared classpath, every
sub-directory is one mod's private classpath.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .identity import folder_name
from .types import Dependency


@dataclass
class InstalledMod:
    """
    One mod folder found on disk.

    Attributes:
        folder: Folder name below the root.
        files: Private classpath entries, sorted by name.
        dependency: Declared mod matching the folder, when known.
    """

    folder: str
    files: List[Path] = field(default_factory=list)
    dependency: Optional[Dependency] = None


@dataclass
class InstalledLayout:
    """Shared classpath and per-mod folders of an output directory."""

    root: Path
    shared: List[Path] = field(default_factory=list)
    mods: Dict[str, InstalledMod] = field(default_factory=dict)

    @classmethod
    def read(cls, root: Path, declared: Iterable[Dependency] = ()) -> "InstalledLayout":
        """
        Read the layout below ``root``.

        Args:
            root: Output directory. A missing directory reads as empty.
            declared: Declared mods, used to label folders.
        """
        layout = cls(root=root)
        if not root.is_dir():
            return layout

        by_folder = {folder_name(dep): dep for dep in declared}
        for child in sorted(root.iterdir()):
            if child.is_dir():
                files = sorted(p for p in child.rglob("*") if p.is_file())
                layout.mods[child.name] = InstalledMod(
                    folder=child.name,
                    files=files,
                    dependency=by_folder.get(child.name),
                )
            elif child.is_file():
                layout.shared.append(child)
        return layout

    def classpath(self, folder: str) -> List[Path]:
        """Effective classpath of one mod: its private files, then the shared ones."""
        return list(self.mods[folder].files) + list(self.shared)

    def unknown_folders(self) -> List[str]:
        """Folders that do not belong to any declared mod."""
        return [name for name, mod in self.mods.items() if mod.dependency is None]
