"""
Layout planning.

Assigns every partitioned artifact a target path inside the mod
directory:

    <root>/<shared file name>
    <root>/<mod folder>/<private file name>

A layout plan is the complete desired state of the directory; the
synchronizer makes the disk match it exactly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .errors import LayoutCollisionError
from .identity import folder_name
from .partition import Partition
from .types import Classification, Dependency, LayoutEntry, ResolvedArtifact, file_key

logger = logging.getLogger(__name__)


@dataclass
class LayoutPlan:
    """
    Mapping of relative target path to layout entry.

    Attributes:
        entries: Entries keyed by target path, in insertion order.
        folders: Folder name of every declared mod, including mods with
            nothing private to place.
    """

    entries: Dict[str, LayoutEntry] = field(default_factory=dict)
    folders: Dict[str, Dependency] = field(default_factory=dict)

    def add(self, entry: LayoutEntry) -> None:
        """
        Add an entry, rejecting ambiguous targets.

        Raises:
            LayoutCollisionError: If a different file already claims the target.
        """
        existing = self.entries.get(entry.target)
        if existing is not None:
            if file_key(existing.source) == file_key(entry.source):
                return
            raise LayoutCollisionError(entry.target, existing.source, entry.source)
        self.entries[entry.target] = entry

    def shared(self) -> List[LayoutEntry]:
        return [e for e in self.entries.values() if e.classification == Classification.SHARED]

    def private(self, mod: Optional[Dependency] = None) -> List[LayoutEntry]:
        return [
            e
            for e in self.entries.values()
            if e.classification == Classification.PRIVATE and (mod is None or e.owner == mod)
        ]

    def targets(self) -> List[str]:
        return list(self.entries)

    def __iter__(self) -> Iterator[LayoutEntry]:
        return iter(self.entries.values())

    def __len__(self) -> int:
        return len(self.entries)


def _shared_entry(artifact: ResolvedArtifact) -> LayoutEntry:
    return LayoutEntry(
        target=artifact.file_name,
        source=artifact.file,
        classification=Classification.SHARED,
    )


def _private_entry(mod: Dependency, artifact: ResolvedArtifact) -> LayoutEntry:
    return LayoutEntry(
        target=f"{folder_name(mod)}/{artifact.file_name}",
        source=artifact.file,
        classification=Classification.PRIVATE,
        owner=mod,
    )


def build_layout_plan(partition: Partition) -> LayoutPlan:
    """
    Build the layout plan for a deduplicated partition.

    Raises:
        LayoutCollisionError: If two distinct files map to one target, two mods
            share a folder name, or a shared file has the same name as a mod
            folder.
    """
    plan = LayoutPlan()

    for mod in partition.private:
        name = folder_name(mod)
        owner = plan.folders.get(name)
        if owner is not None and owner != mod:
            raise LayoutCollisionError(f"{name}/", f"folder of {owner}", f"folder of {mod}")
        plan.folders[name] = mod

    for artifact in partition.shared:
        if artifact.file_name in plan.folders:
            owner = plan.folders[artifact.file_name]
            raise LayoutCollisionError(
                artifact.file_name,
                artifact.file,
                f"folder of {owner}",
            )
        plan.add(_shared_entry(artifact))

    for mod, artifacts in partition.private.items():
        for artifact in artifacts:
            plan.add(_private_entry(mod, artifact))

    logger.debug(f"Layout plan: {len(plan.shared())} shared, {len(plan.private())} private entries")
    return plan
