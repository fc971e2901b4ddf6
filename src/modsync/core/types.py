"""
Core type definitions for modsync.

Value types shared by every stage of the pipeline: declared dependencies,
resolved artifacts and the entries of a layout plan.
"""

import os
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from ..config import UNSPECIFIED_VERSION


class UsageView(StrEnum):
    """How a configuration asks the resolver to see a module."""
    API = "java-api"
    RUNTIME = "java-runtime"


class DependencyScope(StrEnum):
    """Visibility of a module's own dependency edge."""
    API = "api"
    IMPLEMENTATION = "implementation"


class Classification(StrEnum):
    """Where an artifact ends up in the output layout."""
    SHARED = "shared"
    PRIVATE = "private"


def file_key(path: Path) -> str:
    """
    Identity key for a physical file.

    Two artifacts are the same file when their absolute, symlink-free
    paths match, regardless of which dependency produced them.
    """
    return os.path.normcase(str(Path(path).resolve()))


class Dependency(BaseModel):
    """
    A declared module, identified by name and version.

    A version of "unspecified" marks a local, in-development module
    rather than a published artifact.
    """
    name: str
    version: str = UNSPECIFIED_VERSION

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, coordinates: str) -> "Dependency":
        """Parse "name:version" (or a bare "name") into a Dependency."""
        name, _, version = coordinates.partition(":")
        name = name.strip()
        if not name:
            raise ValueError(f"Invalid module coordinates: {coordinates!r}")
        return cls(name=name, version=version.strip() or UNSPECIFIED_VERSION)

    @property
    def is_local(self) -> bool:
        return self.version == UNSPECIFIED_VERSION

    @property
    def coordinates(self) -> str:
        if self.is_local:
            return self.name
        return f"{self.name}:{self.version}"

    def __str__(self) -> str:
        return self.coordinates


class ResolvedArtifact(BaseModel):
    """
    A concrete file produced by a dependency.

    Attributes:
        file: Path to the artifact on disk.
        dependency: The module that produced the file.
        module_name: Module-system name of the artifact, if it has one.
    """
    file: Path
    dependency: Dependency
    module_name: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> str:
        return file_key(self.file)

    @property
    def file_name(self) -> str:
        return self.file.name


class LayoutEntry(BaseModel):
    """
    A single file in the output layout.

    Attributes:
        target: Relative POSIX path inside the output directory.
        source: File the target is copied from.
        classification: Shared (root) or private (inside a mod folder).
        owner: Declared mod owning a private entry; None for shared ones.
    """
    target: str
    source: Path
    classification: Classification
    owner: Dependency | None = None

    model_config = ConfigDict(frozen=True)
