"""
Module Repository.

A local index of published and project-local modules that the bundled
resolver reads from. The index is a TOML file:

    [modules."libX:1.0"]
    files = ["libs/libX-1.0.jar"]
    api = ["libY:2.0"]
    implementation = ["libZ:1.1"]
    module_name = "org.libx"

File paths are relative to the directory holding the index. A module key
without a version ("local-mod") denotes a local, in-development module.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .types import Dependency, DependencyScope

logger = logging.getLogger(__name__)


@dataclass
class ModuleDescriptor:
    """
    Everything the repository knows about one module version.

    Attributes:
        dependency: Identity of the module.
        files: Artifact files the module publishes (may be empty).
        api: Dependencies exposed to consumers of the module.
        implementation: Dependencies needed only at runtime.
        module_name: Module-system name, if the artifacts are modules.
    """

    dependency: Dependency
    files: List[Path] = field(default_factory=list)
    api: List[Dependency] = field(default_factory=list)
    implementation: List[Dependency] = field(default_factory=list)
    module_name: Optional[str] = None

    def edges(self) -> Iterator[Tuple[Dependency, DependencyScope]]:
        """Yield each outgoing dependency with its scope, api edges first."""
        for dep in self.api:
            yield dep, DependencyScope.API
        for dep in self.implementation:
            yield dep, DependencyScope.IMPLEMENTATION

    @classmethod
    def from_toml(cls, coordinates: str, data: Dict[str, Any], base_dir: Path) -> "ModuleDescriptor":
        """
        Parse one [modules."..."] table.

        Args:
            coordinates: The table key ("name:version" or "name").
            data: The table contents.
            base_dir: Directory relative file paths are anchored at.

        Returns:
            ModuleDescriptor instance.

        Raises:
            ValueError: If a field has the wrong shape.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Module entry for {coordinates} must be a table")

        files = data.get("files", [])
        if isinstance(files, str):
            files = [files]

        def _deps(key: str) -> List[Dependency]:
            values = data.get(key, [])
            if not isinstance(values, list):
                raise ValueError(f"'{key}' of {coordinates} must be a list")
            return [Dependency.parse(str(v)) for v in values]

        return cls(
            dependency=Dependency.parse(coordinates),
            files=[(base_dir / str(f)).resolve() for f in files],
            api=_deps("api"),
            implementation=_deps("implementation"),
            module_name=data.get("module_name"),
        )


class ModuleRepository:
    """
    In-memory collection of module descriptors keyed by identity.

    Example:
        ```python
        repo = ModuleRepository.load(Path("repo/index.toml"))
        descriptor = repo.get(Dependency(name="libX", version="1.0"))
        ```
    """

    def __init__(self) -> None:
        self._modules: Dict[Dependency, ModuleDescriptor] = {}

    @classmethod
    def load(cls, path: Path) -> "ModuleRepository":
        """
        Load a repository index.

        Args:
            path: Path to the TOML index. A missing file yields an empty repository.

        Raises:
            ValueError: If the index is malformed.
        """
        repo = cls()
        if not path.exists():
            logger.warning(f"Repository index not found at {path}; starting empty")
            return repo

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Failed to parse {path}: {e}")

        base_dir = path.parent.resolve()
        for coordinates, entry in data.get("modules", {}).items():
            try:
                repo.add(ModuleDescriptor.from_toml(coordinates, entry, base_dir))
            except ValueError as e:
                raise ValueError(f"Invalid module in {path}: {e}")

        logger.debug(f"Loaded {len(repo)} modules from {path}")
        return repo

    def add(self, descriptor: ModuleDescriptor) -> None:
        """Register a module; a later registration of the same identity replaces the earlier one."""
        if descriptor.dependency in self._modules:
            logger.warning(f"Replacing module {descriptor.dependency} in repository")
        self._modules[descriptor.dependency] = descriptor

    def get(self, dependency: Dependency) -> Optional[ModuleDescriptor]:
        return self._modules.get(dependency)

    def versions_of(self, name: str) -> List[str]:
        return [dep.version for dep in self._modules if dep.name == name]

    def __contains__(self, dependency: Dependency) -> bool:
        return dependency in self._modules

    def __iter__(self) -> Iterator[ModuleDescriptor]:
        return iter(self._modules.values())

    def __len__(self) -> int:
        return len(self._modules)
