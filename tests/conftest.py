"""
Shared fixtures: a throwaway module repository built under tmp_path.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from modsync.core.repository import ModuleRepository
from modsync.core.resolver import RepositoryResolver
from modsync.core.types import Dependency


class RepoBuilder:
    """Writes artifact files and a module index for tests."""

    def __init__(self, root: Path):
        self.root = root / "repo"
        self.libs = self.root / "libs"
        self.libs.mkdir(parents=True, exist_ok=True)
        self.modules: Dict[str, dict] = {}

    def module(
        self,
        coordinates: str,
        files: Optional[List[str]] = None,
        api: List[str] = (),
        implementation: List[str] = (),
        module_name: Optional[str] = None,
    ) -> List[Path]:
        dep = Dependency.parse(coordinates)
        if files is None:
            files = [f"{dep.name}.jar" if dep.is_local else f"{dep.name}-{dep.version}.jar"]
        paths = []
        for name in files:
            path = self.libs / name
            path.parent.mkdir(parents=True, exist_ok=True)
            if not path.exists():
                path.write_bytes(f"{coordinates}/{name}".encode())
            paths.append(path)
        entry = {
            "files": [f"libs/{name}" for name in files],
            "api": list(api),
            "implementation": list(implementation),
        }
        if module_name:
            entry["module_name"] = module_name
        self.modules[coordinates] = entry
        return paths

    def jar(self, name: str) -> Path:
        return self.libs / name

    def write_index(self) -> Path:
        lines = []
        for coordinates, entry in self.modules.items():
            lines.append(f'[modules."{coordinates}"]')
            for key, value in entry.items():
                lines.append(f"{key} = {json.dumps(value)}")
            lines.append("")
        index = self.root / "index.toml"
        index.write_text("\n".join(lines))
        return index

    def repository(self) -> ModuleRepository:
        return ModuleRepository.load(self.write_index())

    def resolver(self) -> RepositoryResolver:
        return RepositoryResolver(self.repository())


@pytest.fixture
def repo(tmp_path):
    return RepoBuilder(tmp_path)


