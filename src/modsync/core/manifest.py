"""
Manifest definition and parsing for modsync.toml.

Declares the mods a project loads, where their artifacts come from, what
the host application already ships, and how the application is
launched.

Example:
    [project]
    name = "my-game"
    version = "1.0.0"
    output = "build/mods"
    plugins = ["application"]

    [repository]
    index = "repo/index.toml"

    [mods]
    basemod = "1.2.0"                                   # Short form
    childmod = { version = "2.0" }                      # Long form
    local-mod = { path = "local-mod/build/libs/local-mod.jar" }

    [host]
    dependencies = ["gson:2.10"]
    classpath = ["lib/engine.jar"]
    outputs = ["build/libs/my-game.jar"]

    [application]
    command = ["java", "-jar", "build/libs/my-game.jar"]

    [tool.modsync]
    java_modules = true
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import DEFAULT_OUTPUT_DIR, UNSPECIFIED_VERSION
from .errors import DeclarationError
from .repository import ModuleDescriptor
from .types import Dependency

APPLICATION_PLUGIN = "application"


def _string_list(value: Any, where: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise DeclarationError(f"{where} must be a list of strings")
    return list(value)


@dataclass
class ModSpec:
    """
    A single mod declaration from the [mods] table.

    Attributes:
        name: Mod name (key in [mods]).
        version: Declared version, "unspecified" for local mods.
        path: Artifact of a local, in-development mod.
        api: Dependencies a local mod exposes to others.
        implementation: Dependencies a local mod needs privately.
        module_name: Module-system name of a local mod's artifact.

    Examples:
        Short form: `basemod = "1.2.0"`
        Long form: `local-mod = { path = "../local-mod/build/libs/local-mod.jar" }`
    """

    name: str
    version: str = UNSPECIFIED_VERSION
    path: Optional[str] = None
    api: List[str] = field(default_factory=list)
    implementation: List[str] = field(default_factory=list)
    module_name: Optional[str] = None

    @property
    def dependency(self) -> Dependency:
        return Dependency(name=self.name, version=self.version)

    @property
    def is_local(self) -> bool:
        return self.path is not None

    def as_module(self, project_root: Path) -> ModuleDescriptor:
        """Describe a local mod as a repository module."""
        if self.path is None:
            raise DeclarationError(f"Mod '{self.name}' has no local path")
        return ModuleDescriptor(
            dependency=self.dependency,
            files=[(project_root / self.path).resolve()],
            api=[Dependency.parse(c) for c in self.api],
            implementation=[Dependency.parse(c) for c in self.implementation],
            module_name=self.module_name,
        )

    @classmethod
    def from_toml(cls, name: str, value: Any) -> "ModSpec":
        if isinstance(value, str):
            return cls(name=name, version=value or UNSPECIFIED_VERSION)
        if not isinstance(value, dict):
            raise DeclarationError(f"Invalid declaration for mod '{name}': {value!r}")

        unknown = set(value) - {"version", "path", "api", "implementation", "module_name"}
        if unknown:
            raise DeclarationError(f"Unknown keys for mod '{name}': {', '.join(sorted(unknown))}")

        return cls(
            name=name,
            version=str(value.get("version") or UNSPECIFIED_VERSION),
            path=value.get("path"),
            api=_string_list(value.get("api"), f"mods.{name}.api"),
            implementation=_string_list(value.get("implementation"), f"mods.{name}.implementation"),
            module_name=value.get("module_name"),
        )


@dataclass
class HostSpec:
    """
    The [host] table: what the consuming application already provides.

    Attributes:
        dependencies: Host runtime dependencies, as "name:version" coordinates.
        classpath: Extra files on the host runtime classpath.
        outputs: The host's own build artifacts.
    """

    dependencies: List[str] = field(default_factory=list)
    classpath: List[str] = field(default_factory=list)
    outputs: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HostSpec":
        return cls(
            dependencies=_string_list(data.get("dependencies"), "host.dependencies"),
            classpath=_string_list(data.get("classpath"), "host.classpath"),
            outputs=_string_list(data.get("outputs"), "host.outputs"),
        )


@dataclass
class ToolModsyncConfig:
    """
    Configuration from the [tool.modsync] section.

    Attributes:
        java_modules: Resolve mod configurations as module-system aware
            (set when a module-info companion tool is in use).
    """

    java_modules: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ToolModsyncConfig":
        return cls(java_modules=bool(data.get("java_modules", False)))


@dataclass
class ProjectManifest:
    """
    Represents the parsed content of a modsync.toml file.

    Attributes:
        name: Project name.
        version: Project version string.
        output: Output directory, relative to the project root.
        plugins: Capabilities of the project (e.g. "application").
        repository_index: Path of the module index, relative to the project root.
        mods: Declared mods keyed by name, in declaration order.
        host: Host runtime classpath declaration.
        application_command: Command launching the application.
        tool_config: Additional [tool.modsync] configuration.
    """

    name: str
    version: str = "0.0.0"
    output: str = DEFAULT_OUTPUT_DIR.as_posix()
    plugins: List[str] = field(default_factory=list)
    repository_index: Optional[str] = None
    mods: Dict[str, ModSpec] = field(default_factory=dict)
    host: HostSpec = field(default_factory=HostSpec)
    application_command: List[str] = field(default_factory=list)
    tool_config: ToolModsyncConfig = field(default_factory=ToolModsyncConfig)

    @classmethod
    def load(cls, path: Path) -> "ProjectManifest":
        """
        Load and parse a modsync.toml file.

        Args:
            path: Path to the modsync.toml file.

        Returns:
            ProjectManifest: Parsed configuration object. Returns a default
            manifest if the file does not exist.

        Raises:
            DeclarationError: If the TOML file is malformed.
        """
        if not path.exists():
            return cls(name=path.parent.name)

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise DeclarationError(f"Failed to parse {path}: {e}")

        project = data.get("project", {})
        mods = {name: ModSpec.from_toml(name, spec) for name, spec in data.get("mods", {}).items()}
        application = data.get("application", {})
        tool_section = data.get("tool", {}).get("modsync", {})

        return cls(
            name=project.get("name", path.parent.name),
            version=project.get("version", "0.0.0"),
            output=project.get("output", DEFAULT_OUTPUT_DIR.as_posix()),
            plugins=_string_list(project.get("plugins"), "project.plugins"),
            repository_index=data.get("repository", {}).get("index"),
            mods=mods,
            host=HostSpec.from_dict(data.get("host", {})),
            application_command=_string_list(application.get("command"), "application.command"),
            tool_config=ToolModsyncConfig.from_dict(tool_section),
        )

    def has_mods(self) -> bool:
        """Check if any mods are declared."""
        return len(self.mods) > 0

    def has_plugin(self, name: str) -> bool:
        return name in self.plugins

    def local_mods(self) -> List[ModSpec]:
        return [spec for spec in self.mods.values() if spec.is_local]

    def host_dependencies(self) -> List[Dependency]:
        return [Dependency.parse(c) for c in self.host.dependencies]
