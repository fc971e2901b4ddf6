"""
Dependency Configurations.

A configuration is a named set of declared dependencies plus the flags
that tell the resolver how to treat it. Configurations can extend each
other; extension is plain set union over a small, statically known
graph.

The four mod configurations:
    - mod: Everything the user declares. Never resolved directly.
    - topLevelMods: The declared mods themselves (non-transitive, API view).
    - sharedModClasspath: Full closure of all mods (transitive, API view).
    - privateModClasspath: Full closure per mod (transitive, runtime view).

Declarations are only accepted until the container is frozen, which
happens when resolution begins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .errors import DeclarationError
from .types import Dependency, UsageView

logger = logging.getLogger(__name__)

MOD = "mod"
TOP_LEVEL_MODS = "topLevelMods"
SHARED_MOD_CLASSPATH = "sharedModClasspath"
PRIVATE_MOD_CLASSPATH = "privateModClasspath"
RUNTIME_CLASSPATH = "runtimeClasspath"

JAVA_MODULE_ATTRIBUTE = "javaModule"


@dataclass(eq=False)
class Configuration:
    """
    A named, ordered set of dependencies.

    Attributes:
        name: Configuration name.
        transitive: Whether the dependencies of declared modules are included.
        usage: Resolution view; None for configurations that only declare.
        visible: Whether the configuration is shown in reports.
        can_be_resolved: Whether the resolver may act on it.
        can_be_consumed: Whether other projects may consume it.
        attributes: Extra attributes steering resolution.
    """

    name: str
    transitive: bool = True
    usage: Optional[UsageView] = None
    visible: bool = True
    can_be_resolved: bool = True
    can_be_consumed: bool = True
    attributes: Dict[str, Any] = field(default_factory=dict)
    extends_from: List["Configuration"] = field(default_factory=list)
    _dependencies: List[Dependency] = field(default_factory=list, repr=False)
    _frozen: bool = field(default=False, repr=False)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise DeclarationError(
                f"Configuration '{self.name}' cannot be changed after resolution has started"
            )

    def add(self, dependency: Dependency) -> None:
        """Declare a dependency directly on this configuration."""
        self._check_mutable()
        if dependency not in self._dependencies:
            self._dependencies.append(dependency)

    def extend(self, parent: "Configuration") -> None:
        """Inherit every dependency declared on ``parent``."""
        self._check_mutable()
        if parent is self or self in parent.hierarchy():
            raise DeclarationError(
                f"Configuration '{self.name}' cannot extend '{parent.name}': cycle"
            )
        if parent not in self.extends_from:
            self.extends_from.append(parent)

    def set_attribute(self, key: str, value: Any) -> None:
        self._check_mutable()
        self.attributes[key] = value

    def hierarchy(self) -> List["Configuration"]:
        """This configuration followed by everything it extends, depth first."""
        seen: List[Configuration] = []
        stack = [self]
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.append(current)
            stack.extend(reversed(current.extends_from))
        return seen

    @property
    def declared(self) -> List[Dependency]:
        """Dependencies declared directly on this configuration."""
        return list(self._dependencies)

    @property
    def dependencies(self) -> List[Dependency]:
        """All dependencies, including inherited ones, in declaration order."""
        result: List[Dependency] = []
        for config in self.hierarchy():
            for dep in config._dependencies:
                if dep not in result:
                    result.append(dep)
        return result

    def freeze(self) -> None:
        self._frozen = True


class ConfigurationContainer:
    """
    Holds the configurations of a single project.

    Example:
        ```python
        container = ConfigurationContainer()
        mods = create_mod_configurations(container)
        mods.mod.add(Dependency(name="basemod", version="1.0"))
        container.freeze()
        ```
    """

    def __init__(self) -> None:
        self._configurations: Dict[str, Configuration] = {}
        self._frozen = False

    def create(self, name: str, **flags: Any) -> Configuration:
        if self._frozen:
            raise DeclarationError(f"Cannot create configuration '{name}' after resolution has started")
        if name in self._configurations:
            raise DeclarationError(f"Configuration '{name}' already exists")
        config = Configuration(name=name, **flags)
        self._configurations[name] = config
        return config

    def get(self, name: str) -> Configuration:
        try:
            return self._configurations[name]
        except KeyError:
            raise DeclarationError(f"Unknown configuration '{name}'") from None

    def __contains__(self, name: str) -> bool:
        return name in self._configurations

    def __iter__(self) -> Iterator[Configuration]:
        return iter(self._configurations.values())

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """End the declaration phase for every configuration."""
        if self._frozen:
            return
        for config in self._configurations.values():
            config.freeze()
        self._frozen = True
        logger.debug(f"Froze {len(self._configurations)} configurations")


@dataclass
class ModConfigurations:
    """The four configurations that drive mod collection."""

    mod: Configuration
    top_level: Configuration
    shared_classpath: Configuration
    private_classpath: Configuration

    def resolvable(self) -> List[Configuration]:
        return [self.top_level, self.shared_classpath, self.private_classpath]

    def enable_java_modules(self) -> None:
        """Require module-system aware artifacts from every resolvable mod configuration."""
        for config in self.resolvable():
            config.set_attribute(JAVA_MODULE_ATTRIBUTE, True)


def create_mod_configurations(container: ConfigurationContainer) -> ModConfigurations:
    """Create the mod configurations with the flags collection relies on."""
    mod = container.create(
        MOD,
        visible=False,
        can_be_consumed=False,
        can_be_resolved=False,
    )

    top_level = container.create(
        TOP_LEVEL_MODS,
        visible=False,
        can_be_consumed=False,
        transitive=False,
        usage=UsageView.API,
    )
    top_level.extend(mod)

    private_classpath = container.create(
        PRIVATE_MOD_CLASSPATH,
        visible=False,
        can_be_consumed=False,
        usage=UsageView.RUNTIME,
    )
    private_classpath.extend(mod)

    shared_classpath = container.create(
        SHARED_MOD_CLASSPATH,
        can_be_consumed=False,
        usage=UsageView.API,
    )
    shared_classpath.extend(mod)

    return ModConfigurations(
        mod=mod,
        top_level=top_level,
        shared_classpath=shared_classpath,
        private_classpath=private_classpath,
    )


def create_runtime_classpath(container: ConfigurationContainer) -> Configuration:
    """Create the host application's own runtime classpath configuration."""
    return container.create(
        RUNTIME_CLASSPATH,
        can_be_consumed=False,
        usage=UsageView.RUNTIME,
    )
