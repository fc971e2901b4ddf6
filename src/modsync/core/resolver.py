"""
Artifact Resolver.

Turns a configuration's declared dependencies into concrete artifact
files. The collection pipeline only depends on the ``ArtifactResolver``
protocol; ``RepositoryResolver`` is the bundled implementation backed by a
local ``ModuleRepository``.

Resolution Strategy:
    1. Version selection - When several versions of one module are
       reachable, the highest requested version wins.
    2. Traversal - The API view follows only ``api`` edges; the runtime
       view follows ``api`` and ``implementation`` edges. Non-transitive
       configurations stop at the declared modules.
    3. Artifacts - Every file of every reached module, checked against the
       configuration's attributes.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Set

import networkx as nx

from .configurations import JAVA_MODULE_ATTRIBUTE, Configuration
from .errors import DeclarationError, ResolutionError
from .repository import ModuleDescriptor, ModuleRepository
from .types import Dependency, DependencyScope, ResolvedArtifact, UsageView
from .versions import highest

logger = logging.getLogger(__name__)


@dataclass
class ResolvedConfiguration:
    """
    Result of resolving one configuration.

    Attributes:
        name: Name of the resolved configuration.
        roots: Artifacts reachable from each declared dependency, keyed by
            the dependency as it was declared.
        selected: Module versions chosen by conflict resolution.
    """

    name: str
    roots: Dict[Dependency, List[ResolvedArtifact]] = field(default_factory=dict)
    selected: Dict[str, str] = field(default_factory=dict)

    @property
    def artifacts(self) -> List[ResolvedArtifact]:
        """All artifacts, each physical file once, in resolution order."""
        seen: Set[str] = set()
        result: List[ResolvedArtifact] = []
        for artifacts in self.roots.values():
            for artifact in artifacts:
                if artifact.key not in seen:
                    seen.add(artifact.key)
                    result.append(artifact)
        return result

    def artifacts_for(self, dependency: Dependency) -> List[ResolvedArtifact]:
        """Artifacts reachable from a single declared dependency."""
        if dependency not in self.roots:
            raise KeyError(f"{dependency} is not declared on configuration '{self.name}'")
        return list(self.roots[dependency])

    def files(self) -> Set[str]:
        """File identity keys of every resolved artifact."""
        return {artifact.key for artifacts in self.roots.values() for artifact in artifacts}


class ArtifactResolver(Protocol):
    """Anything able to resolve a configuration into artifacts."""

    def resolve(self, configuration: Configuration) -> ResolvedConfiguration:
        ...


class RepositoryResolver:
    """
    Resolves configurations against a local ``ModuleRepository``.

    Example:
        ```python
        resolver = RepositoryResolver(ModuleRepository.load(index_path))
        resolved = resolver.resolve(mods.shared_classpath)
        for artifact in resolved.artifacts:
            print(artifact.file)
        ```
    """

    def __init__(self, repository: ModuleRepository):
        self.repository = repository

    def resolve(self, configuration: Configuration) -> ResolvedConfiguration:
        """
        Resolve every dependency of ``configuration``.

        Raises:
            DeclarationError: If the configuration is not resolvable.
            ResolutionError: If a module or file is missing, or an artifact
                does not satisfy the configuration's attributes.
        """
        if not configuration.can_be_resolved:
            raise DeclarationError(f"Configuration '{configuration.name}' cannot be resolved directly")

        usage = configuration.usage or UsageView.RUNTIME
        roots = configuration.dependencies
        graph, selected = self._build_graph(roots, usage, configuration.transitive)

        result = ResolvedConfiguration(name=configuration.name, selected=selected)
        require_module = bool(configuration.attributes.get(JAVA_MODULE_ATTRIBUTE))

        for root in roots:
            start = self._selected(root, selected)
            modules = list(nx.bfs_tree(graph, start)) if configuration.transitive else [start]
            artifacts: List[ResolvedArtifact] = []
            for module in modules:
                artifacts.extend(self._artifacts(module, require_module))
            result.roots[root] = artifacts

        logger.debug(
            f"Resolved '{configuration.name}' ({usage.value}): "
            f"{len(roots)} roots, {len(result.artifacts)} artifacts"
        )
        return result

    @staticmethod
    def _selected(dependency: Dependency, selected: Dict[str, str]) -> Dependency:
        version = selected.get(dependency.name, dependency.version)
        if version == dependency.version:
            return dependency
        return Dependency(name=dependency.name, version=version)

    def _descriptor(self, dependency: Dependency, required_by: Optional[Dependency] = None) -> ModuleDescriptor:
        descriptor = self.repository.get(dependency)
        if descriptor is None:
            detail = f" (required by {required_by})" if required_by else ""
            raise ResolutionError(dependency.name, f"Module {dependency} not found in repository{detail}")
        return descriptor

    def _build_graph(
        self,
        roots: List[Dependency],
        usage: UsageView,
        transitive: bool,
    ) -> tuple[nx.DiGraph, Dict[str, str]]:
        """
        Select versions and build the graph of selected modules.

        Each pass walks the graph under the previous pass's selection and
        collects the versions requested by the modules it reached. Requests
        made only by evicted versions therefore drop out on the next pass.
        Passes repeat until the selection no longer changes.

        Raises:
            ResolutionError: If the selection never settles, or a selected
                module is missing from the repository.
        """
        selected: Dict[str, str] = {}
        seen: List[Dict[str, str]] = []

        while True:
            graph, requested = self._traverse(roots, selected, usage, transitive)
            picked = self._pick(requested)
            if picked == selected:
                break
            if picked in seen:
                names = set(picked) | set(selected)
                unstable = sorted(n for n in names if picked.get(n) != selected.get(n))
                raise ResolutionError(
                    unstable[0],
                    f"Version selection does not settle for {', '.join(unstable)}",
                )
            seen.append(selected)
            selected = picked

        for module in graph.nodes:
            requirers = sorted(graph.predecessors(module), key=str)
            self._descriptor(module, required_by=requirers[0] if requirers else None)
        return graph, selected

    def _traverse(
        self,
        roots: List[Dependency],
        selected: Dict[str, str],
        usage: UsageView,
        transitive: bool,
    ) -> tuple[nx.DiGraph, Dict[str, Set[str]]]:
        """One pass: the graph under ``selected`` and every version it requests."""
        graph = nx.DiGraph()
        requested: Dict[str, Set[str]] = {}
        for root in roots:
            requested.setdefault(root.name, set()).add(root.version)

        queue = deque(self._selected(root, selected) for root in roots)
        visited: Set[Dependency] = set()
        while queue:
            module = queue.popleft()
            if module in visited:
                continue
            visited.add(module)
            graph.add_node(module)

            descriptor = self.repository.get(module)
            if descriptor is None or not transitive:
                continue

            for target, scope in descriptor.edges():
                if usage == UsageView.API and scope != DependencyScope.API:
                    continue
                requested.setdefault(target.name, set()).add(target.version)
                chosen = self._selected(target, selected)
                graph.add_edge(module, chosen, scope=scope.value)
                queue.append(chosen)

        return graph, requested

    @staticmethod
    def _pick(candidates: Dict[str, Set[str]]) -> Dict[str, str]:
        return {name: highest(sorted(versions)) for name, versions in candidates.items()}

    def _artifacts(self, module: Dependency, require_module: bool) -> List[ResolvedArtifact]:
        descriptor = self._descriptor(module)
        artifacts = []
        for path in descriptor.files:
            if not path.is_file():
                raise ResolutionError(module.name, f"Artifact file missing: {path}")
            if require_module and not descriptor.module_name:
                raise ResolutionError(
                    module.name,
                    f"Attribute mismatch: {JAVA_MODULE_ATTRIBUTE}=true requested but "
                    f"{path.name} does not declare a module name",
                )
            artifacts.append(
                ResolvedArtifact(file=path, dependency=module, module_name=descriptor.module_name)
            )
        return artifacts
