"""
Mod Collection Pipeline.

Drives the two phases of a collection pass:

    1. Declare  - ``declare()`` / ``declare_host()`` fill the configurations.
    2. Collect  - ``resolve_and_materialize()`` freezes the declarations,
                  resolves, partitions, deduplicates, plans and syncs.

Every pass recomputes everything from the declarations; only the output
directory persists between passes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, List, Optional

from ..config import DEFAULT_SYNC_WORKERS
from .configurations import (
    ConfigurationContainer,
    create_mod_configurations,
    create_runtime_classpath,
)
from .dedup import DeduplicationFilter
from .host import HostClasspath
from .identity import folder_name
from .layout import LayoutPlan, build_layout_plan
from .partition import ClasspathPartitioner, Partition
from .resolver import ArtifactResolver
from .sync import DirectorySynchronizer, SyncReport
from .types import Dependency

module_logger = logging.getLogger(__name__)


@dataclass
class CollectResult:
    """
    Outcome of one collection pass.

    Attributes:
        output: The synchronized output directory.
        partition: Deduplicated shared/private artifact sets.
        plan: Layout plan applied to the output directory.
        report: What the synchronizer changed.
    """

    output: Path
    partition: Partition
    plan: LayoutPlan
    report: SyncReport


class ModCollector:
    """
    Collects declared mods into an output directory.

    Attributes:
        resolver: Resolver used for every configuration.
        output: Root of the mod directory.
        host: Host runtime classpath used for deduplication.
        java_modules: Require module-system aware artifacts.

    Example:
        ```python
        collector = ModCollector(resolver, Path("build/mods"))
        collector.declare(Dependency(name="basemod", version="1.2.0"))
        result = collector.resolve_and_materialize()
        print(result.report.writes)
        ```
    """

    def __init__(
        self,
        resolver: ArtifactResolver,
        output: Path,
        host: Optional[HostClasspath] = None,
        java_modules: bool = False,
        sync_workers: int = DEFAULT_SYNC_WORKERS,
        logger: Optional[logging.Logger] = None,
    ):
        self.resolver = resolver
        self.output = output
        self.java_modules = java_modules
        self.sync_workers = sync_workers
        self.logger = logger or module_logger

        self.configurations = ConfigurationContainer()
        self.mods = create_mod_configurations(self.configurations)
        self.runtime_classpath = create_runtime_classpath(self.configurations)

        host = host or HostClasspath()
        if host.configuration is None:
            host = replace(host, configuration=self.runtime_classpath)
        self.host = host

    # ------------------------------------------------------------------
    # Phase 1: declaration
    # ------------------------------------------------------------------

    def declare(self, dependency: Dependency) -> None:
        """
        Declare a mod.

        Raises:
            DeclarationError: If resolution has already started.
        """
        self.mods.mod.add(dependency)

    def declare_all(self, dependencies: Iterable[Dependency]) -> None:
        for dependency in dependencies:
            self.declare(dependency)

    def declare_host(self, dependency: Dependency) -> None:
        """Declare a dependency on the host application's runtime classpath."""
        self.runtime_classpath.add(dependency)

    @property
    def declared(self) -> List[Dependency]:
        return self.mods.mod.declared

    # ------------------------------------------------------------------
    # Phase 2: resolution and materialization
    # ------------------------------------------------------------------

    def _begin_resolution(self) -> None:
        if self.configurations.frozen:
            return
        if self.java_modules:
            self.mods.enable_java_modules()
        self.configurations.freeze()

    def partition(self) -> Partition:
        """Resolve the mod configurations and return the deduplicated partition."""
        self._begin_resolution()

        declared = self.declared
        for dep in declared:
            self.logger.info(f"Collecting mod {dep} into {folder_name(dep)}/")

        top_level = self.resolver.resolve(self.mods.top_level)
        shared_classpath = self.resolver.resolve(self.mods.shared_classpath)
        private_classpath = self.resolver.resolve(self.mods.private_classpath)

        raw = ClasspathPartitioner().partition(declared, top_level, shared_classpath, private_classpath)
        host_files = self.host.host_runtime_artifacts(self.resolver)
        return DeduplicationFilter(host_files).apply(raw)

    def plan(self) -> LayoutPlan:
        """Compute the layout plan without touching the output directory."""
        return build_layout_plan(self.partition())

    def resolve_and_materialize(self, dry_run: bool = False) -> CollectResult:
        """
        Run a full collection pass.

        Args:
            dry_run: Compute the sync report without writing anything.

        Returns:
            CollectResult for the pass.

        Raises:
            ResolutionError: If a configuration cannot be resolved.
            LayoutCollisionError: If two files claim one target path.
            SyncIOError: If the output directory cannot be reconciled.
        """
        partition = self.partition()
        plan = build_layout_plan(partition)
        synchronizer = DirectorySynchronizer(self.output, max_workers=self.sync_workers)
        report = synchronizer.sync(plan, dry_run=dry_run)

        if report.changed:
            self.logger.info(f"Mod directory {self.output} updated ({report.writes} changes)")
        else:
            self.logger.info(f"Mod directory {self.output} is up to date")

        return CollectResult(output=self.output, partition=partition, plan=plan, report=report)
