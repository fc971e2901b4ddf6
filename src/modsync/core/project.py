"""
Project wiring.

Builds a ready-to-run collector and task graph from a project directory
containing modsync.toml.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional

from ..config import MANIFEST_NAME, Settings, load_settings
from .errors import TaskError
from .host import HostClasspath
from .manifest import APPLICATION_PLUGIN, ProjectManifest
from .pipeline import ModCollector
from .repository import ModuleRepository
from .resolver import RepositoryResolver
from .tasks import COLLECT_TASK, RUN_TASK, TaskGraph

logger = logging.getLogger(__name__)


class ModProject:
    """
    A project directory with its manifest and settings.

    Attributes:
        root: Project root directory.
        manifest: Parsed modsync.toml.
        settings: Parsed .modsync/config.yaml.
    """

    def __init__(self, root: Path, manifest: ProjectManifest, settings: Optional[Settings] = None):
        self.root = root.resolve()
        self.manifest = manifest
        self.settings = settings or Settings()

    @classmethod
    def load(cls, root: Path) -> "ModProject":
        root = root.resolve()
        manifest = ProjectManifest.load(root / MANIFEST_NAME)
        return cls(root, manifest, load_settings(root))

    @property
    def output_dir(self) -> Path:
        return self.root / self.manifest.output

    def repository(self) -> ModuleRepository:
        """The module index plus every locally declared mod."""
        if self.manifest.repository_index:
            repo = ModuleRepository.load(self.root / self.manifest.repository_index)
        else:
            repo = ModuleRepository()
        for spec in self.manifest.local_mods():
            repo.add(spec.as_module(self.root))
        return repo

    def host(self) -> HostClasspath:
        return HostClasspath(
            classpath=[self.root / p for p in self.manifest.host.classpath],
            outputs=[self.root / p for p in self.manifest.host.outputs],
        )

    def collector(self, logger: Optional[logging.Logger] = None) -> ModCollector:
        """A collector with every declaration from the manifest already made."""
        collector = ModCollector(
            resolver=RepositoryResolver(self.repository()),
            output=self.output_dir,
            host=self.host(),
            java_modules=self.manifest.tool_config.java_modules,
            sync_workers=self.settings.sync_workers,
            logger=logger,
        )
        collector.declare_all(spec.dependency for spec in self.manifest.mods.values())
        for dep in self.manifest.host_dependencies():
            collector.declare_host(dep)
        return collector

    def launch(self) -> int:
        """
        Run the application command from [application].

        Raises:
            TaskError: If no command is configured or it exits non-zero.
        """
        command = self.manifest.application_command
        if not command:
            raise TaskError("No [application] command configured")
        logger.info(f"Launching {' '.join(command)}")
        try:
            completed = subprocess.run(command, cwd=self.root)
        except OSError as e:
            raise TaskError(f"Failed to launch {command[0]}: {e}") from e
        if completed.returncode != 0:
            raise TaskError(f"Application exited with code {completed.returncode}")
        return completed.returncode

    def tasks(self, collector: Optional[ModCollector] = None) -> TaskGraph:
        """
        Register the project's tasks.

        ``collectMods`` always exists. With the application plugin, ``run``
        exists too and depends on ``collectMods``.
        """
        collector = collector or self.collector()
        graph = TaskGraph()
        graph.register(
            COLLECT_TASK,
            collector.resolve_and_materialize,
            description="Collects mods into the mod directory",
        )
        if self.manifest.has_plugin(APPLICATION_PLUGIN):
            graph.register(RUN_TASK, self.launch, description="Runs the application")
            graph.depends_on(RUN_TASK, COLLECT_TASK)
        return graph
