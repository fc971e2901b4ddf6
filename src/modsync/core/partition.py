"""
Classpath partitioning.

Splits resolved mod artifacts into one shared set, placed at the root of
the mod directory, and one private set per declared mod.

    shared      = sharedModClasspath - topLevelMods
    private(m)  = privateModClasspath(m) - shared

The shared view only follows API edges, so a library becomes shared when
a mod exposes it to its consumers. Libraries a mod only needs at runtime
stay in that mod's private folder, where they cannot clash with another
mod's copy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from .resolver import ResolvedConfiguration
from .types import Dependency, ResolvedArtifact

logger = logging.getLogger(__name__)


@dataclass
class Partition:
    """
    Shared and private artifact sets.

    Attributes:
        shared: Artifacts for the root of the layout, each file once.
        private: Artifacts per declared mod, in declaration order.
    """

    shared: List[ResolvedArtifact] = field(default_factory=list)
    private: Dict[Dependency, List[ResolvedArtifact]] = field(default_factory=dict)

    def shared_keys(self) -> Set[str]:
        return {artifact.key for artifact in self.shared}


def subtract(artifacts: Iterable[ResolvedArtifact], excluded: Set[str]) -> List[ResolvedArtifact]:
    """Drop artifacts whose file is in ``excluded`` and collapse repeated files."""
    seen: Set[str] = set()
    result: List[ResolvedArtifact] = []
    for artifact in artifacts:
        key = artifact.key
        if key in excluded or key in seen:
            continue
        seen.add(key)
        result.append(artifact)
    return result


class ClasspathPartitioner:
    """Classifies resolved artifacts as shared or private."""

    def partition(
        self,
        mods: List[Dependency],
        top_level: ResolvedConfiguration,
        shared_classpath: ResolvedConfiguration,
        private_classpath: ResolvedConfiguration,
    ) -> Partition:
        """
        Partition the resolved mod configurations.

        Args:
            mods: Declared mods, in declaration order.
            top_level: Resolution of the non-transitive top-level configuration.
            shared_classpath: Resolution of the transitive API-view configuration.
            private_classpath: Resolution of the transitive runtime-view configuration.

        Returns:
            Partition with ``shared`` and one ``private`` entry per mod.
        """
        shared = subtract(shared_classpath.artifacts, top_level.files())
        shared_keys = {artifact.key for artifact in shared}

        private: Dict[Dependency, List[ResolvedArtifact]] = {}
        for mod in mods:
            private[mod] = subtract(private_classpath.artifacts_for(mod), shared_keys)
            logger.debug(f"{mod}: {len(private[mod])} private candidates")

        logger.debug(f"{len(shared)} shared candidates")
        return Partition(shared=shared, private=private)
