"""
Host runtime classpath.

Collects the files the consuming application already puts on its own
runtime classpath. Anything listed here is implicitly available to mods
and must never be copied into the mod directory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set

from .configurations import Configuration
from .resolver import ArtifactResolver
from .types import file_key

logger = logging.getLogger(__name__)


@dataclass
class HostClasspath:
    """
    The host application's runtime classpath plus its build outputs.

    Attributes:
        configuration: Host runtime configuration resolved with the runtime view.
        classpath: Extra files placed on the host classpath directly.
        outputs: The host's own build artifacts (e.g. its jar).
    """

    configuration: Optional[Configuration] = None
    classpath: List[Path] = field(default_factory=list)
    outputs: List[Path] = field(default_factory=list)

    def host_runtime_artifacts(self, resolver: ArtifactResolver) -> Set[str]:
        """
        File identity keys of everything the host already supplies.

        Build outputs are included whether or not they exist yet; they are
        produced by the host build and must never be duplicated.
        """
        keys: Set[str] = set()
        if self.configuration is not None and self.configuration.dependencies:
            keys |= resolver.resolve(self.configuration).files()
        for path in self.classpath:
            if not path.exists():
                logger.warning(f"Host classpath entry does not exist: {path}")
            keys.add(file_key(path))
        for path in self.outputs:
            keys.add(file_key(path))
        logger.debug(f"Host supplies {len(keys)} files")
        return keys
