"""
Deduplication against the host classpath.
"""

from __future__ import annotations

import logging
from typing import Set

from .partition import Partition, subtract

logger = logging.getLogger(__name__)


class DeduplicationFilter:
    """
    Removes artifacts the host application already supplies.

    Shared artifacts are filtered first; each private set then loses both
    host files and every file already decided to be shared.
    """

    def __init__(self, host_files: Set[str]):
        self.host_files = set(host_files)

    def apply(self, partition: Partition) -> Partition:
        shared = subtract(partition.shared, self.host_files)
        dropped = len(partition.shared) - len(shared)
        if dropped:
            logger.info(f"Skipping {dropped} shared artifact(s) already on the host classpath")

        excluded = self.host_files | {artifact.key for artifact in shared}
        private = {}
        for mod, artifacts in partition.private.items():
            private[mod] = subtract(artifacts, excluded)

        return Partition(shared=shared, private=private)
