"""
Directory Synchronizer.

Makes an output directory match a layout plan exactly:

    - Missing targets are copied from their source.
    - Stale targets (content differs) are replaced.
    - Matching targets are left alone, so an unchanged rerun writes nothing.
    - Anything under the root that is not in the plan is deleted.

The synchronizer owns everything below its root. A failed sync leaves the
directory in whatever state it reached and must simply be run again.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Set, Tuple

import xxhash

from ..config import DEFAULT_SYNC_WORKERS, HASH_CHUNK_SIZE
from .errors import SyncIOError
from .layout import LayoutPlan

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    """
    What a sync did (or, for a dry run, would do).

    Attributes:
        copied: Targets that did not exist and were created.
        updated: Targets whose content was stale and was replaced.
        unchanged: Targets already matching their source.
        removed: Paths deleted because they are not part of the plan.
        dry_run: True if nothing was written.
    """

    copied: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def writes(self) -> int:
        """Number of filesystem mutations below the root."""
        return len(self.copied) + len(self.updated) + len(self.removed)

    @property
    def changed(self) -> bool:
        return self.writes > 0


def file_digest(path: Path) -> str:
    """xxh64 digest of a file's content."""
    digest = xxhash.xxh64()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(HASH_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def same_content(source: Path, target: Path) -> bool:
    """True if ``target`` is a regular file with the same bytes as ``source``."""
    if target.is_symlink() or not target.is_file():
        return False
    if source.stat().st_size != target.stat().st_size:
        return False
    return file_digest(source) == file_digest(target)


class DirectorySynchronizer:
    """
    Applies layout plans to a single output root.

    Example:
        ```python
        synchronizer = DirectorySynchronizer(Path("build/mods"))
        report = synchronizer.sync(plan)
        print(f"{report.writes} changes")
        ```
    """

    def __init__(self, root: Path, max_workers: int = DEFAULT_SYNC_WORKERS):
        self.root = root
        self.max_workers = max(1, max_workers)

    def sync(self, plan: LayoutPlan, dry_run: bool = False) -> SyncReport:
        """
        Reconcile the output root with ``plan``.

        Args:
            plan: Complete desired state of the directory.
            dry_run: Compute the report without touching the filesystem.

        Returns:
            SyncReport describing the changes.

        Raises:
            SyncIOError: On any filesystem failure. The sync is aborted.
        """
        report = SyncReport(dry_run=dry_run)
        desired = {entry.target: entry.source for entry in plan}
        desired_dirs = self._parent_dirs(desired)

        if self.root.exists() and not self.root.is_dir():
            raise SyncIOError("use as output directory", self.root)

        if self.root.is_dir():
            self._prune(self.root, "", desired, desired_dirs, report)
        elif not dry_run:
            self._guard("create directory", self.root, lambda: self.root.mkdir(parents=True))

        pending = self._classify(desired, report)
        if not dry_run and pending:
            self._copy_all(pending)

        logger.info(
            f"Synced {self.root}: {len(report.copied)} copied, {len(report.updated)} updated, "
            f"{len(report.removed)} removed, {len(report.unchanged)} unchanged"
        )
        return report

    @staticmethod
    def _parent_dirs(desired: Dict[str, Path]) -> Set[str]:
        dirs: Set[str] = set()
        for target in desired:
            parts = target.split("/")[:-1]
            for i in range(1, len(parts) + 1):
                dirs.add("/".join(parts[:i]))
        return dirs

    def _prune(
        self,
        directory: Path,
        prefix: str,
        desired: Dict[str, Path],
        desired_dirs: Set[str],
        report: SyncReport,
    ) -> None:
        """Delete everything below ``directory`` that the plan does not mention."""
        try:
            children = sorted(directory.iterdir())
        except OSError as e:
            raise SyncIOError("list", directory, e) from e

        for child in children:
            rel = f"{prefix}{child.name}"
            if child.is_dir() and not child.is_symlink():
                if rel in desired_dirs:
                    self._prune(child, f"{rel}/", desired, desired_dirs, report)
                    continue
                logger.debug(f"Removing stale directory {rel}/")
                report.removed.append(f"{rel}/")
                if not report.dry_run:
                    self._guard("remove", child, lambda: shutil.rmtree(child))
            elif rel not in desired or child.is_symlink():
                logger.debug(f"Removing stale file {rel}")
                report.removed.append(rel)
                if not report.dry_run:
                    self._guard("remove", child, child.unlink)

    def _classify(self, desired: Dict[str, Path], report: SyncReport) -> List[Tuple[Path, Path]]:
        """Sort targets into copied / updated / unchanged and return the work list."""
        pending: List[Tuple[Path, Path]] = []
        for target, source in desired.items():
            destination = self.root / target
            if not source.is_file():
                raise SyncIOError("read", source)
            try:
                exists = destination.is_file() and not destination.is_symlink()
                if exists and same_content(source, destination):
                    report.unchanged.append(target)
                    continue
            except OSError as e:
                raise SyncIOError("compare", destination, e) from e

            (report.updated if exists else report.copied).append(target)
            pending.append((source, destination))
        return pending

    def _copy_all(self, pending: List[Tuple[Path, Path]]) -> None:
        for parent in sorted({destination.parent for _, destination in pending}):
            self._guard("create directory", parent, lambda: parent.mkdir(parents=True, exist_ok=True))

        if self.max_workers == 1 or len(pending) == 1:
            for source, destination in pending:
                self._copy(source, destination)
            return

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [pool.submit(self._copy, source, destination) for source, destination in pending]
            for future in futures:
                future.result()

    def _copy(self, source: Path, destination: Path) -> None:
        """Copy via a temporary sibling so readers never see a half-written target."""
        logger.debug(f"Copying {source} -> {destination}")
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=".modsync-", dir=destination.parent)
            os.close(fd)
            shutil.copy2(source, tmp_name)
            os.replace(tmp_name, destination)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise SyncIOError("copy", source, e) from e

    @staticmethod
    def _guard(operation: str, path: Path, action) -> None:
        try:
            action()
        except OSError as e:
            raise SyncIOError(operation, path, e) from e
