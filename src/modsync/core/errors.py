"""
Exception hierarchy for modsync.

Every failure in the declare -> resolve -> materialize pipeline is fatal
to the current pass. Library code raises these; only the CLI catches
them and turns them into an exit code.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class ModSyncError(Exception):
    """Base class for all modsync failures."""


class DeclarationError(ModSyncError, ValueError):
    """
    Raised when dependency declarations are invalid.

    This covers malformed manifests and any attempt to declare a
    dependency after the resolution phase has started.
    """


class ResolutionError(ModSyncError):
    """
    Raised when a configuration cannot be resolved to concrete artifacts.

    Attributes:
        dependency_name: Name of the dependency that failed.
        message: Human-readable error message.
    """

    def __init__(self, dependency_name: str, message: str):
        self.dependency_name = dependency_name
        self.message = message
        super().__init__(f"Dependency '{dependency_name}': {message}")


class LayoutCollisionError(ModSyncError):
    """
    Raised when two distinct files would land on the same target path.

    Attributes:
        target: Relative target path inside the output directory.
        first: Source file already assigned to the target, or the mod folder
            holding it.
        second: Conflicting source file, or the mod folder claiming the name.
    """

    def __init__(self, target: str, first: Union[Path, str], second: Union[Path, str]):
        self.target = target
        self.first = first
        self.second = second
        super().__init__(
            f"Ambiguous artifact for '{target}': {first} conflicts with {second}"
        )


class SyncIOError(ModSyncError):
    """
    Raised when the output directory cannot be reconciled.

    The directory is left in whatever state was reached; the sync must be
    run again.

    Attributes:
        operation: What was being attempted (copy, remove, mkdir, ...).
        path: Filesystem path the operation failed on.
    """

    def __init__(self, operation: str, path: Path, cause: Optional[OSError] = None):
        self.operation = operation
        self.path = path
        self.cause = cause
        detail = f": {cause.strerror or cause}" if cause is not None else ""
        super().__init__(f"Failed to {operation} {path}{detail}")


class TaskError(ModSyncError):
    """Raised when the task graph is misused or a launched task fails."""
