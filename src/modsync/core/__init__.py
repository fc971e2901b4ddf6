"""
Core collection engine for modsync.

Declares mods on dependency configurations, resolves them into shared and
private classpaths, and keeps an output directory in sync with the result.
"""

from .errors import (
    DeclarationError,
    LayoutCollisionError,
    ModSyncError,
    ResolutionError,
    SyncIOError,
    TaskError,
)
from .identity import folder_name
from .layout import LayoutPlan, build_layout_plan
from .pipeline import CollectResult, ModCollector
from .project import ModProject
from .resolver import RepositoryResolver, ResolvedConfiguration
from .sync import DirectorySynchronizer, SyncReport
from .types import Classification, Dependency, LayoutEntry, ResolvedArtifact

__all__ = [
    "Classification",
    "CollectResult",
    "DeclarationError",
    "Dependency",
    "DirectorySynchronizer",
    "LayoutCollisionError",
    "LayoutEntry",
    "LayoutPlan",
    "ModCollector",
    "ModProject",
    "ModSyncError",
    "RepositoryResolver",
    "ResolutionError",
    "ResolvedArtifact",
    "ResolvedConfiguration",
    "SyncIOError",
    "SyncReport",
    "TaskError",
    "build_layout_plan",
    "folder_name",
]
