"""
Global Configuration and Defaults.

Centralizes the file names, directory defaults and tuning knobs used
across modsync, plus the loader for the optional per-project settings
file (.modsync/config.yaml).
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

# --- File Names ---

# Project manifest declaring mods, host classpath and repository
MANIFEST_NAME = "modsync.toml"

# Per-project settings (log level, sync workers)
SETTINGS_PATH = Path(".modsync") / "config.yaml"

# --- Layout Defaults ---

# Output directory relative to the project root (mirrors "<buildDir>/mods")
DEFAULT_OUTPUT_DIR = Path("build") / "mods"

# Version marker for local, in-development modules
UNSPECIFIED_VERSION = "unspecified"

# --- Sync Tuning ---

# Read size used when hashing artifact contents
HASH_CHUNK_SIZE = 1024 * 1024

# Parallel copy workers; 1 keeps the sync strictly sequential
DEFAULT_SYNC_WORKERS = 1


@dataclass
class Settings:
    """
    User-tunable settings loaded from .modsync/config.yaml.

    Attributes:
        log_level: Logging level name used by the CLI.
        sync_workers: Number of threads used for copying artifacts.
    """

    log_level: str = "WARNING"
    sync_workers: int = DEFAULT_SYNC_WORKERS

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """
        Build settings from a parsed YAML mapping, ignoring unknown keys.

        Raises:
            ValueError: If sync_workers is not an integer.
        """
        value = data.get("sync_workers", DEFAULT_SYNC_WORKERS)
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise ValueError(f"Invalid sync_workers: {value!r} (expected an integer)")
        try:
            workers = int(value)
        except ValueError:
            raise ValueError(f"Invalid sync_workers: {value!r} (expected an integer)") from None
        return cls(
            log_level=str(data.get("log_level", "WARNING")).upper(),
            sync_workers=max(1, workers),
        )


def load_settings(project_root: Path, path: Optional[Path] = None) -> Settings:
    """
    Load settings for a project.

    Args:
        project_root: Directory containing the project.
        path: Explicit settings file, overriding the default location.

    Returns:
        Settings instance. Defaults are returned when the file is absent.

    Raises:
        ValueError: If the file exists but is not valid YAML.
    """
    settings_path = path or (project_root / SETTINGS_PATH)
    if not settings_path.exists():
        return Settings()

    try:
        with open(settings_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse {settings_path}: {e}")

    if not isinstance(data, dict):
        logger.warning(f"Ignoring settings in {settings_path}: expected a mapping")
        return Settings()

    return Settings.from_dict(data)
