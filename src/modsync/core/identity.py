"""
Module identity.

Maps a dependency to the folder holding its private classpath.
"""

from ..config import UNSPECIFIED_VERSION
from .types import Dependency


def folder_name(dependency: Dependency) -> str:
    """
    Canonical folder key for a dependency.

    Local modules (version "unspecified") use their bare name; published
    modules use "name-version".
    """
    if dependency.version == UNSPECIFIED_VERSION:
        return dependency.name
    return f"{dependency.name}-{dependency.version}"
