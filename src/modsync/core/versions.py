"""
Version ordering.

Used by the resolver to pick a single version when a configuration
reaches the same module through several paths. Ordering follows
semantic versioning: numeric release components first, pre-releases
before the matching release, build metadata ignored. Anything that is
not numeric falls back to string comparison so that every version string
still has a total order.
"""

from __future__ import annotations

from functools import total_ordering
from typing import Iterable, Tuple, Union

from ..config import UNSPECIFIED_VERSION

_Part = Tuple[int, Union[int, str]]


def _split_identifiers(text: str) -> Tuple[_Part, ...]:
    parts = []
    for piece in text.split("."):
        if piece.isdigit():
            parts.append((0, int(piece)))
        else:
            parts.append((1, piece))
    return tuple(parts)


@total_ordering
class ModVersion:
    """
    A comparable module version.

    Attributes:
        text: The original version string.
        release: Release components ("1.2.3" -> (1, 2, 3)).
        pre_release: Pre-release label ("1.0.0-rc.1" -> "rc.1"), or "".
        build: Build metadata ("1.0.0+abc" -> "abc"), or "".
    """

    def __init__(self, text: str):
        if not text or text.strip() != text:
            raise ValueError(f"Invalid version string: {text!r}")
        self.text = text
        core, _, self.build = text.partition("+")
        release, _, self.pre_release = core.partition("-")
        self.release = _split_identifiers(release)

    def _key(self):
        # Trailing zero release components are not significant: 1.0 == 1.0.0
        release = list(self.release)
        while len(release) > 1 and release[-1] == (0, 0):
            release.pop()
        pre = (1,) if not self.pre_release else (0, _split_identifiers(self.pre_release))
        return tuple(release), pre

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "ModVersion") -> bool:
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"ModVersion({self.text!r})"


def highest(versions: Iterable[str]) -> str:
    """
    Pick the highest version string.

    A published version always beats "unspecified"; local modules are
    only selected when nothing else is available.

    Raises:
        ValueError: If no versions are given.
    """
    candidates = list(dict.fromkeys(versions))
    if not candidates:
        raise ValueError("No versions to choose from")

    published = [v for v in candidates if v != UNSPECIFIED_VERSION]
    if not published:
        return UNSPECIFIED_VERSION
    return max(published, key=ModVersion)
