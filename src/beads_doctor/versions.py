"""Dotted version comparison.

Versions are compared segment by segment as integers, never as strings,
so ``0.20.1`` sorts after ``0.3.0``. Missing trailing segments count as
zero: ``1.2`` and ``1.2.0`` are equal.
"""

from __future__ import annotations

import re
from itertools import zip_longest

_SEGMENT_RE = re.compile(r"[0-9]+")


class InvalidVersionError(ValueError):
    """Raised when a version string has a non-numeric segment."""


def parse_version(version: str) -> tuple[int, ...]:
    """Split *version* on dots into integer segments.

    The empty string parses to ``()``.
    """
    if version == "":
        return ()
    segments: list[int] = []
    for raw in version.split("."):
        if not _SEGMENT_RE.fullmatch(raw):
            msg = f"Invalid version {version!r}: segment {raw!r} is not a non-negative integer"
            raise InvalidVersionError(msg)
        segments.append(int(raw))
    return tuple(segments)


def _padded_pairs(v1: str, v2: str) -> list[tuple[int, int]]:
    return list(zip_longest(parse_version(v1), parse_version(v2), fillvalue=0))


def compare_versions(v1: str, v2: str) -> int:
    """Return -1, 0 or 1 as *v1* is older than, equal to, or newer than *v2*."""
    for a, b in _padded_pairs(v1, v2):
        if a != b:
            return 1 if a > b else -1
    return 0


def first_difference(v1: str, v2: str) -> int | None:
    """Index of the first segment where *v1* and *v2* differ, or None if equal."""
    for index, (a, b) in enumerate(_padded_pairs(v1, v2)):
        if a != b:
            return index
    return None
