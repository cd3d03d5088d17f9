"""
Version ordering.

Go release names are ``major.minor[.patch][prerelease]`` (``1.22.0``,
``1.21``, ``1.23rc1``). ``parse`` turns a canonical name into a
``VersionKey``. Malformed names are not an error: they sort below every
real release, so listing a directory with odd entries never fails.
"""

import re
from typing import Iterable, List, NamedTuple, Tuple

_VERSION_RE = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?(.*)$")


class VersionKey(NamedTuple):
    """
    Comparable key for a version.

    At equal ``major.minor.patch`` a stable release (empty prerelease) is
    greater than any prerelease; two prereleases compare as strings.
    """

    major: int
    minor: int
    patch: int
    prerelease: str

    def _order(self) -> Tuple[int, int, int, bool, str]:
        return (
            self.major,
            self.minor,
            self.patch,
            self.prerelease == "",
            self.prerelease,
        )

    def __lt__(self, other):
        if not isinstance(other, VersionKey):
            return NotImplemented
        return self._order() < other._order()

    def __le__(self, other):
        if not isinstance(other, VersionKey):
            return NotImplemented
        return self._order() <= other._order()

    def __gt__(self, other):
        if not isinstance(other, VersionKey):
            return NotImplemented
        return self._order() > other._order()

    def __ge__(self, other):
        if not isinstance(other, VersionKey):
            return NotImplemented
        return self._order() >= other._order()


def parse(version: str) -> VersionKey:
    """
    Parse a canonical version string into a ``VersionKey``.

    Never raises. A missing patch component counts as ``0``; anything that
    does not start with ``major.minor`` maps to ``(0, 0, 0, version)``.

    Example:
        >>> parse("1.23rc1")
        VersionKey(major=1, minor=23, patch=0, prerelease='rc1')
        >>> parse("invalid")
        VersionKey(major=0, minor=0, patch=0, prerelease='invalid')
    """
    match = _VERSION_RE.match(version)
    if not match:
        return VersionKey(0, 0, 0, version)

    major, minor, patch, suffix = match.groups()
    return VersionKey(int(major), int(minor), int(patch or 0), suffix)


def compare(a: str, b: str) -> int:
    """
    Compare two canonical versions.

    Returns:
        -1 if a < b, 0 if equal, 1 if a > b
    """
    key_a, key_b = parse(a), parse(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def sort_descending(versions: Iterable[str]) -> List[str]:
    """
    Sort canonical versions, most recent first.

    Versions with equal keys are ordered by their canonical string so the
    result is deterministic.
    """
    return sorted(versions, key=lambda v: (parse(v)._order(), v), reverse=True)


__all__ = [
    "VersionKey",
    "parse",
    "compare",
    "sort_descending",
]
