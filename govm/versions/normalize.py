"""
Version string canonicalization.

Users, marker files and the release catalog spell the same release
differently ("go1.22.0", "v1.22.0", "1.22.0"). Everything inside govm
compares, sorts and names directories by the canonical form only.
"""

RUNTIME_PREFIX = "go"
VERSION_PREFIX = "v"


def canonical(version: str) -> str:
    """
    Strip the leading ``go`` token and/or ``v`` marker, in either order.

    The rest of the string is returned untouched. Stripping repeats until no
    prefix is left, so the result is always a fixed point:
    ``canonical(canonical(x)) == canonical(x)``.

    Example:
        >>> canonical("go1.22.0")
        '1.22.0'
        >>> canonical("v1.22.0")
        '1.22.0'
        >>> canonical("1.23rc1")
        '1.23rc1'
    """
    result = version
    while True:
        if result.startswith(RUNTIME_PREFIX):
            result = result[len(RUNTIME_PREFIX) :]
        elif result.startswith(VERSION_PREFIX):
            result = result[len(VERSION_PREFIX) :]
        else:
            return result


def is_canonical(version: str) -> bool:
    """Check that a string is a non-empty canonical version."""
    return bool(version) and canonical(version) == version


def is_safe_name(version: str) -> bool:
    """
    Check that a canonical version can name a single directory.

    Separators and the "." and ".." entries would let a version string point
    outside its own install directory.
    """
    return (
        is_canonical(version)
        and version not in (".", "..")
        and "/" not in version
        and "\\" not in version
    )


__all__ = [
    "RUNTIME_PREFIX",
    "canonical",
    "is_canonical",
    "is_safe_name",
]
