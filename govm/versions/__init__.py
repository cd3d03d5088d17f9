"""
Version handling for govm.

Canonicalization, ordering and the resolution precedence chain. Nothing in
this package touches the network, and only resolution reads files.
"""

from .normalize import canonical, is_canonical, is_safe_name
from .ordering import VersionKey, parse, compare, sort_descending
from .resolution import (
    SelectionSource,
    ResolutionContext,
    Resolution,
    read_marker,
    locate_scoped_pin,
    resolve_with_source,
    resolve,
)

__all__ = [
    "canonical",
    "is_canonical",
    "is_safe_name",
    "VersionKey",
    "parse",
    "compare",
    "sort_descending",
    "SelectionSource",
    "ResolutionContext",
    "Resolution",
    "read_marker",
    "locate_scoped_pin",
    "resolve_with_source",
    "resolve",
]
