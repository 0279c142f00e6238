"""Header detection, deprecated-file filtering and duplicate detection."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

HEADER_SUFFIXES: frozenset[str] = frozenset({".h", ".hpp"})

# Public headers (and their implementations) removed from the GN build but
# still present in the Bazel graph.
DEPRECATED_FILES: frozenset[str] = frozenset(
    {
        "include/core/SkDrawLooper.h",
        "include/effects/SkBlurDrawLooper.h",
        "include/effects/SkLayerDrawLooper.h",
        "src/core/SkDrawLooper.cpp",
        "src/effects/SkBlurDrawLooper.cpp",
        "src/effects/SkLayerDrawLooper.cpp",
    },
)


def is_header_file(path: str) -> bool:
    """Return True when ``path`` has a C/C++ header extension (case-insensitive)."""
    return PurePosixPath(path).suffix.lower() in HEADER_SUFFIXES


def file_list_contains_only_cpp_header_files(paths: Sequence[str]) -> bool:
    return all(is_header_file(path) for path in paths)


def is_source_file_deprecated(path: str) -> bool:
    return path in DEPRECATED_FILES


def filter_deprecated_files(paths: Sequence[str]) -> list[str]:
    """Return ``paths`` without deprecated entries, preserving order."""
    return [path for path in paths if not is_source_file_deprecated(path)]


def find_duplicate(paths: Sequence[str]) -> tuple[str, bool]:
    """Find the first path that occurs again, comparing case-insensitively.

    Args:
        paths (Sequence[str]): Paths to scan, in order.

    Returns:
        tuple[str, bool]: The duplicated path in its first-seen casing and
            ``True``, or ``("", False)`` when every path is unique.
    """
    seen: dict[str, str] = {}
    for path in paths:
        key = path.casefold()
        if key in seen:
            return seen[key], True
        seen[key] = path
    return "", False
