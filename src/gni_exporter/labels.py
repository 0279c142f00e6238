"""Conversion of Bazel file labels to workspace paths and GN path variables."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from gni_exporter.exceptions import MalformedLabelError, UnsupportedRootError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

GNI_VARIABLE_MARKER = "$"

# Top-level workspace folder -> GN variable holding its absolute path.
ROOT_VARIABLES: Mapping[str, str] = MappingProxyType(
    {
        "src": "_src",
        "include": "_include",
        "modules": "_modules",
    },
)


def convert_targets_to_file_paths(labels: Sequence[str]) -> list[str]:
    """Convert file labels (``//pkg/path:name``) to workspace paths (``pkg/path/name``).

    Args:
        labels (Sequence[str]): Bazel file labels, in order.

    Raises:
        MalformedLabelError: If a label is empty, lacks the ``//pkg:name``
            structure, or has an empty package or name.

    Returns:
        list[str]: Workspace-relative paths, in the same order.
    """
    paths: list[str] = []
    for label in labels:
        if not label.startswith("//"):
            raise MalformedLabelError(label=label)
        package, sep, name = label[2:].partition(":")
        if not sep or not package or not name:
            raise MalformedLabelError(label=label)
        paths.append(f"{package}/{name}")
    return paths


def extract_top_level_folder(path: str) -> str:
    """Return the first ``/``-delimited segment of ``path``.

    Absolute paths and paths made only of separators yield ``""``. A path
    without separators is its own top-level folder.
    """
    if path.startswith("/"):
        return ""
    return path.split("/", 1)[0]


def make_relative_file_path_for_gni(path: str) -> str:
    """Replace the top-level folder of ``path`` with its GN root variable.

    ``src/core/file.cpp`` becomes ``$_src/core/file.cpp``. Paths that already
    start with a GN variable are returned unchanged.

    Raises:
        UnsupportedRootError: If the top-level folder is not a recognized root.
    """
    folder = extract_top_level_folder(path)
    if folder.startswith(GNI_VARIABLE_MARKER):
        return path
    variable = ROOT_VARIABLES.get(folder)
    if variable is None:
        raise UnsupportedRootError(path=path, folder=folder)
    return f"{GNI_VARIABLE_MARKER}{variable}{path[len(folder) :]}"


def add_gni_variables_to_workspace_paths(paths: Sequence[str]) -> list[str]:
    """Apply :func:`make_relative_file_path_for_gni` to every path, failing on the first error."""
    return [make_relative_file_path_for_gni(path) for path in paths]


def strip_gni_variable(path: str) -> str:
    """Turn a GN path (``$_src/core/file.cpp``) back into a workspace path.

    Paths without a known root variable are returned unchanged.
    """
    folder = extract_top_level_folder(path)
    for root, variable in ROOT_VARIABLES.items():
        if folder == f"{GNI_VARIABLE_MARKER}{variable}":
            return f"{root}{path[len(folder) :]}"
    return path


def root_for_variable_path(path: str) -> str | None:
    """Return the workspace root (``src``...) a GN path is anchored on, if any."""
    stripped = strip_gni_variable(path)
    if stripped == path:
        return None
    return extract_top_level_folder(stripped)
