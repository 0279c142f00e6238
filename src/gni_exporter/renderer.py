"""Rendering of ``.gni`` files and scanning of existing ones.

The scanner is not a GN parser. It relies on the layout :func:`render_gni`
produces (and ``gn format`` keeps): list assignments start at column zero and
multi-line lists close with a line holding only ``]``.
"""

from __future__ import annotations

import posixpath
import re
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from gni_exporter.labels import ROOT_VARIABLES, root_for_variable_path

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from gni_exporter.config import GNIExportDesc

GNI_HEADER = (
    "# DO NOT EDIT: This is a generated file.\n"
    "# See //bazel/exporter_tool/README.md for more information.\n"
)

_GNI_LIST_ASSIGNMENT = re.compile(r"^(?P<var>[A-Za-z_][A-Za-z0-9_]*)\s*=\s*\[")


class RenderedVariable(BaseModel):
    """A GN variable and its final list of GN paths."""

    model_config = ConfigDict(frozen=True)

    name: str
    paths: list[str] = Field(default_factory=list)
    headers_only: bool = False


def roots_used(variables: Iterable[RenderedVariable]) -> list[str]:
    """Workspace roots referenced by ``variables``, in root-table order."""
    used = {root for var in variables for path in var.paths if (root := root_for_variable_path(path))}
    return [root for root in ROOT_VARIABLES if root in used]


def render_path_roots(gni: str, roots: Sequence[str]) -> str:
    """Render the ``_<root> = get_path_info(...)`` prologue for ``gni``."""
    gni_dir = posixpath.dirname(gni) or "."
    lines = []
    for root in roots:
        rel = posixpath.relpath(root, start=gni_dir)
        lines.append(f'{ROOT_VARIABLES[root]} = get_path_info("{rel}", "abspath")\n')
    return "".join(lines)


def render_variable(var: RenderedVariable) -> str:
    if not var.paths:
        return f"{var.name} = []\n"
    items = "".join(f'  "{path}",\n' for path in var.paths)
    return f"{var.name} = [\n{items}]\n"


def render_gni(desc: GNIExportDesc, variables: Sequence[RenderedVariable]) -> str:
    """Render the full text of the ``.gni`` file described by ``desc``.

    Args:
        desc (GNIExportDesc): Destination and static footer of the file.
        variables (Sequence[RenderedVariable]): Variables in declaration order.

    Returns:
        str: File content, ending with a single newline.
    """
    sections = [GNI_HEADER]
    roots = roots_used(variables)
    if roots:
        sections.append(render_path_roots(desc.gni, roots))
    sections.extend(render_variable(var) for var in variables)
    for var, others in desc.appends.items():
        if others:
            sections.append("".join(f"{var} += {other}\n" for other in others))
    return "\n".join(sections)


def get_gni_line_variable(line: str) -> str:
    """Return the variable a line assigns a list to, or ``""``.

    Only unindented, uncommented ``name = [`` lines match.
    """
    matched = _GNI_LIST_ASSIGNMENT.match(line)
    if matched is None:
        return ""
    return matched.group("var")


def strip_gni_comment(line: str) -> str:
    """Drop a trailing ``#`` comment, ignoring ``#`` inside double-quoted strings."""
    in_string = False
    for i, char in enumerate(line):
        if char == '"':
            in_string = not in_string
        elif char == "#" and not in_string:
            return line[:i].rstrip()
    return line.rstrip()


def gni_variable_blocks(text: str) -> dict[str, list[str]]:
    """Split ``.gni`` text into list-assignment blocks keyed by variable.

    A block spans its assignment line through the closing ``]`` line. Trailing
    comments do not count when looking for the closing bracket. The first
    assignment of a variable wins.
    """
    blocks: dict[str, list[str]] = {}
    current: list[str] | None = None
    for line in text.splitlines():
        if current is not None:
            current.append(line)
            if strip_gni_comment(line).strip() == "]":
                current = None
            continue
        var = get_gni_line_variable(line)
        if not var:
            continue
        block = [line]
        if var not in blocks:
            blocks[var] = block
        if not strip_gni_comment(line).endswith("]"):
            current = block
    return blocks
