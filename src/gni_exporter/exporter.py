"""Export Bazel rule sources to ``.gni`` files, or check that they are current."""

from __future__ import annotations

import difflib
from pathlib import Path
from typing import TYPE_CHECKING

from gni_exporter.exceptions import DuplicateSourceError, UnknownRuleError
from gni_exporter.filters import file_list_contains_only_cpp_header_files, filter_deprecated_files, find_duplicate
from gni_exporter.labels import add_gni_variables_to_workspace_paths, convert_targets_to_file_paths
from gni_exporter.logging import logger
from gni_exporter.query import decode_query_result
from gni_exporter.renderer import RenderedVariable, gni_variable_blocks, render_gni

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import TextIO

    from gni_exporter.config import GNIExportDesc, GNIExporterParams, GNIFileListExportDesc
    from gni_exporter.filesystem import FileSystem
    from gni_exporter.query import QueryCommand, Rule


def merge_rule_sources(file_list: GNIFileListExportDesc, rules: Mapping[str, Rule]) -> list[str]:
    """Concatenate the source labels of every rule of ``file_list``, in order.

    Raises:
        UnknownRuleError: If a rule is missing from ``rules``.
    """
    labels: list[str] = []
    for rule_name in file_list.rules:
        rule = rules.get(rule_name)
        if rule is None:
            raise UnknownRuleError(rule=rule_name)
        labels.extend(rule.srcs)
    return labels


def build_variable(file_list: GNIFileListExportDesc, rules: Mapping[str, Rule]) -> RenderedVariable:
    """Resolve one GN variable from the query rules.

    Args:
        file_list (GNIFileListExportDesc): Variable name and source rules.
        rules (Mapping[str, Rule]): Rules of the decoded query result.

    Raises:
        DuplicateSourceError: If a file appears twice once merged.

    Returns:
        RenderedVariable: GN paths in rule-then-file order.
    """
    paths = filter_deprecated_files(convert_targets_to_file_paths(merge_rule_sources(file_list, rules)))
    duplicate, found = find_duplicate(paths)
    if found:
        raise DuplicateSourceError(path=duplicate, var=file_list.var)
    return RenderedVariable(
        name=file_list.var,
        paths=add_gni_variables_to_workspace_paths(paths),
        headers_only=bool(paths) and file_list_contains_only_cpp_header_files(paths),
    )


def build_variables(desc: GNIExportDesc, rules: Mapping[str, Rule]) -> list[RenderedVariable]:
    return [build_variable(file_list, rules) for file_list in desc.vars]


class GNIExporter:
    """Write ``.gni`` files from a Bazel query, or report the stale ones."""

    def __init__(self, params: GNIExporterParams, fs: FileSystem) -> None:
        self.workspace_dir = Path(params.workspace_dir).absolute()
        self.export_descs = list(params.export_descs)
        self.fs = fs

    def workspace_to_abs_path(self, rel: str) -> Path:
        return self.workspace_dir.joinpath(rel) if rel else self.workspace_dir

    def _query_rules(self, query_command: QueryCommand) -> dict[str, Rule]:
        return decode_query_result(query_command.read()).rules()

    def export(self, query_command: QueryCommand) -> None:
        """Render and write every ``.gni`` file.

        Descriptors are processed in order; the first error aborts the run and
        files already written are kept.
        """
        rules = self._query_rules(query_command)
        for desc in self.export_descs:
            variables = build_variables(desc, rules)
            content = render_gni(desc, variables)
            path = self.workspace_to_abs_path(desc.gni)
            with self.fs.open_file(path) as stream:
                stream.write(content)
            logger.info(
                "gni written",
                gni=desc.gni,
                variables=len(variables),
                headers_only=[var.name for var in variables if var.headers_only],
            )

    def check_current(self, query_command: QueryCommand, report: TextIO) -> int:
        """Compare every ``.gni`` file with what :meth:`export` would write.

        Nothing is written to disk. Each stale variable is described on
        ``report``.

        Args:
            query_command (QueryCommand): Source of the query result.
            report (TextIO): Destination of the human-readable report.

        Returns:
            int: Number of out-of-date variables; ``0`` when all files are current.
        """
        rules = self._query_rules(query_command)
        out_of_date = 0
        for desc in self.export_descs:
            variables = build_variables(desc, rules)
            expected = gni_variable_blocks(render_gni(desc, variables))
            existing = self.fs.read_file(self.workspace_to_abs_path(desc.gni))
            current = gni_variable_blocks(existing.decode("utf-8"))
            for var in variables:
                want = expected[var.name]
                have = current.get(var.name)
                if have == want:
                    continue
                out_of_date += 1
                logger.warning("gni variable out of date", gni=desc.gni, var=var.name)
                if have is None:
                    report.write(f"{desc.gni}: variable {var.name} is missing\n")
                    continue
                report.write(f"{desc.gni}: variable {var.name} is out of date\n")
                diff = difflib.unified_diff(
                    have,
                    want,
                    fromfile=f"{desc.gni} (current)",
                    tofile=f"{desc.gni} (expected)",
                    lineterm="",
                )
                report.writelines(f"{line}\n" for line in diff)
        if out_of_date:
            report.write(f"{out_of_date} variable(s) out of date, run `gni-exporter export` to regenerate.\n")
        return out_of_date
