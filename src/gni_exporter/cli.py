"""
gni_exporter: keep GN ``.gni`` file lists in sync with the Bazel build.

Usage
-----
Regenerate every ``.gni`` file declared in the configuration:
    gni-exporter export --workspace . --config bazel/exporter_tool/gni_exports.yaml

Fail (exit status 1) when a ``.gni`` file no longer matches the Bazel rules:
    gni-exporter check --workspace .

Exit status 2 signals a tool error (bad label, unknown rule, query failure,
unreadable file...).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from gni_exporter import __version__
from gni_exporter.config import GNIExporterParams, load_export_descs
from gni_exporter.exceptions import GniExporterError
from gni_exporter.exporter import GNIExporter
from gni_exporter.filesystem import LocalFileSystem
from gni_exporter.logging import logger, setup_logging
from gni_exporter.query import BazelQueryCommand
from gni_exporter.settings import DEFAULT_CONFIG, Settings, default_bazel

if TYPE_CHECKING:
    from collections.abc import Sequence

EXIT_OK = 0
EXIT_STALE = 1
EXIT_ERROR = 2


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    p = argparse.ArgumentParser(
        prog="gni-exporter",
        description="Export Bazel rule sources to GN .gni files.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("export", "Write the .gni files."),
        ("check", "Report .gni files that are out of date, without writing."),
    ):
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument(
            "--workspace",
            type=Path,
            default=Path.cwd(),
            help="Bazel workspace root.",
        )
        sp.add_argument(
            "--config",
            type=Path,
            default=Path(DEFAULT_CONFIG),
            help="YAML export descriptors, relative to the workspace.",
        )
        sp.add_argument(
            "--bazel",
            type=str,
            default=default_bazel(),
            help="Bazel executable (default: $GNI_EXPORTER_BAZEL or bazelisk).",
        )
        sp.add_argument("--log-file", type=str, default="", help="Log file path.")
    args = p.parse_args(argv)
    return Settings(**vars(args))


def build_exporter(settings: Settings) -> tuple[GNIExporter, BazelQueryCommand]:
    params = GNIExporterParams(
        workspace_dir=settings.workspace,
        export_descs=load_export_descs(settings.config_path),
    )
    query_command = BazelQueryCommand(params.all_rules(), params.workspace_dir, bazel=settings.bazel)
    return GNIExporter(params, LocalFileSystem()), query_command


def main(argv: Sequence[str] | None = None) -> int:
    settings = parse_args(argv)
    if settings.log_file:
        setup_logging(settings.log_file)

    try:
        exporter, query_command = build_exporter(settings)
        if settings.command == "export":
            exporter.export(query_command)
            return EXIT_OK
        out_of_date = exporter.check_current(query_command, sys.stdout)
    except (GniExporterError, OSError, UnicodeDecodeError) as e:
        logger.error("gni export failed", error=str(e))
        sys.stderr.write(f"ERROR: {e}\n")
        return EXIT_ERROR

    return EXIT_STALE if out_of_date else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
