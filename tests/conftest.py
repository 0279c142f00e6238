from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from gni_exporter.config import GNIExportDesc, GNIExporterParams, GNIFileListExportDesc

if TYPE_CHECKING:
    from collections.abc import Callable

WORKSPACE = "/path/to/workspace"

CORE_SRCS = [
    "//src/core:SkAAClip.cpp",
    "//src/core:SkATrace.cpp",
    "//src/core:SkAlphaRuns.cpp",
]
OPTS_PRIVATE_HDRS = [
    "//src/opts:SkBitmapProcState_opts.h",
    "//src/opts:SkBlitMask_opts.h",
    "//src/opts:SkBlitRow_opts.h",
]

# Handmade gn/core.gni content for the core_srcs + private_hdrs rules.
CORE_GNI = """\
# DO NOT EDIT: This is a generated file.
# See //bazel/exporter_tool/README.md for more information.

_src = get_path_info("../src", "abspath")

skia_core_sources = [
  "$_src/core/SkAAClip.cpp",
  "$_src/core/SkATrace.cpp",
  "$_src/core/SkAlphaRuns.cpp",
  "$_src/opts/SkBitmapProcState_opts.h",
  "$_src/opts/SkBlitMask_opts.h",
  "$_src/opts/SkBlitRow_opts.h",
]

skia_core_sources += skia_pathops_sources
skia_core_sources += skia_skpicture_sources

skia_core_public += skia_pathops_public
skia_core_public += skia_skpicture_public
"""


def rule_target(name: str, srcs: list[str], *, attr: str = "srcs", rule_class: str = "filegroup") -> dict:
    package = name[2:].split(":", 1)[0]
    return {
        "type": "RULE",
        "rule": {
            "name": name,
            "ruleClass": rule_class,
            "location": f"{WORKSPACE}/{package}/BUILD.bazel:1:10",
            "attribute": [{"name": attr, "type": "LABEL_LIST", "stringListValue": srcs}],
        },
    }


def encode_query_result(targets: list[dict]) -> bytes:
    return json.dumps({"target": targets}).encode("utf-8")


@pytest.fixture
def make_query_result() -> Callable[[dict[str, list[str]]], bytes]:
    def _make(rules: dict[str, list[str]]) -> bytes:
        return encode_query_result([rule_target(name, srcs) for name, srcs in rules.items()])

    return _make


@pytest.fixture
def core_query_result(make_query_result: Callable[[dict[str, list[str]]], bytes]) -> bytes:
    return make_query_result(
        {
            "//src/core:core_srcs": CORE_SRCS,
            "//src/opts:private_hdrs": OPTS_PRIVATE_HDRS,
        },
    )


@pytest.fixture
def core_export_desc() -> GNIExportDesc:
    return GNIExportDesc(
        gni="gn/core.gni",
        vars=[
            GNIFileListExportDesc(
                var="skia_core_sources",
                rules=["//src/core:core_srcs", "//src/opts:private_hdrs"],
            ),
        ],
        appends={
            "skia_core_sources": ["skia_pathops_sources", "skia_skpicture_sources"],
            "skia_core_public": ["skia_pathops_public", "skia_skpicture_public"],
        },
    )


@pytest.fixture
def exporter_params(core_export_desc: GNIExportDesc) -> GNIExporterParams:
    return GNIExporterParams(workspace_dir=WORKSPACE, export_descs=[core_export_desc])


@pytest.fixture
def core_gni() -> str:
    return CORE_GNI
