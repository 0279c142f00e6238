from __future__ import annotations

import pytest

from gni_exporter.exceptions import MalformedLabelError, UnsupportedRootError
from gni_exporter.labels import (
    add_gni_variables_to_workspace_paths,
    convert_targets_to_file_paths,
    extract_top_level_folder,
    make_relative_file_path_for_gni,
    strip_gni_variable,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("src/core/file.cpp", "$_src/core/file.cpp"),
        ("include/core/file.h", "$_include/core/file.h"),
        ("modules/mod/file.cpp", "$_modules/mod/file.cpp"),
    ],
)
def test_make_relative_file_path_for_gni_matching_root(path: str, expected: str) -> None:
    assert make_relative_file_path_for_gni(path) == expected


@pytest.mark.unit
@pytest.mark.parametrize("path", ["", "//valid/rule/incorrect/root/dir:file.cpp", "nomatch/foo.h"])
def test_make_relative_file_path_for_gni_rejects_unknown_root(path: str) -> None:
    with pytest.raises(UnsupportedRootError) as exc_info:
        make_relative_file_path_for_gni(path)

    assert exc_info.value.path == path


@pytest.mark.unit
def test_make_relative_file_path_for_gni_keeps_variable_paths() -> None:
    assert make_relative_file_path_for_gni("$_src/core/file.cpp") == "$_src/core/file.cpp"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("foo/bar/baz.txt", "foo"),
        ("$_src/bar/baz.txt", "$_src"),
        ("baz.txt", "baz.txt"),
        ("/foo/bar/baz.txt", ""),
        ("", ""),
        ("/", ""),
        ("///", ""),
    ],
)
def test_extract_top_level_folder(path: str, expected: str) -> None:
    assert extract_top_level_folder(path) == expected


@pytest.mark.unit
def test_add_gni_variables_to_workspace_paths() -> None:
    assert add_gni_variables_to_workspace_paths([]) == []
    assert add_gni_variables_to_workspace_paths(
        ["src/include/foo.h", "include/foo.h", "modules/foo.cpp"],
    ) == ["$_src/include/foo.h", "$_include/foo.h", "$_modules/foo.cpp"]


@pytest.mark.unit
@pytest.mark.parametrize(
    "paths",
    [
        ["nomatch/include/foo.h"],
        ["//src/core:source.cpp"],
        ["src/core/ok.cpp", "nomatch/bad.cpp", "also/bad.cpp"],
    ],
)
def test_add_gni_variables_to_workspace_paths_fails_fast(paths: list[str]) -> None:
    with pytest.raises(UnsupportedRootError) as exc_info:
        add_gni_variables_to_workspace_paths(paths)

    assert exc_info.value.path == next(p for p in paths if not p.startswith("src/"))


@pytest.mark.unit
def test_convert_targets_to_file_paths() -> None:
    assert convert_targets_to_file_paths([]) == []
    assert convert_targets_to_file_paths(
        ["//src/include:foo.h", "//include:foo.h", "//modules:foo.cpp"],
    ) == ["src/include/foo.h", "include/foo.h", "modules/foo.cpp"]


@pytest.mark.unit
@pytest.mark.parametrize(
    "labels",
    [
        [""],
        ["//src/include:foo.h", ""],
        ["src/include:foo.h"],
        ["//src/include/foo.h"],
        ["//:foo.h"],
        ["//src/include:"],
    ],
)
def test_convert_targets_to_file_paths_rejects_malformed_labels(labels: list[str]) -> None:
    with pytest.raises(MalformedLabelError):
        convert_targets_to_file_paths(labels)


@pytest.mark.unit
def test_labels_round_trip_through_gni_variables() -> None:
    labels = ["//src/core:SkAAClip.cpp", "//include/core:SkColor.h", "//modules/skcms:skcms.cc"]

    paths = convert_targets_to_file_paths(labels)
    gni_paths = add_gni_variables_to_workspace_paths(paths)

    assert len(gni_paths) == len(labels)
    assert [strip_gni_variable(p) for p in gni_paths] == paths
