from pathlib import Path

import pytest

from gni_exporter.settings import DEFAULT_CONFIG, Settings


@pytest.mark.unit
def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GNI_EXPORTER_BAZEL", raising=False)

    settings = Settings(command="check")

    assert settings.workspace.resolve() == Path.cwd().resolve()
    assert settings.config == Path(DEFAULT_CONFIG)
    assert settings.bazel == "bazelisk"
    assert not settings.log_file


@pytest.mark.unit
def test_settings_bazel_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GNI_EXPORTER_BAZEL", "/opt/bazel")

    assert Settings(command="export").bazel == "/opt/bazel"


@pytest.mark.unit
def test_settings_config_path_resolves_against_workspace(tmp_path: Path) -> None:
    relative = Settings(command="export", workspace=tmp_path, config=Path("gn/exports.yaml"))
    absolute = Settings(command="export", workspace=tmp_path, config=Path("/etc/exports.yaml"))

    assert relative.config_path == tmp_path / "gn" / "exports.yaml"
    assert absolute.config_path == Path("/etc/exports.yaml")
