from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gni_exporter.exceptions import ConfigError


class GNIFileListExportDesc(BaseModel):
    """One GN variable and the Bazel rules whose sources it lists."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    var: str = Field(..., min_length=1, description="GN variable name.")
    rules: list[str] = Field(default_factory=list, description="Rule labels, merged in order.")


class GNIExportDesc(BaseModel):
    """One generated ``.gni`` file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    gni: str = Field(..., min_length=1, description="Workspace-relative destination path.")
    vars: list[GNIFileListExportDesc] = Field(default_factory=list)
    appends: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Static `<var> += <other>` footer lines, one group per key.",
    )

    @field_validator("gni")
    @classmethod
    def _relative_gni(cls, value: str) -> str:
        if Path(value).is_absolute():
            msg = f"gni path must be workspace-relative, got: {value}"
            raise ValueError(msg)
        return value

    @field_validator("vars")
    @classmethod
    def _unique_vars(cls, value: list[GNIFileListExportDesc]) -> list[GNIFileListExportDesc]:
        seen: set[str] = set()
        for file_list in value:
            if file_list.var in seen:
                msg = f"variable {file_list.var!r} is declared more than once"
                raise ValueError(msg)
            seen.add(file_list.var)
        return value


class GNIExporterParams(BaseModel):
    """Parameters of a :class:`gni_exporter.exporter.GNIExporter`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    workspace_dir: Path
    export_descs: list[GNIExportDesc] = Field(default_factory=list)

    def all_rules(self) -> list[str]:
        """Every rule referenced by the export descriptors, first occurrence order."""
        rules: dict[str, None] = {}
        for desc in self.export_descs:
            for file_list in desc.vars:
                rules.update(dict.fromkeys(file_list.rules))
        return list(rules)


def parse_export_descs(raw: Any, *, source: str = "<config>") -> list[GNIExportDesc]:  # noqa: ANN401
    """Validate the decoded YAML document into export descriptors.

    Raises:
        ConfigError: If the document does not have an ``exports`` list of
            valid descriptors.
    """
    if not isinstance(raw, dict) or "exports" not in raw:
        raise ConfigError(path=source, reason="expected a mapping with an `exports` list")
    exports = raw["exports"]
    if not isinstance(exports, list):
        raise ConfigError(path=source, reason="`exports` must be a list")
    try:
        return [GNIExportDesc.model_validate(item) for item in exports]
    except ValidationError as exc:
        raise ConfigError(path=source, reason=str(exc)) from exc


def load_export_descs(path: Path) -> list[GNIExportDesc]:
    """Load export descriptors from a YAML file.

    Args:
        path (Path): YAML configuration file.

    Raises:
        ConfigError: If the file is not valid YAML or not a valid configuration.

    Returns:
        list[GNIExportDesc]: Descriptors in declaration order.
    """
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(path=str(path), reason=str(exc)) from exc
    return parse_export_descs(raw, source=str(path))
