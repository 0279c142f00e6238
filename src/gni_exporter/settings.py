from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field

ENV_FILE = find_dotenv(usecwd=True)
load_dotenv(ENV_FILE)

DEFAULT_CONFIG = "bazel/exporter_tool/gni_exports.yaml"


def default_bazel() -> str:
    return os.environ.get("GNI_EXPORTER_BAZEL", "bazelisk")


class Settings(BaseModel):
    """Configuration settings for the gni_exporter command line."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    command: Literal["export", "check"] = Field(..., description="Write or check the .gni files.")
    workspace: Path = Field(default_factory=Path.cwd, description="Bazel workspace root.")
    config: Path = Field(default=Path(DEFAULT_CONFIG), description="Export descriptors (YAML).")
    bazel: str = Field(default_factory=default_bazel, description="Bazel executable.")
    log_file: str = Field(default="", description="Log file path.")

    @property
    def config_path(self) -> Path:
        """The config file, relative paths being resolved against the workspace."""
        return self.config if self.config.is_absolute() else self.workspace / self.config
