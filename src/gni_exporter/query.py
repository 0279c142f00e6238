"""Decoding of ``bazel query --output=jsonproto`` results and the query command."""

from __future__ import annotations

import subprocess  # noqa: S404
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from gni_exporter.exceptions import DecodeError, QueryCommandError
from gni_exporter.logging import logger

if TYPE_CHECKING:
    from collections.abc import Sequence

SOURCE_ATTRIBUTES = ("srcs", "hdrs")


class QueryCommand(Protocol):
    """Executes a build-graph query and returns its raw serialized response."""

    def read(self) -> bytes: ...


class _ProtoModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TargetType(StrEnum):
    RULE = "RULE"
    SOURCE_FILE = "SOURCE_FILE"
    GENERATED_FILE = "GENERATED_FILE"
    PACKAGE_GROUP = "PACKAGE_GROUP"
    ENVIRONMENT_GROUP = "ENVIRONMENT_GROUP"


class Attribute(_ProtoModel):
    name: str
    type: str = ""
    string_list_value: list[str] = Field(default_factory=list)


class Rule(_ProtoModel):
    name: str
    rule_class: str = ""
    location: str = ""
    attribute: list[Attribute] = Field(default_factory=list)

    @property
    def srcs(self) -> list[str]:
        """Source file labels owned by the rule (``srcs`` then ``hdrs``)."""
        labels: list[str] = []
        for attr_name in SOURCE_ATTRIBUTES:
            for attr in self.attribute:
                if attr.name == attr_name:
                    labels.extend(attr.string_list_value)
        return labels


class Target(_ProtoModel):
    type: TargetType
    rule: Rule | None = None


class QueryResult(_ProtoModel):
    target: list[Target] = Field(default_factory=list)

    def rules(self) -> dict[str, Rule]:
        """Map rule name to rule for every RULE target."""
        return {
            target.rule.name: target.rule
            for target in self.target
            if target.type is TargetType.RULE and target.rule is not None
        }


def decode_query_result(data: bytes) -> QueryResult:
    """Decode a JSON-encoded ``QueryResult`` message.

    Args:
        data (bytes): Raw query output.

    Raises:
        DecodeError: If ``data`` is not a well-formed ``QueryResult``.

    Returns:
        QueryResult: The decoded targets, in query output order.
    """
    try:
        return QueryResult.model_validate_json(data)
    except ValidationError as exc:
        raise DecodeError(reason=str(exc)) from exc


class BazelQueryCommand:
    """Run ``bazel query`` for a set of rules inside a workspace."""

    def __init__(self, rules: Sequence[str], workspace_dir: Path, *, bazel: str = "bazelisk") -> None:
        self.rules = list(rules)
        self.workspace_dir = Path(workspace_dir)
        self.bazel = bazel

    @property
    def query(self) -> str:
        return f'kind("rule", set({" ".join(self.rules)}))'

    def command(self) -> list[str]:
        return [self.bazel, "query", "--noimplicit_deps", self.query, "--output", "jsonproto"]

    def read(self) -> bytes:
        """Run the query and return its stdout.

        Raises:
            QueryCommandError: If bazel exits with a non-zero status.
        """
        cmd = self.command()
        logger.info("running bazel query", cwd=str(self.workspace_dir), rules=len(self.rules))
        out = subprocess.run(  # noqa: S603
            cmd,
            cwd=str(self.workspace_dir),
            capture_output=True,
            check=False,
        )
        if out.returncode != 0:
            raise QueryCommandError(
                command=" ".join(cmd),
                returncode=out.returncode,
                stdout=out.stdout.decode("utf-8", errors="replace"),
                stderr=out.stderr.decode("utf-8", errors="replace"),
            )
        return out.stdout
