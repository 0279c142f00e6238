from dataclasses import dataclass


@dataclass(frozen=True)
class GniExporterError(Exception):
    """Base exception for errors in the gni_exporter module."""

    @property
    def message(self) -> str:
        return self.__doc__ or type(self).__name__

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ConfigError(GniExporterError):
    """Raised when the export configuration file cannot be loaded."""

    path: str
    reason: str

    @property
    def message(self) -> str:
        return f"Invalid export configuration {self.path}: {self.reason}"


@dataclass(frozen=True)
class DecodeError(GniExporterError):
    """Raised when the query response is not a well-formed QueryResult."""

    reason: str

    @property
    def message(self) -> str:
        return f"Unable to decode query result: {self.reason}"


@dataclass(frozen=True)
class QueryCommandError(GniExporterError):
    """Raised when the bazel query command fails."""

    command: str
    returncode: int
    stdout: str
    stderr: str

    @property
    def message(self) -> str:
        return f"`{self.command}` exited with status {self.returncode}: {self.stderr.strip()}"


@dataclass(frozen=True)
class UnknownRuleError(GniExporterError):
    """Raised when an export descriptor references a rule absent from the query result."""

    rule: str

    @property
    def message(self) -> str:
        return f"Rule {self.rule!r} not found in query result"


@dataclass(frozen=True)
class MalformedLabelError(GniExporterError):
    """Raised when a source label is not of the form ``//package:name``."""

    label: str

    @property
    def message(self) -> str:
        return f"Malformed label {self.label!r}"


@dataclass(frozen=True)
class UnsupportedRootError(GniExporterError):
    """Raised when a path does not start with a recognized top-level folder."""

    path: str
    folder: str

    @property
    def message(self) -> str:
        return f"Unsupported top-level folder {self.folder!r} for path {self.path!r}"


@dataclass(frozen=True)
class DuplicateSourceError(GniExporterError):
    """Raised when a file list contains the same path twice (case-insensitive)."""

    path: str
    var: str

    @property
    def message(self) -> str:
        return f"Duplicate file {self.path!r} in variable {self.var!r}"
