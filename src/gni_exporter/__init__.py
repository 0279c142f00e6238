"""Export Bazel query results to GN ``.gni`` include-list files."""

__version__ = "0.1.0"
