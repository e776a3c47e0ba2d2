"""Shared utilities: ignore patterns for resource listing."""

from readkit.utils.ignore import (
    build_spec,
    filter_names,
    is_ignored,
    load_patterns,
    parse_ignore_file,
)

__all__ = [
    "build_spec",
    "filter_names",
    "is_ignored",
    "load_patterns",
    "parse_ignore_file",
]
