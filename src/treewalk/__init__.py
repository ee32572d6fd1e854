"""Depth-bounded directory walking with layered path predicates."""

from __future__ import annotations

from .predicates import (
    Predicate,
    PredicateRole,
    UnsetPredicateError,
    ancestor_name_matches,
    file_excludes,
    file_excludes_format,
    file_includes,
    file_includes_format,
    parent_excludes,
    parent_includes,
    path_has_media_type,
    path_name_matches,
)
from .walker import FileWalker

__all__ = [
    "FileWalker",
    "Predicate",
    "PredicateRole",
    "UnsetPredicateError",
    "ancestor_name_matches",
    "file_excludes",
    "file_excludes_format",
    "file_includes",
    "file_includes_format",
    "parent_excludes",
    "parent_includes",
    "path_has_media_type",
    "path_name_matches",
]
