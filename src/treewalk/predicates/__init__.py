"""Predicates and the building blocks used to construct them."""

from __future__ import annotations

from .base import PathCheck, Predicate, PredicateRole, UnsetPredicateError
from .factories import (
    file_excludes,
    file_excludes_format,
    file_includes,
    file_includes_format,
    parent_excludes,
    parent_includes,
)
from .support import ancestor_name_matches, path_has_media_type, path_name_matches

__all__ = [
    "PathCheck",
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
