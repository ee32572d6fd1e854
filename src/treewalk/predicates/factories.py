"""Ready-made predicates for common include/exclude rules.

File rules let directories through unconditionally so that the same predicate
can sit in a walker regardless of which entries it ends up being asked about.
Patterns are compiled when the factory is called, so an invalid expression
fails before any walking starts.
"""

from __future__ import annotations

import re
from pathlib import Path

from .base import Predicate
from .support import ancestor_name_matches, path_has_media_type, path_name_matches


def file_excludes(pattern: str) -> Predicate:
    """Reject files whose name matches ``pattern``."""
    regex = re.compile(pattern)

    def check(path: Path) -> bool:
        return path.is_dir() or not path_name_matches(path, regex)

    return Predicate.file(check)


def file_includes(pattern: str) -> Predicate:
    """Admit only files whose name matches ``pattern``."""
    regex = re.compile(pattern)

    def check(path: Path) -> bool:
        return path.is_dir() or path_name_matches(path, regex)

    return Predicate.file(check)


def file_excludes_format(media_type: str) -> Predicate:
    """Reject files whose content sniffs as ``media_type``."""

    def check(path: Path) -> bool:
        return path.is_dir() or not path_has_media_type(path, media_type)

    return Predicate.file(check)


def file_includes_format(media_type: str) -> Predicate:
    """Admit only files whose content sniffs as ``media_type``."""

    def check(path: Path) -> bool:
        return path.is_dir() or path_has_media_type(path, media_type)

    return Predicate.file(check)


def parent_excludes(pattern: str) -> Predicate:
    """Stop at the first entry with an ancestor directory matching ``pattern``.

    This is a hard rule: once an entry inside a matching directory is seen,
    the rest of that directory is not visited either.
    """
    regex = re.compile(pattern)

    def check(path: Path) -> bool:
        return not ancestor_name_matches(path, regex)

    return Predicate.dir_hard(check)


def parent_includes(pattern: str) -> Predicate:
    """Admit only files with an ancestor directory matching ``pattern``."""
    regex = re.compile(pattern)

    def check(path: Path) -> bool:
        return ancestor_name_matches(path, regex)

    return Predicate.dir_soft(check)
