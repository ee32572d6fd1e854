"""Role-tagged predicates evaluated during a walk."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

PathCheck = Callable[[Path], bool]


class UnsetPredicateError(RuntimeError):
    """Raised when a predicate with no evaluation function is called."""


class PredicateRole(Enum):
    """When and how a predicate is applied during descent."""

    # Checked against every entry; failure stops the rest of the directory.
    DIR_HARD = "dir_hard"
    # Checked against files only; failure skips that one file.
    DIR_SOFT = "dir_soft"
    FILE = "file"
    NONE = "none"


@dataclass(frozen=True)
class Predicate:
    """A boolean check over a path, tagged with the role it plays in a walk.

    Hard directory rules are evaluated against every listed entry before the
    walker decides whether to descend; a failure closes off the remaining
    siblings of that entry. Soft directory rules and file rules only gate
    callback dispatch for a single file.
    """

    role: PredicateRole
    check: PathCheck | None = None

    def __post_init__(self) -> None:
        if self.role is not PredicateRole.NONE and not callable(self.check):
            msg = f"{self.role.value} predicate requires a callable, got {self.check!r}"
            raise TypeError(msg)

    @classmethod
    def dir_hard(cls, check: PathCheck) -> Predicate:
        """Create a hard directory rule."""
        return cls(PredicateRole.DIR_HARD, check)

    @classmethod
    def dir_soft(cls, check: PathCheck) -> Predicate:
        """Create a soft directory rule."""
        return cls(PredicateRole.DIR_SOFT, check)

    @classmethod
    def file(cls, check: PathCheck) -> Predicate:
        """Create a file rule."""
        return cls(PredicateRole.FILE, check)

    @classmethod
    def none(cls) -> Predicate:
        """Create the unset placeholder predicate."""
        return cls(PredicateRole.NONE)

    def evaluate(self, path: Path) -> bool:
        """Call the wrapped check.

        Args:
            path: Path to check.

        Returns:
            Result of the wrapped check.

        Raises:
            UnsetPredicateError: If this is the unset placeholder.

        """
        if self.role is PredicateRole.NONE or self.check is None:
            raise UnsetPredicateError("attempted to evaluate an unset predicate")
        return bool(self.check(path))

    __call__ = evaluate

    @property
    def is_directory_hard(self) -> bool:
        return self.role is PredicateRole.DIR_HARD

    @property
    def is_directory_soft(self) -> bool:
        return self.role is PredicateRole.DIR_SOFT

    @property
    def is_file_rule(self) -> bool:
        return self.role is PredicateRole.FILE

    @property
    def is_directory_rule(self) -> bool:
        """Whether this is either kind of directory rule."""
        return self.is_directory_hard or self.is_directory_soft
