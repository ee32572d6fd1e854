"""Depth-bounded directory walker with role-based predicate filtering."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from .predicates.base import Predicate

Callback = Callable[[Path], None]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _WalkPlan:
    """Read-only view of a walker's configuration for the duration of a walk."""

    min_depth: int
    max_depth: int
    callbacks: tuple[Callback, ...]
    hard: tuple[Predicate, ...]
    soft: tuple[Predicate, ...]
    file: tuple[Predicate, ...]


def _all_hold(predicates: tuple[Predicate, ...], path: Path) -> bool:
    return all(predicate.evaluate(path) for predicate in predicates)


class FileWalker:
    """Walks a directory tree and runs callbacks on the files it admits.

    Example:
        FileWalker("~/scans").with_max_depth(4).with_callback(print).walk()

    """

    def __init__(self, location: str | os.PathLike[str]) -> None:
        """Initialize the walker.

        Args:
            location: Root directory to walk.

        """
        self.location = Path(location).expanduser()
        self.min_depth: int | None = None
        self.max_depth: int | None = None
        self.callbacks: list[Callback] = []
        self.predicates: list[Predicate] = []

    def __repr__(self) -> str:
        return (
            f"FileWalker({str(self.location)!r}, min_depth={self.min_depth}, "
            f"max_depth={self.max_depth}, callbacks={len(self.callbacks)}, "
            f"predicates={len(self.predicates)})"
        )

    def set_min_depth(self, depth: int) -> None:
        """Set the shallowest depth at which files are dispatched."""
        if depth < 0:
            msg = f"min_depth must be >= 0, got {depth}"
            raise ValueError(msg)
        self.min_depth = depth

    def set_max_depth(self, depth: int) -> None:
        """Set the exclusive depth limit; directories at this depth are not listed."""
        if depth < 0:
            msg = f"max_depth must be >= 0, got {depth}"
            raise ValueError(msg)
        self.max_depth = depth

    def add_callback(self, callback: Callback) -> None:
        self.callbacks.append(callback)

    def add_predicate(self, predicate: Predicate) -> None:
        self.predicates.append(predicate)

    def with_min_depth(self, depth: int) -> FileWalker:
        self.set_min_depth(depth)
        return self

    def with_max_depth(self, depth: int) -> FileWalker:
        self.set_max_depth(depth)
        return self

    def with_callback(self, callback: Callback) -> FileWalker:
        """Add a callback; callbacks run in the order they were added."""
        self.add_callback(callback)
        return self

    def with_predicate(self, predicate: Predicate) -> FileWalker:
        self.add_predicate(predicate)
        return self

    def _plan(self) -> _WalkPlan:
        predicates = tuple(self.predicates)
        return _WalkPlan(
            min_depth=self.min_depth if self.min_depth is not None else 0,
            max_depth=self.max_depth if self.max_depth is not None else sys.maxsize,
            callbacks=tuple(self.callbacks),
            hard=tuple(p for p in predicates if p.is_directory_hard),
            soft=tuple(p for p in predicates if p.is_directory_soft),
            file=tuple(p for p in predicates if p.is_file_rule),
        )

    def _list_directory(self, location: Path) -> Iterator[Path]:
        """List a directory's entries in the order the filesystem returns them."""
        return location.iterdir()

    def walk(self) -> None:
        """Walk the tree from the root, dispatching admitted files to callbacks.

        Raises:
            OSError: If any directory cannot be listed. The walk stops at that
                point; callbacks that already ran are not undone.

        """
        plan = self._plan()
        logger.info("Walking %s", self.location)
        try:
            dispatched = self._walk_at(plan, self.location, 0)
        except OSError as e:
            logger.debug("Walk of %s aborted: %s", self.location, e)
            raise
        logger.info("Walk of %s finished, %d files dispatched", self.location, dispatched)

    def _walk_at(self, plan: _WalkPlan, location: Path, depth: int) -> int:
        """Walk one directory level.

        Returns:
            Number of files dispatched at or below this level.

        """
        if depth >= plan.max_depth:
            return 0

        logger.debug("Listing %s at depth %d", location, depth)
        dispatched = 0
        for path in self._list_directory(location):
            if not _all_hold(plan.hard, path):
                logger.debug("Hard rule failed on %s, leaving %s", path, location)
                break

            if path.is_dir():
                dispatched += self._walk_at(plan, path, depth + 1)
                continue

            if depth < plan.min_depth:
                continue

            # Both roles are evaluated even if the first fails.
            soft_valid = _all_hold(plan.soft, path)
            file_valid = _all_hold(plan.file, path)
            if soft_valid and file_valid:
                for callback in plan.callbacks:
                    callback(path)
                dispatched += 1

        return dispatched
