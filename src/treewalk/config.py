"""Configuration management for treewalk."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .predicates import (
    Predicate,
    file_excludes,
    file_excludes_format,
    file_includes,
    file_includes_format,
    parent_excludes,
    parent_includes,
)
from .walker import FileWalker


@dataclass
class FilterRules:
    """Name, media-type and ancestor patterns for one direction (include or exclude)."""

    names: list[str] = field(default_factory=list)
    formats: list[str] = field(default_factory=list)
    parents: list[str] = field(default_factory=list)

    @classmethod
    def _from_dict(cls, data: dict[str, Any] | None) -> FilterRules:
        data = data or {}
        return cls(
            names=[str(p) for p in data.get("names") or []],
            formats=[str(t) for t in data.get("formats") or []],
            parents=[str(p) for p in data.get("parents") or []],
        )

    def _to_dict(self) -> dict[str, list[str]]:
        return {"names": list(self.names), "formats": list(self.formats), "parents": list(self.parents)}


@dataclass
class WalkConfig:
    """Configuration for a walk."""

    # Directory to walk when none is given on the command line
    root: Path | None = None

    min_depth: int = 0
    # None walks without a depth limit
    max_depth: int | None = 4

    exclude: FilterRules = field(default_factory=FilterRules)
    include: FilterRules = field(default_factory=FilterRules)

    # Logging
    log_file: Path | None = None
    log_level: str = "INFO"

    @classmethod
    def get_config_path(cls) -> Path:
        """Get the default configuration file path."""
        return Path.home() / ".config/treewalk/config.yaml"

    @classmethod
    def load(cls, config_path: Path | None = None) -> WalkConfig:
        """Load configuration from YAML file.

        Args:
            config_path: Path to config file. Uses default if None.

        Returns:
            Loaded configuration, or defaults if the file doesn't exist.

        """
        if config_path is None:
            config_path = cls.get_config_path()

        if not config_path.exists():
            return cls()

        with config_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> WalkConfig:
        """Create config from dictionary."""
        config = cls()

        if data.get("root"):
            config.root = Path(os.path.expanduser(data["root"]))

        if "min_depth" in data:
            config.min_depth = int(data["min_depth"] or 0)
        if "max_depth" in data:
            config.max_depth = None if data["max_depth"] is None else int(data["max_depth"])

        config.exclude = FilterRules._from_dict(data.get("exclude"))
        config.include = FilterRules._from_dict(data.get("include"))

        if "logging" in data:
            logging_cfg = data["logging"] or {}
            if logging_cfg.get("file"):
                config.log_file = Path(os.path.expanduser(logging_cfg["file"]))
            if "level" in logging_cfg:
                config.log_level = str(logging_cfg["level"]).upper()

        return config

    def predicates(self) -> list[Predicate]:
        """Build the predicates described by the include/exclude rules.

        Returns:
            Predicates in a fixed order: excluded formats, names and parents,
            then included formats, names and parents.

        """
        predicates: list[Predicate] = []
        predicates.extend(file_excludes_format(t) for t in self.exclude.formats)
        predicates.extend(file_excludes(p) for p in self.exclude.names)
        predicates.extend(parent_excludes(p) for p in self.exclude.parents)
        predicates.extend(file_includes_format(t) for t in self.include.formats)
        predicates.extend(file_includes(p) for p in self.include.names)
        predicates.extend(parent_includes(p) for p in self.include.parents)
        return predicates

    def build_walker(self, root: Path | None = None) -> FileWalker:
        """Create a walker with this configuration's depths and predicates.

        Args:
            root: Directory to walk. Uses the configured root if None.

        Raises:
            ValueError: If no root is given and none is configured.

        """
        location = root or self.root
        if location is None:
            raise ValueError("no root directory configured")

        walker = FileWalker(location).with_min_depth(self.min_depth)
        if self.max_depth is not None:
            walker.set_max_depth(self.max_depth)
        for predicate in self.predicates():
            walker.add_predicate(predicate)
        return walker

    def save(self, config_path: Path | None = None) -> None:
        """Save configuration to YAML file.

        Args:
            config_path: Path to save config. Uses default if None.

        """
        if config_path is None:
            config_path = self.get_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "root": str(self.root) if self.root else None,
            "min_depth": self.min_depth,
            "max_depth": self.max_depth,
            "exclude": self.exclude._to_dict(),
            "include": self.include._to_dict(),
            "logging": {
                "file": str(self.log_file) if self.log_file else None,
                "level": self.log_level,
            },
        }

        with config_path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
