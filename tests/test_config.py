"""Tests for configuration loading and saving."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from treewalk.config import FilterRules, WalkConfig
from treewalk.predicates import PredicateRole


class TestWalkConfigDefaults:
    """Tests for default configuration values."""

    def test_default_values(self) -> None:
        """Test that defaults are sensible."""
        config = WalkConfig()

        assert config.root is None
        assert config.min_depth == 0
        assert config.max_depth == 4
        assert config.exclude == FilterRules()
        assert config.include == FilterRules()
        assert config.log_file is None
        assert config.log_level == "INFO"

    def test_default_config_path(self) -> None:
        """Test the default configuration file location."""
        assert WalkConfig.get_config_path() == Path.home() / ".config/treewalk/config.yaml"

    def test_filter_lists_not_shared(self) -> None:
        """Test that each config gets its own filter lists."""
        first = WalkConfig()
        second = WalkConfig()
        first.exclude.names.append("main.*")
        assert second.exclude.names == []


class TestConfigLoad:
    """Tests for loading configuration from file."""

    def test_load_nonexistent_file(self, tmp_path: Path) -> None:
        """Test loading returns defaults when file doesn't exist."""
        config = WalkConfig.load(tmp_path / "nonexistent.yaml")
        assert config == WalkConfig()

    def test_load_empty_file(self, tmp_path: Path) -> None:
        """Test loading empty file returns defaults."""
        config_path = tmp_path / "empty.yaml"
        config_path.touch()

        assert WalkConfig.load(config_path) == WalkConfig()

    def test_load_partial_config(self, tmp_path: Path) -> None:
        """Test loading partial config merges with defaults."""
        config_path = tmp_path / "partial.yaml"
        config_path.write_text("min_depth: 2\n")

        config = WalkConfig.load(config_path)

        assert config.min_depth == 2
        assert config.max_depth == 4  # Default

    def test_load_full_config(self, tmp_path: Path) -> None:
        """Test loading full configuration."""
        config_path = tmp_path / "full.yaml"
        data = {
            "root": "/srv/archive",
            "min_depth": 1,
            "max_depth": 6,
            "exclude": {
                "names": ["main.*"],
                "formats": ["text/plain"],
                "parents": ["SCANS"],
            },
            "include": {
                "names": [r"\.rs$"],
                "formats": ["image/png"],
                "parents": ["src"],
            },
            "logging": {
                "file": "/var/log/treewalk.log",
                "level": "debug",
            },
        }
        with config_path.open("w") as f:
            yaml.dump(data, f)

        config = WalkConfig.load(config_path)

        assert config.root == Path("/srv/archive")
        assert config.min_depth == 1
        assert config.max_depth == 6
        assert config.exclude == FilterRules(names=["main.*"], formats=["text/plain"], parents=["SCANS"])
        assert config.include == FilterRules(names=[r"\.rs$"], formats=["image/png"], parents=["src"])
        assert config.log_file == Path("/var/log/treewalk.log")
        assert config.log_level == "DEBUG"

    def test_null_max_depth_is_unbounded(self, tmp_path: Path) -> None:
        """Test that an explicit null removes the depth limit."""
        config_path = tmp_path / "unbounded.yaml"
        config_path.write_text("max_depth: null\n")

        assert WalkConfig.load(config_path).max_depth is None

    def test_null_min_depth_is_zero(self, tmp_path: Path) -> None:
        """Test that an explicit null minimum falls back to zero."""
        config_path = tmp_path / "null_min.yaml"
        config_path.write_text("min_depth: null\n")

        assert WalkConfig.load(config_path).min_depth == 0

    def test_load_expands_tilde(self, tmp_path: Path) -> None:
        """Test that ~ in paths is expanded."""
        config_path = tmp_path / "tilde.yaml"
        config_path.write_text("root: ~/projects\nlogging:\n  file: ~/logs/walk.log\n")

        config = WalkConfig.load(config_path)

        assert config.root == Path.home() / "projects"
        assert config.log_file == Path.home() / "logs/walk.log"

    def test_load_uses_default_path(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Test that load() uses the default path when no path is specified."""
        custom_default = tmp_path / "default_config.yaml"
        monkeypatch.setattr(WalkConfig, "get_config_path", classmethod(lambda cls: custom_default))

        custom_default.write_text("max_depth: 9\n")

        assert WalkConfig.load().max_depth == 9


class TestConfigSave:
    """Tests for saving configuration."""

    def test_save_creates_parent_directories(self, tmp_path: Path) -> None:
        """Test that save() creates missing directories."""
        config_path = tmp_path / "nested" / "dir" / "config.yaml"
        WalkConfig().save(config_path)
        assert config_path.exists()

    def test_save_and_reload(self, tmp_path: Path) -> None:
        """Test that a saved config loads back unchanged."""
        config = WalkConfig(
            root=tmp_path / "root",
            min_depth=1,
            max_depth=None,
            exclude=FilterRules(names=["main.*"], parents=["SCANS"]),
            include=FilterRules(formats=["image/png"]),
            log_file=tmp_path / "walk.log",
            log_level="DEBUG",
        )
        config_path = tmp_path / "config.yaml"

        config.save(config_path)

        assert WalkConfig.load(config_path) == config

    def test_saved_file_is_readable_yaml(self, tmp_path: Path) -> None:
        """Test the layout of the written file."""
        config_path = tmp_path / "config.yaml"
        WalkConfig(exclude=FilterRules(names=["main.*"])).save(config_path)

        data = yaml.safe_load(config_path.read_text())

        assert data["exclude"]["names"] == ["main.*"]
        assert data["logging"]["level"] == "INFO"


class TestPredicates:
    """Tests for building predicates from filter rules."""

    def test_no_rules_no_predicates(self) -> None:
        """Test that an empty config produces no predicates."""
        assert WalkConfig().predicates() == []

    def test_predicate_roles_in_order(self) -> None:
        """Test the order and roles of generated predicates."""
        config = WalkConfig(
            exclude=FilterRules(names=["main.*"], formats=["text/plain"], parents=["SCANS"]),
            include=FilterRules(names=["lib"], formats=["image/png"], parents=["src"]),
        )

        roles = [p.role for p in config.predicates()]

        assert roles == [
            PredicateRole.FILE,  # exclude format
            PredicateRole.FILE,  # exclude name
            PredicateRole.DIR_HARD,  # exclude parent
            PredicateRole.FILE,  # include format
            PredicateRole.FILE,  # include name
            PredicateRole.DIR_SOFT,  # include parent
        ]

    def test_exclude_name_predicate_behaviour(self, tmp_path: Path) -> None:
        """Test that the generated predicate applies the configured pattern."""
        (tmp_path / "main.rs").touch()
        (tmp_path / "lib.rs").touch()
        (predicate,) = WalkConfig(exclude=FilterRules(names=["main.*"])).predicates()

        assert predicate.evaluate(tmp_path / "main.rs") is False
        assert predicate.evaluate(tmp_path / "lib.rs") is True


class TestBuildWalker:
    """Tests for creating walkers from configuration."""

    def test_uses_explicit_root(self, tmp_path: Path) -> None:
        """Test that an explicit root wins over the configured one."""
        config = WalkConfig(root=Path("/elsewhere"))
        walker = config.build_walker(tmp_path)
        assert walker.location == tmp_path

    def test_falls_back_to_configured_root(self, tmp_path: Path) -> None:
        """Test that the configured root is used when none is given."""
        walker = WalkConfig(root=tmp_path).build_walker()
        assert walker.location == tmp_path

    def test_no_root_raises(self) -> None:
        """Test that a root is required."""
        with pytest.raises(ValueError, match="no root"):
            WalkConfig().build_walker()

    def test_copies_depths_and_predicates(self, tmp_path: Path) -> None:
        """Test that the walker receives the configured bounds and filters."""
        config = WalkConfig(min_depth=1, max_depth=3, exclude=FilterRules(names=["main.*"], parents=["SCANS"]))

        walker = config.build_walker(tmp_path)

        assert walker.min_depth == 1
        assert walker.max_depth == 3
        assert [p.role for p in walker.predicates] == [PredicateRole.FILE, PredicateRole.DIR_HARD]
        assert walker.callbacks == []

    def test_unbounded_max_depth(self, tmp_path: Path) -> None:
        """Test that a null maximum leaves the walker unbounded."""
        walker = WalkConfig(max_depth=None).build_walker(tmp_path)
        assert walker.max_depth is None

    def test_walker_runs(self, tmp_path: Path) -> None:
        """Test that a configured walker filters a real tree."""
        (tmp_path / "main.rs").touch()
        (tmp_path / "lib.rs").touch()
        seen: list[str] = []

        WalkConfig(exclude=FilterRules(names=["main.*"])).build_walker(tmp_path).with_callback(
            lambda p: seen.append(p.name)
        ).walk()

        assert seen == ["lib.rs"]
