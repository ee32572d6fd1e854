"""Command-line entry point for treewalk."""

from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import WalkConfig

EXIT_OK = 0
EXIT_WALK_ERROR = 1
EXIT_USAGE = 2
EXIT_NOT_A_DIRECTORY = 3
EXIT_CONFIG_EXISTS = 4


def depth(value: str) -> int:
    """Parse a depth argument, rejecting negative numbers."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid depth: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"depth must be >= 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="treewalk",
        description="Walk a directory tree and print the files that pass the configured filters",
    )

    parser.add_argument("path", nargs="?", type=Path, default=None, help="Directory to walk")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to configuration file",
    )
    parser.add_argument("--min-depth", type=depth, default=None, help="Skip files above this depth")
    parser.add_argument("--max-depth", type=depth, default=None, help="Do not list directories at this depth")

    filters = parser.add_argument_group("filters")
    filters.add_argument(
        "--exclude-name", action="append", default=[], metavar="PATTERN", help="Skip files whose name matches"
    )
    filters.add_argument(
        "--include-name", action="append", default=[], metavar="PATTERN", help="Only files whose name matches"
    )
    filters.add_argument(
        "--exclude-format", action="append", default=[], metavar="TYPE", help="Skip files of this media type"
    )
    filters.add_argument(
        "--include-format", action="append", default=[], metavar="TYPE", help="Only files of this media type"
    )
    filters.add_argument(
        "--exclude-parent",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Stop inside directories whose name matches",
    )
    filters.add_argument(
        "--include-parent",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Only files below a directory whose name matches",
    )

    parser.add_argument("--count", action="store_true", help="Print the number of matching files")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--show-config", action="store_true", help="Show the effective configuration and exit")
    parser.add_argument("--init-config", action="store_true", help="Create the default configuration file and exit")

    return parser


def setup_logging(config: WalkConfig) -> logging.Logger:
    """Set up logging for treewalk.

    Log records go to stderr so that stdout only carries walk results. The
    console only shows warnings unless debug logging is enabled.

    Returns:
        Configured logger instance.

    """
    logger = logging.getLogger("treewalk")
    logger.setLevel(getattr(logging, config.log_level, logging.INFO))

    if logger.handlers:
        logger.handlers.clear()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=False,
    )
    console_handler.setLevel(logging.DEBUG if logger.level == logging.DEBUG else logging.WARNING)
    logger.addHandler(console_handler)

    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
        logger.addHandler(file_handler)

    return logger


def apply_args(config: WalkConfig, args: argparse.Namespace) -> WalkConfig:
    """Merge command-line options into a loaded configuration.

    Depth options replace the configured values; filters are appended.
    """
    if args.min_depth is not None:
        config.min_depth = args.min_depth
    if args.max_depth is not None:
        config.max_depth = args.max_depth
    if args.verbose:
        config.log_level = "DEBUG"

    config.exclude.names.extend(args.exclude_name)
    config.exclude.formats.extend(args.exclude_format)
    config.exclude.parents.extend(args.exclude_parent)
    config.include.names.extend(args.include_name)
    config.include.formats.extend(args.include_format)
    config.include.parents.extend(args.include_parent)
    return config


def cmd_show_config(config: WalkConfig) -> int:
    """Print the effective configuration as a table."""
    console = Console()
    table = Table(title="Current Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Root", str(config.root) if config.root else "-")
    table.add_row("Min depth", str(config.min_depth))
    table.add_row("Max depth", "unbounded" if config.max_depth is None else str(config.max_depth))
    table.add_row("Exclude names", "\n".join(config.exclude.names))
    table.add_row("Exclude formats", "\n".join(config.exclude.formats))
    table.add_row("Exclude parents", "\n".join(config.exclude.parents))
    table.add_row("Include names", "\n".join(config.include.names))
    table.add_row("Include formats", "\n".join(config.include.formats))
    table.add_row("Include parents", "\n".join(config.include.parents))
    table.add_row("Log file", str(config.log_file) if config.log_file else "-")
    table.add_row("Log level", config.log_level)

    console.print(table)
    return EXIT_OK


def cmd_init_config(config_path: Path | None) -> int:
    """Write a default configuration file unless one already exists."""
    console = Console()
    config_path = config_path or WalkConfig.get_config_path()
    if config_path.exists():
        console.print(f"[yellow]Config already exists: {config_path}[/yellow]")
        return EXIT_CONFIG_EXISTS
    WalkConfig().save(config_path)
    console.print(f"[green]Created config: {config_path}[/green]")
    return EXIT_OK


def cmd_walk(config: WalkConfig, path: Path, *, count: bool = False) -> int:
    """Walk ``path`` and print every admitted file.

    Returns:
        Exit code.

    """
    err_console = Console(stderr=True, highlight=False, markup=False, emoji=False)

    try:
        walker = config.build_walker(path)
    except re.error as e:
        err_console.print(f"error: invalid pattern {e.pattern!r}: {e}")
        return EXIT_USAGE
    except ValueError as e:
        err_console.print(f"error: {e}")
        return EXIT_USAGE

    matched = 0

    def emit(child: Path) -> None:
        nonlocal matched
        matched += 1
        print(child)

    try:
        walker.with_callback(emit).walk()
    except OSError as e:
        err_console.print(f"error: {e}")
        return EXIT_WALK_ERROR

    if count:
        print(f"{matched} files")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code.

    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.init_config:
        return cmd_init_config(args.config)

    config = apply_args(WalkConfig.load(args.config), args)
    setup_logging(config)

    if args.show_config:
        return cmd_show_config(config)

    path = args.path or config.root
    if path is None:
        parser.print_usage(sys.stderr)
        print("error: missing 'path'", file=sys.stderr)
        return EXIT_USAGE

    path = path.expanduser()
    if not path.is_dir():
        parser.print_usage(sys.stderr)
        print(f"error: '{path}' not a directory", file=sys.stderr)
        return EXIT_NOT_A_DIRECTORY

    return cmd_walk(config, path, count=args.count)


if __name__ == "__main__":
    sys.exit(main())
