"""Main entry point for purge-deps."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import PurgeConfig
from .errors import EXIT_FAILURE, EXIT_SUCCESS, ConfigurationError, PurgeError
from .finalizer import clear_global_caches
from .runner import is_tool_available
from .tasks import CATALOG, build_registry
from .walker import walk

LOGGER_NAME = "purge_deps"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments without the program name. Uses sys.argv if None.

    Returns:
        Parsed arguments.

    """
    parser = argparse.ArgumentParser(
        prog="purge-deps",
        description=(
            "Remove dependency caches (node_modules, vendor, build output) "
            "of every project found beneath PATH"
        ),
    )

    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Root directory to search (default: current directory)",
    )
    parser.add_argument(
        "--dry",
        "-n",
        action="store_true",
        help="Print matched manifests only - do not remove or run anything",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--no-cache-clear",
        action="store_true",
        help="Skip clearing global package-manager caches after the purge",
    )
    parser.add_argument(
        "--list-tasks",
        action="store_true",
        help="Show supported ecosystems and whether their tools are installed",
    )
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write the current configuration to the config file and exit",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Log debug output")
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Log errors only")

    return parser.parse_args(argv)


def setup_logging(config: PurgeConfig, console: Console, level: str | None = None) -> logging.Logger:
    """Set up logging to stderr and, if configured, a log file.

    Stdout is reserved for matched paths, so the console handler writes to
    the stderr console.

    Args:
        config: Purge configuration.
        console: Stderr console for the Rich handler.
        level: Overrides ``config.log_level`` when given.

    Returns:
        Configured package logger.

    Raises:
        ConfigurationError: If the log file cannot be opened.

    """
    logger = logging.getLogger(LOGGER_NAME)

    level_name = (level or config.log_level).upper()
    numeric_level = logging.getLevelName(level_name)
    invalid_level = not isinstance(numeric_level, int)
    if invalid_level:
        numeric_level = logging.INFO
    logger.setLevel(numeric_level)

    # Clear existing handlers to avoid duplicates when main() runs twice
    if logger.handlers:
        logger.handlers.clear()

    console_handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
    )
    console_handler.setLevel(numeric_level)
    console_handler.addFilter(lambda record: getattr(record, "console", True))
    logger.addHandler(console_handler)

    if config.log_file is not None:
        try:
            config.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(config.log_file)
        except OSError as e:
            raise ConfigurationError(f"cannot open log file {config.log_file}: {e}") from e
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")
        )
        logger.addHandler(file_handler)

    if invalid_level:
        logger.warning("Unknown log level %r, using INFO", level_name)

    return logger


def resolve_root(path: str) -> Path:
    """Turn the CLI path argument into an absolute, normalized path.

    Raises:
        OSError: If the current directory cannot be determined.

    """
    return Path(os.path.abspath(os.path.expanduser(path)))


def cmd_list_tasks(config: PurgeConfig, console: Console) -> int:
    """Print the task catalog with tool availability.

    Returns:
        Exit code.

    """
    table = Table(title="Supported ecosystems")
    table.add_column("Task", style="cyan")
    table.add_column("Manifest", style="green")
    table.add_column("Action")
    table.add_column("Tool")

    for spec in CATALOG:
        manifests = sorted(spec.manifest_names) + [f"*{s}" for s in spec.manifest_suffixes]
        if spec.target is not None:
            action = f"remove {spec.target}/"
        else:
            action = " ".join(spec.command)

        if spec.name in config.tasks_disabled:
            tool = "[yellow]disabled[/yellow]"
        elif is_tool_available(spec.tool):
            tool = f"[green]{spec.tool}[/green]"
        else:
            tool = f"[red]{spec.tool} missing[/red]"

        table.add_row(spec.name, ", ".join(manifests), action, tool)

    console.print(table)
    return EXIT_SUCCESS


def cmd_purge(config: PurgeConfig, args: argparse.Namespace, logger: logging.Logger) -> int:
    """Walk the tree, clean every matched project and clear global caches.

    Returns:
        Exit code.

    """
    try:
        root = resolve_root(args.path)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"failed to parse given path {args.path}: {e}") from e

    tasks = build_registry(config, dry_run=args.dry)
    logger.debug("Active tasks: %s", ", ".join(task.name for task in tasks))

    stats = walk(root, tasks)
    logger.info(
        "Scanned %d directories, %d projects %s",
        stats.directories_visited,
        stats.matches,
        "found" if args.dry else "cleaned",
    )

    if args.dry or args.no_cache_clear or not config.clear_caches:
        return EXIT_SUCCESS

    clear_global_caches(config.cache_commands)
    return EXIT_SUCCESS


def report_error(console: Console, logger: logging.Logger | None, message: str) -> None:
    """Write a fatal diagnostic to stderr on one unwrapped line.

    The message is also logged for the log file but kept off the Rich
    handler, which wraps long paths at the console width.
    """
    console.print(message, style="red", markup=False, highlight=False, soft_wrap=True)
    if logger is not None:
        logger.error("%s", message, extra={"console": False})


def cmd_init_config(config: PurgeConfig, args: argparse.Namespace, console: Console) -> int:
    """Write the loaded configuration to the config file.

    Returns:
        Exit code.

    """
    config_path = args.config or PurgeConfig.get_config_path()
    if config_path.exists():
        console.print(f"Config already exists: {config_path}", style="yellow", markup=False)
        return EXIT_FAILURE

    try:
        config.save(config_path)
    except OSError as e:
        raise ConfigurationError(f"cannot write config {config_path}: {e}") from e

    console.print(f"Created config: {config_path}", style="green", markup=False)
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code.

    """
    args = parse_args(argv)
    console = Console(stderr=True)
    logger: logging.Logger | None = None

    try:
        config = PurgeConfig.load(args.config)
        if args.init_config:
            return cmd_init_config(config, args, console)

        level = "DEBUG" if args.verbose else "ERROR" if args.quiet else None
        logger = setup_logging(config, console, level)

        if args.list_tasks:
            return cmd_list_tasks(config, console)

        return cmd_purge(config, args, logger)
    except PurgeError as e:
        report_error(console, logger, f"purging failed with an error: {e}")
        return e.exit_code
    except RecursionError:
        report_error(console, logger, "purging failed: directory tree is nested too deeply")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
