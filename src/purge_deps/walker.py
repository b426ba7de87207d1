"""Recursive first-match traversal over a project tree."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Sequence

from .errors import WalkError

if TYPE_CHECKING:
    from .tasks import Task

logger = logging.getLogger(__name__)


@dataclass
class WalkStats:
    """Counters collected during a walk."""

    directories_visited: int = 0
    matches: int = 0


def print_path(path: Path) -> None:
    """Write a matched path to stdout, one per line."""
    sys.stdout.write(f"{path}\n")
    sys.stdout.flush()


def _list_directory(path: Path) -> list[os.DirEntry[str]]:
    try:
        with os.scandir(path) as it:
            return sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise WalkError(path, e) from e


def walk(
    path: Path,
    tasks: Sequence[Task],
    *,
    emit: Callable[[Path], None] = print_path,
    stats: WalkStats | None = None,
) -> WalkStats:
    """Walk ``path`` and run the first matching task in each project directory.

    Files in a directory are checked against ``tasks`` in order. The first
    match is emitted and its task run, and the directory is then done: no
    further files are checked and its subdirectories are not entered.
    Directories without a match are descended into, in name order.

    Symlinks, devices and pipes are neither matched nor followed. There is no
    cycle detection; very deep trees are bounded by the recursion limit.

    Args:
        path: Absolute directory to walk.
        tasks: Registry in priority order.
        emit: Called with each matched manifest path before its task runs.
        stats: Counters to update; a fresh instance is created if None.

    Returns:
        The updated counters.

    Raises:
        WalkError: If any directory cannot be listed.
        PurgeError: Whatever a task raises, unchanged.

    """
    if stats is None:
        stats = WalkStats()

    stats.directories_visited += 1
    entries = _list_directory(path)

    for entry in entries:
        if not entry.is_file(follow_symlinks=False):
            continue
        for task in tasks:
            if not task.matches(entry.name):
                continue
            manifest = path / entry.name
            logger.debug("%s matched %s", task.name, manifest)
            stats.matches += 1
            emit(manifest)
            task.run(manifest)
            return stats

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            walk(path / entry.name, tasks, emit=emit, stats=stats)

    return stats
