"""Task registry built from the ecosystem catalog."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors import NoTasksAvailableError
from ..runner import CommandRunner, ToolProbe, is_tool_available, run_command
from .actions import CleanCommandTask, DryRunTask, RemoveSiblingTask
from .base import Task
from .catalog import CATALOG, TaskSpec

if TYPE_CHECKING:
    from ..config import PurgeConfig

logger = logging.getLogger(__name__)

__all__ = ["CATALOG", "Task", "TaskSpec", "build_registry", "make_task"]


def make_task(
    spec: TaskSpec,
    *,
    dry_run: bool,
    probe: ToolProbe = is_tool_available,
    runner: CommandRunner = run_command,
) -> Task:
    """Build the real or dry-run task for a catalog entry."""
    if dry_run:
        return DryRunTask(spec, probe)
    if spec.target is not None:
        return RemoveSiblingTask(spec, probe)
    return CleanCommandTask(spec, probe, runner)


def build_registry(
    config: PurgeConfig,
    *,
    dry_run: bool,
    probe: ToolProbe = is_tool_available,
    runner: CommandRunner = run_command,
    catalog: tuple[TaskSpec, ...] = CATALOG,
) -> tuple[Task, ...]:
    """Instantiate the tasks usable on this system, in catalog order.

    Availability is probed once per entry. Entries whose tool is missing or
    whose name is listed in ``config.tasks_disabled`` are dropped.

    Raises:
        NoTasksAvailableError: If no entry survives filtering.

    """
    tasks: list[Task] = []

    for spec in catalog:
        if spec.name in config.tasks_disabled:
            logger.info("Task disabled by config: %s", spec.name)
            continue

        task = make_task(spec, dry_run=dry_run, probe=probe, runner=runner)
        if not task.is_available():
            logger.debug("Skipping %s: '%s' not found on PATH", spec.name, spec.tool)
            continue

        tasks.append(task)
        logger.debug("Loaded task: %s", spec.name)

    if not tasks:
        raise NoTasksAvailableError([spec.tool for spec in catalog])

    return tuple(tasks)
