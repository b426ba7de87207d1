"""Clear global package-manager caches after a successful purge."""

from __future__ import annotations

import logging
from typing import Sequence

from .errors import CacheClearError, CommandError
from .runner import CommandRunner, run_command

logger = logging.getLogger(__name__)

DEFAULT_CACHE_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("go", "clean", "-cache"),
    ("go", "clean", "-modcache"),
    ("go", "clean", "-testcache"),
    ("npm", "cache", "clean", "--force"),
    ("composer", "clear-cache"),
)


def clear_global_caches(
    commands: Sequence[Sequence[str]] = DEFAULT_CACHE_COMMANDS,
    *,
    runner: CommandRunner = run_command,
) -> int:
    """Run each cache-clearing command in order, stopping at the first failure.

    Commands are not gated on tool availability: a missing tool is a failure.

    Args:
        commands: Commands to run, each an argv sequence.
        runner: Process runner.

    Returns:
        Number of commands that ran successfully.

    Raises:
        CacheClearError: On the first command that cannot start or exits non-zero.

    """
    cleared = 0

    for command in commands:
        argv = list(command)
        try:
            result = runner(argv, None)
        except CommandError as e:
            raise CacheClearError(argv, e) from e

        if not result.success:
            raise CacheClearError(
                argv,
                CommandError(argv, None, result.returncode, result.stderr or result.stdout),
            )

        logger.info("Cleared cache: %s", " ".join(argv))
        cleared += 1

    return cleared
