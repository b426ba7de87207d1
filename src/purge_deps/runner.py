"""Probe for external tools and run them as subprocesses."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .errors import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of an external command."""

    args: tuple[str, ...]
    cwd: Path | None
    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


def is_tool_available(name: str) -> bool:
    """Check whether an executable can be resolved on the search path.

    ``shutil.which`` honours PATHEXT on Windows, so ``npm`` also finds
    ``npm.cmd`` there.
    """
    return shutil.which(name) is not None


def run_command(args: list[str], cwd: Path | None = None) -> CommandResult:
    """Run an external command and capture its output.

    The executable is resolved on PATH before starting so platform-specific
    wrappers are found. The subprocess gets ``cwd`` as its working directory;
    the current process never changes directory.

    Args:
        args: Command and its arguments.
        cwd: Working directory for the subprocess, or None for the current one.

    Returns:
        CommandResult with the exit status and captured output.

    Raises:
        CommandError: If the executable is missing or cannot be started.

    """
    executable = shutil.which(args[0])
    if executable is None:
        raise CommandError(args, cwd, None, f"{args[0]}: executable not found")

    logger.debug("Running %s in %s", " ".join(args), cwd or ".")
    try:
        completed = subprocess.run(
            [executable, *args[1:]],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except (subprocess.SubprocessError, OSError) as e:
        raise CommandError(args, cwd, None, str(e)) from e

    return CommandResult(
        args=tuple(args),
        cwd=cwd,
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )


ToolProbe = Callable[[str], bool]
CommandRunner = Callable[[list[str], Path | None], CommandResult]
