"""Exception taxonomy and process exit codes."""

from __future__ import annotations

from pathlib import Path

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


class PurgeError(Exception):
    """Base class for all purge failures."""

    exit_code: int = EXIT_FAILURE


class WalkError(PurgeError):
    """A directory could not be listed during traversal."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"failed to read content of directory {path}: {cause}")


class RemovalError(PurgeError):
    """A dependency directory could not be removed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"failed to remove {path}: {cause}")


class CommandError(PurgeError):
    """An external clean command exited unsuccessfully."""

    def __init__(
        self,
        command: list[str],
        cwd: Path | None,
        returncode: int | None,
        stderr: str = "",
    ) -> None:
        self.command = list(command)
        self.cwd = cwd
        self.returncode = returncode
        self.stderr = stderr

        joined = " ".join(command)
        if returncode is None:
            message = f"failed to start '{joined}'"
        else:
            message = f"'{joined}' exited with status {returncode}"
        if cwd is not None:
            message += f" in {cwd}"
        if stderr.strip():
            message += f": {stderr.strip()}"
        super().__init__(message)


class CacheClearError(PurgeError):
    """A global cache-clearing command failed."""

    def __init__(self, command: list[str], cause: Exception) -> None:
        self.command = list(command)
        self.cause = cause
        super().__init__(f"failed to clear cache with '{' '.join(command)}': {cause}")


class ConfigurationError(PurgeError):
    """Invalid configuration or nothing to do."""

    exit_code = EXIT_USAGE


class NoTasksAvailableError(ConfigurationError):
    """No ecosystem tool required by the task catalog is installed."""

    def __init__(self, checked: list[str]) -> None:
        self.checked = list(checked)
        super().__init__(
            "no supported tool found on PATH (checked: " + ", ".join(checked) + ")"
        )
