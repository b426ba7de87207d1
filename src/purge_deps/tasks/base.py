"""Base protocol for cleanup tasks."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class Task(Protocol):
    """Interface for ecosystem-specific cleanup strategies."""

    name: str

    def is_available(self) -> bool:
        """Check whether the external tool this task needs is installed.

        Returns:
            True if the task can act on this system.

        """
        ...

    def matches(self, file_name: str) -> bool:
        """Check if a file name marks a project root for this ecosystem.

        Args:
            file_name: Bare file name, without directory.

        Returns:
            True if the directory holding the file belongs to this task.

        """
        ...

    def run(self, manifest_path: Path) -> None:
        """Clean the project whose manifest is ``manifest_path``.

        Args:
            manifest_path: Full path of the matched manifest file.

        Raises:
            PurgeError: If cleanup fails. Errors carry their own context.

        """
        ...
