"""Task implementations: sibling removal, clean commands and dry runs."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import CommandError, RemovalError
from ..runner import CommandRunner, ToolProbe, is_tool_available, run_command

if TYPE_CHECKING:
    from .catalog import TaskSpec

logger = logging.getLogger(__name__)


class _CatalogTask:
    """Shared availability and matching behaviour for catalog-backed tasks."""

    def __init__(self, spec: TaskSpec, probe: ToolProbe = is_tool_available) -> None:
        self.spec = spec
        self.name = spec.name
        self._probe = probe

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def is_available(self) -> bool:
        return self._probe(self.spec.tool)

    def matches(self, file_name: str) -> bool:
        return self.spec.matches(file_name)


class RemoveSiblingTask(_CatalogTask):
    """Deletes a dependency directory that sits next to the manifest."""

    def __init__(self, spec: TaskSpec, probe: ToolProbe = is_tool_available) -> None:
        if spec.target is None:
            raise ValueError(f"{spec.name}: removal task needs a target directory")
        super().__init__(spec, probe)
        self.target: str = spec.target

    def run(self, manifest_path: Path) -> None:
        """Remove ``spec.target`` from the manifest's directory.

        A missing target is not an error. A symlink or plain file with the
        target's name is unlinked, never followed.
        """
        target = manifest_path.parent / self.target

        try:
            if target.is_symlink() or not target.is_dir():
                target.unlink()
            else:
                shutil.rmtree(target)
        except FileNotFoundError:
            logger.debug("Nothing to remove at %s", target)
            return
        except OSError as e:
            raise RemovalError(target, e) from e

        logger.info("Removed %s", target)


class CleanCommandTask(_CatalogTask):
    """Runs the ecosystem's own clean command in the manifest's directory."""

    def __init__(
        self,
        spec: TaskSpec,
        probe: ToolProbe = is_tool_available,
        runner: CommandRunner = run_command,
    ) -> None:
        super().__init__(spec, probe)
        self._runner = runner

    def run(self, manifest_path: Path) -> None:
        """Run ``spec.command`` with the manifest's directory as working directory.

        Raises:
            CommandError: On non-zero exit, unless the catalog entry tolerates failure.

        """
        command = list(self.spec.command)
        cwd = manifest_path.parent

        try:
            result = self._runner(command, cwd)
        except CommandError as e:
            if not self.spec.tolerate_failure:
                raise
            logger.warning("%s", e)
            return

        if result.success:
            logger.info("Ran %s in %s", " ".join(command), cwd)
            return

        error = CommandError(command, cwd, result.returncode, result.stderr or result.stdout)
        if not self.spec.tolerate_failure:
            raise error
        logger.warning("Ignoring failed clean: %s", error)


class DryRunTask(_CatalogTask):
    """Matches like the real task but leaves the filesystem untouched."""

    def run(self, manifest_path: Path) -> None:
        if self.spec.target is not None:
            action = f"remove {manifest_path.parent / self.spec.target}"
        else:
            action = f"run {' '.join(self.spec.command)} in {manifest_path.parent}"
        logger.debug("Dry run, would %s", action)
