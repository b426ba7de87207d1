"""Static table of supported ecosystems, in match priority order."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TaskSpec:
    """Catalog entry describing one ecosystem.

    Exactly one of ``target`` (sibling directory to delete) or ``command``
    (clean command run in the manifest's directory) is set.
    """

    name: str
    tool: str
    manifest_names: frozenset[str] = frozenset()
    manifest_suffixes: tuple[str, ...] = ()
    target: str | None = None
    command: tuple[str, ...] = ()
    tolerate_failure: bool = False

    def __post_init__(self) -> None:
        if (self.target is None) == (not self.command):
            raise ValueError(f"{self.name}: exactly one of target or command is required")

    def matches(self, file_name: str) -> bool:
        """Check a file name against exact names and case-insensitive suffixes."""
        if file_name in self.manifest_names:
            return True
        lowered = file_name.lower()
        return any(lowered.endswith(suffix) for suffix in self.manifest_suffixes)


CATALOG: tuple[TaskSpec, ...] = (
    TaskSpec(
        name="composer",
        tool="composer",
        manifest_names=frozenset({"composer.json"}),
        target="vendor",
    ),
    TaskSpec(
        name="npm",
        tool="npm",
        manifest_names=frozenset({"package.json"}),
        target="node_modules",
    ),
    TaskSpec(
        name="cargo",
        tool="cargo",
        manifest_names=frozenset({"Cargo.toml", "cargo.toml"}),
        command=("cargo", "clean"),
    ),
    # Many .csproj files are not dotnet-core projects, so a failing clean is expected
    TaskSpec(
        name="dotnet",
        tool="dotnet",
        manifest_suffixes=(".csproj", ".sln"),
        command=("dotnet", "clean", "--nologo"),
        tolerate_failure=True,
    ),
)
