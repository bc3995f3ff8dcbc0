"""Protocols (ports) for the collaborators the hook engine drives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path


@dataclass(frozen=True)
class CompletedCommand:
    """Exit status and fully captured output of a spawned process."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class VCSAdapter(Protocol):
    """Repository queries and the only writes the engine makes to the index."""

    def root(self) -> Path: ...
    def git_path(self, name: str) -> Path: ...
    def clone_or_update(self, origin: str, local_path: Path) -> Path: ...
    def checkout(self, reference: str, repo_path: Path) -> None: ...
    def changed_files(self, staged: bool) -> list[str]: ...
    def modified_files(self) -> list[str]: ...
    def stage(self, paths: Sequence[str]) -> None: ...


class ProcessAdapter(Protocol):
    """Blocking process spawning with captured output."""

    def spawn(
        self,
        command: str,
        args: Sequence[str],
        cwd: Path | None = None,
        env_overrides: Mapping[str, str] | None = None,
    ) -> CompletedCommand: ...
