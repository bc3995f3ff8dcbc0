"""In-memory adapters for testing (no git, no child processes)."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import FetchError, ResolutionError
from ._protocols import CompletedCommand

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence


class InMemoryVCSAdapter:
    """Fake repository state.

    ``origins`` maps an origin to a directory copied in place of a clone.
    ``revisions`` lists references checkout accepts; None accepts any.
    """

    def __init__(
        self,
        root: Path,
        staged: Sequence[str] = (),
        untracked: Sequence[str] = (),
        modified: Sequence[str] = (),
        origins: Mapping[str, Path] | None = None,
        revisions: Sequence[str] | None = None,
    ) -> None:
        self._root = Path(root)
        self.staged = list(staged)
        self.untracked = list(untracked)
        self.modified = list(modified)
        self._origins = dict(origins or {})
        self._revisions = set(revisions) if revisions is not None else None
        self.cloned: list[tuple[str, Path]] = []
        self.checkouts: list[tuple[str, Path]] = []
        self.stage_calls: list[list[str]] = []

    def root(self) -> Path:
        return self._root

    def git_path(self, name: str) -> Path:
        return self._root / ".git" / name

    def clone_or_update(self, origin: str, local_path: Path) -> Path:
        template = self._origins.get(origin)
        if template is None:
            raise FetchError(f"unknown origin {origin}", url=origin)
        shutil.copytree(template, local_path, dirs_exist_ok=True)
        self.cloned.append((origin, Path(local_path)))
        return Path(local_path)

    def checkout(self, reference: str, repo_path: Path) -> None:
        if self._revisions is not None and reference not in self._revisions:
            raise FetchError(f"could not find reference {reference} in {repo_path}")
        self.checkouts.append((reference, Path(repo_path)))

    def changed_files(self, staged: bool) -> list[str]:
        return list(self.staged if staged else self.untracked)

    def modified_files(self) -> list[str]:
        return list(self.modified)

    def stage(self, paths: Sequence[str]) -> None:
        self.stage_calls.append(list(paths))
        for p in paths:
            if p in self.untracked:
                self.untracked.remove(p)
            if p in self.modified:
                self.modified.remove(p)
            if p not in self.staged:
                self.staged.append(p)


class BrokenVCSAdapter(InMemoryVCSAdapter):
    """Every repository query fails, as outside a repository."""

    def root(self) -> Path:
        raise ResolutionError("fatal: not a git repository")

    def changed_files(self, staged: bool) -> list[str]:
        raise ResolutionError("fatal: not a git repository")


@dataclass
class SpawnCall:
    command: str
    args: list[str]
    cwd: Path | None
    env_overrides: dict[str, str]


@dataclass
class RecordingProcessAdapter:
    """Records spawn calls and answers from ``results`` keyed by command name.

    Commands in ``missing`` raise FileNotFoundError, as if not on PATH.
    ``on_spawn`` runs before answering, e.g. to simulate a hook rewriting files.
    """

    results: dict[str, CompletedCommand] = field(default_factory=dict)
    missing: set[str] = field(default_factory=set)
    on_spawn: Callable[[SpawnCall], None] | None = None
    calls: list[SpawnCall] = field(default_factory=list)

    def spawn(
        self,
        command: str,
        args: Sequence[str],
        cwd: Path | None = None,
        env_overrides: Mapping[str, str] | None = None,
    ) -> CompletedCommand:
        if command in self.missing:
            raise FileNotFoundError(2, "No such file or directory", command)
        call = SpawnCall(command, list(args), cwd, dict(env_overrides or {}))
        self.calls.append(call)
        if self.on_spawn is not None:
            self.on_spawn(call)
        return self.results.get(command, CompletedCommand(0))

    @property
    def commands(self) -> list[list[str]]:
        return [[c.command, *c.args] for c in self.calls]
