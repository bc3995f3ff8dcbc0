"""Concrete adapters backed by the git executable and subprocess."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import FetchError, ResolutionError
from ._protocols import CompletedCommand

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

logger = logging.getLogger(__name__)


class GitAdapter:
    """Runs git in ``cwd`` (the current directory when None)."""

    def __init__(self, cwd: Path | None = None, git: str = "git") -> None:
        self._cwd = Path(cwd) if cwd is not None else None
        self._git = git

    def root(self) -> Path:
        """Top-level directory of the repository containing ``cwd``."""
        out = self._run(["rev-parse", "--show-toplevel"]).stdout
        return Path(out.strip())

    def git_path(self, name: str) -> Path:
        """Resolve ``name`` inside the git directory (honours worktrees, core.hooksPath)."""
        out = self._run(["rev-parse", "--git-path", name]).stdout.strip()
        return (self._cwd or Path.cwd()) / out

    def clone_or_update(self, origin: str, local_path: Path) -> Path:
        """Leave a working copy of ``origin`` at ``local_path``.

        An existing copy tracking some other remote is removed and cloned again.
        """
        local_path = Path(local_path)
        if not local_path.is_dir() or not any(local_path.iterdir()):
            return self._clone(origin, local_path)

        remote = self._run(
            ["config", "--get", "remote.origin.url"], cwd=local_path, check=False
        )
        if remote.returncode != 0 or remote.stdout.strip() != origin:
            logger.info(
                "%s does not track %s (found %r), cloning again",
                local_path,
                origin,
                remote.stdout.strip(),
            )
            shutil.rmtree(local_path)
            return self._clone(origin, local_path)

        logger.debug("getting a fresh version of %s in %s", origin, local_path)
        self._fetch(["fetch", "--quiet", "--tags", "origin"], origin, cwd=local_path)
        on_branch = self._run(["symbolic-ref", "-q", "HEAD"], cwd=local_path, check=False)
        if on_branch.returncode == 0:
            self._fetch(["merge", "--ff-only", "--quiet", "@{upstream}"], origin, cwd=local_path)
        return local_path

    def checkout(self, reference: str, repo_path: Path) -> None:
        found = self._run(
            ["rev-parse", "--verify", "--quiet", f"{reference}^{{commit}}"],
            cwd=repo_path,
            check=False,
        )
        if found.returncode != 0:
            raise FetchError(
                f"could not find reference {reference} in {repo_path}", url=str(repo_path)
            )
        self._fetch(["checkout", "--quiet", reference], str(repo_path), cwd=repo_path)

    def changed_files(self, staged: bool) -> list[str]:
        if staged:
            args = ["diff", "--name-only", "-z", "--diff-filter=ACM", "--cached"]
        else:
            args = ["ls-files", "-z", "--others", "--exclude-standard"]
        return _split_z(self._run(args, cwd=self.root()).stdout)

    def modified_files(self) -> list[str]:
        args = ["diff", "--name-only", "-z", "--diff-filter=ACM"]
        return _split_z(self._run(args, cwd=self.root()).stdout)

    def stage(self, paths: Sequence[str]) -> None:
        if not paths:
            return
        self._run(["add", "--", *paths], cwd=self.root())

    # --- internal helpers ---

    def _clone(self, origin: str, local_path: Path) -> Path:
        logger.debug("cloning %s to %s", origin, local_path)
        local_path.parent.mkdir(parents=True, exist_ok=True)
        self._fetch(["clone", "--quiet", origin, str(local_path)], origin)
        return local_path

    def _run(
        self,
        args: list[str],
        cwd: Path | None = None,
        check: bool = True,
    ) -> subprocess.CompletedProcess[str]:
        cmd = [self._git, *args]
        where = cwd or self._cwd
        logger.debug("called %s in %s", cmd, where)
        try:
            result = subprocess.run(cmd, cwd=where, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise ResolutionError("git is not installed or not in PATH", command=cmd) from e
        if check and result.returncode != 0:
            raise ResolutionError(
                f"git {' '.join(args)} failed: {result.stderr.strip()}", command=cmd
            )
        return result

    def _fetch(self, args: list[str], url: str, cwd: Path | None = None) -> None:
        try:
            self._run(args, cwd=cwd)
        except ResolutionError as e:
            raise FetchError(f"{e} ({url})", url=url) from e


class SubprocessAdapter:
    """Spawns commands with ``os.environ`` extended by the given overrides."""

    def spawn(
        self,
        command: str,
        args: Sequence[str],
        cwd: Path | None = None,
        env_overrides: Mapping[str, str] | None = None,
    ) -> CompletedCommand:
        env = dict(os.environ)
        if env_overrides:
            env.update(env_overrides)
        logger.debug(
            'called "%s %s" in %s with env expanded with %s', command, args, cwd, env_overrides
        )
        result = subprocess.run(
            [command, *args], cwd=cwd, env=env, capture_output=True, text=True
        )
        logger.debug("cmd stdout: %s", result.stdout)
        logger.debug("cmd stderr: %s", result.stderr)
        return CompletedCommand(result.returncode, result.stdout, result.stderr)


def _split_z(output: str) -> list[str]:
    return [p for p in output.split("\0") if p]
