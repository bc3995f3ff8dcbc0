"""HookExecutor: expand an action, run it, and re-stage what it rewrote.

A run walks Resolving -> Selecting -> Deciding -> Invoking -> Reconciling.
The executor is the only writer of repository state during a dispatch; hooks
run one after another, so no locking is involved.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from ..actions import Argument, Placeholder, tokenize
from ..errors import ConfigError, ExecutionFailure, UnimplementedPlaceholderError
from ..selection import all_files, changed_files

if TYPE_CHECKING:
    from ..actions import ParsedAction
    from ..models.hook import Hook
    from ._protocols import CompletedCommand, ProcessAdapter, VCSAdapter

logger = logging.getLogger(__name__)


def search_path(source_path: Path, current: str | None = None) -> str:
    """PATH with ``source_path`` in front, so a source's own tools win."""
    if current is None:
        current = os.environ.get("PATH", os.defpath)
    if not current:
        return str(source_path)
    return os.pathsep.join([str(source_path), current])


@dataclass
class HookRun:
    """Outcome of one successful hook invocation."""

    hook: str
    command: str
    args: list[str]
    stdout: str = ""
    stderr: str = ""
    restaged: list[str] = field(default_factory=list)
    dropped: list[str] = field(default_factory=list)

    @property
    def argv(self) -> list[str]:
        return [self.command, *self.args]


@dataclass
class ExpandedAction:
    command: str
    args: list[str]
    # literal arguments discarded after a placeholder selected no files
    dropped: list[str] = field(default_factory=list)


class HookExecutor:
    def __init__(self, vcs: VCSAdapter, process: ProcessAdapter) -> None:
        self._vcs = vcs
        self._process = process

    def run(self, hook: Hook, source_path: Path) -> HookRun:
        """Run ``hook`` with tools from ``source_path`` on PATH.

        Raises:
            ConfigError: if the hook has no action or the action is unparsable.
            UnimplementedPlaceholderError: on {file} / {changed_file}.
            ResolutionError: if a git query or the re-staging fails.
            ExecutionFailure: if the command exits non-zero or cannot start.
        """
        self.check(hook)

        root = self._vcs.root()
        env = {"PATH": search_path(source_path)}
        logger.debug("new PATH for %s: %s", hook.name, env["PATH"])

        expanded = self.expand(hook, root)
        logger.info("running %s: %s %s", hook.name, expanded.command, expanded.args)
        result = self._invoke(hook.name, expanded.command, expanded.args, root, env)

        restaged = self.reconcile()
        return HookRun(
            hook=hook.name,
            command=expanded.command,
            args=expanded.args,
            stdout=result.stdout,
            stderr=result.stderr,
            restaged=restaged,
            dropped=expanded.dropped,
        )

    def check(self, hook: Hook) -> ParsedAction:
        """Parse the hook's action, raising what would stop it from ever running.

        Touches neither git nor processes.

        Raises:
            ConfigError: if the hook has no action or the action is unparsable.
            UnimplementedPlaceholderError: on {file} / {changed_file}.
        """
        if hook.action is None:
            raise ConfigError(f"Hook {hook.name} has no action to run")
        parsed = tokenize(hook.action)
        for token in parsed.tokens:
            if isinstance(token, Placeholder):
                token.require_implemented()
        return parsed

    def expand(self, hook: Hook, root: Path) -> ExpandedAction:
        """Replace placeholders in the hook's action with concrete values.

        Once a file placeholder selects nothing, later literal arguments are
        dropped while the command itself still runs.
        """
        command, tokens = self.check(hook)

        expanded = ExpandedAction(command, [])
        should_run = True
        for token in tokens:
            if isinstance(token, Argument):
                if should_run:
                    expanded.args.append(token.value)
                else:
                    expanded.dropped.append(token.value)
            elif token is Placeholder.FILES:
                files = all_files(root, hook.patterns)
                should_run = self._accept(hook, token, files, expanded) and should_run
            elif token is Placeholder.CHANGED_FILES:
                files = changed_files(self._vcs, True, hook.patterns, root=root)
                should_run = self._accept(hook, token, files, expanded) and should_run
            elif token is Placeholder.ROOT:
                expanded.args.append(str(root))
            else:
                raise UnimplementedPlaceholderError(token.value)

        if expanded.dropped:
            logger.warning(
                "%s: arguments %s dropped because no file matched %s",
                hook.name,
                expanded.dropped,
                hook.patterns,
            )
        return expanded

    def reconcile(self) -> list[str]:
        """Re-stage staged files the hook modified again in the working tree."""
        staged = self._vcs.changed_files(True)
        dirty = set(self._vcs.modified_files()) | set(self._vcs.changed_files(False))
        restage = [p for p in staged if p in dirty]
        if restage:
            logger.debug("re-staging %s", restage)
            self._vcs.stage(restage)
        return restage

    def run_setup(self, hook: Hook, source_path: Path) -> HookRun | None:
        """Run the hook's setup script in ``source_path``, if it has one.

        Placeholders are not expanded here: a setup script runs before any
        file selection makes sense.
        """
        if hook.setup_script is None:
            return None
        command, tokens = tokenize(hook.setup_script)
        args = [t.value for t in tokens]
        env = {"PATH": search_path(source_path)}
        logger.debug("running setup script for %s: %s %s", hook.name, command, args)
        result = self._invoke(f"{hook.name} (setup)", command, args, source_path, env)
        return HookRun(hook.name, command, args, result.stdout, result.stderr)

    # --- internal helpers ---

    def _accept(
        self,
        hook: Hook,
        token: Placeholder,
        files: list[str],
        expanded: ExpandedAction,
    ) -> bool:
        if not files:
            logger.warning("%s: %s selected no files", hook.name, token.value)
            return False
        expanded.args.extend(files)
        return True

    def _invoke(
        self,
        name: str,
        command: str,
        args: list[str],
        cwd: Path,
        env: dict[str, str],
    ) -> CompletedCommand:
        try:
            result = self._process.spawn(command, args, cwd=cwd, env_overrides=env)
        except OSError as e:
            logger.error("could not start %s for %s: %s", command, name, e)
            raise ExecutionFailure(name, None, stderr=str(e)) from e
        if not result.ok:
            logger.error(
                'error on "%s %s" invocation for %s (exit code %s), '
                "here's the output:\nstdout: %s\nstderr: %s",
                command,
                args,
                name,
                result.returncode,
                result.stdout,
                result.stderr,
            )
            raise ExecutionFailure(name, result.returncode, result.stdout, result.stderr)
        return result
