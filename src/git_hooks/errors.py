from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class GitHooksError(Exception):
    """Base class for every error raised by git_hooks."""


class ConfigError(GitHooksError):
    """Raised when a hooks document is unreadable, malformed, or inconsistent.

    Attributes:
        path: The configuration file that could not be used, if applicable.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class ResolutionError(GitHooksError):
    """Raised when a git operation fails (not a repository, index locked, ...).

    Attributes:
        command: The git argument list that failed, if applicable.
    """

    def __init__(self, message: str, command: Sequence[str] | None = None) -> None:
        self.command = list(command) if command is not None else None
        super().__init__(message)


class FetchError(ResolutionError):
    """Raised when cloning, updating, or checking out an external source fails.

    Attributes:
        url: The origin that failed, if applicable.
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        self.url = url
        super().__init__(message)


class UnimplementedPlaceholderError(GitHooksError):
    """Raised when an action uses a per-file placeholder ({file}, {changed_file})."""

    def __init__(self, placeholder: str) -> None:
        self.placeholder = placeholder
        super().__init__(
            f"Placeholder {placeholder} is not supported: "
            "per-file execution is not available, use the plural form"
        )


class ExecutionFailure(GitHooksError):
    """Raised when a hook command exits non-zero or cannot be spawned.

    Attributes:
        hook: Name of the failing hook (or setup script owner).
        exit_code: Process exit status, None when the process never started.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    def __init__(
        self,
        hook: str,
        exit_code: int | None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.hook = hook
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        if exit_code is None:
            msg = f"Hook {hook} could not be started"
            if stderr:
                msg += f": {stderr}"
        else:
            msg = f"Hook {hook} failed with exit code {exit_code}"
        super().__init__(msg)


class AggregateFailure(GitHooksError):
    """Raised by dispatch once every matched hook ran and at least one failed."""

    def __init__(self, event: str, failures: Sequence[GitHooksError]) -> None:
        self.event = event
        self.failures = list(failures)
        super().__init__(f"{len(self.failures)} hook(s) failed on {event}")
