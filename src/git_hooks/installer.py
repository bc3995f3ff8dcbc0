"""Dispatcher scripts: the files git runs, each handing off to `git-hooks run`."""

from __future__ import annotations

import logging
import stat
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import ConfigError
from .models.hook import HOOK_EVENTS

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models.config import TopLevelConfig

logger = logging.getLogger(__name__)

MARKER = "# installed by git-hooks, do not edit"

_SCRIPT = """#!/bin/sh
{marker}
exec {command} run {event} "$@"
"""


def dispatcher_script(event: str, command: str = "git-hooks") -> str:
    return _SCRIPT.format(marker=MARKER, command=command, event=event)


def is_managed(path: Path) -> bool:
    """True if ``path`` is a dispatcher script written by install_dispatchers."""
    try:
        return MARKER in path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False


def events_in_use(config: TopLevelConfig) -> list[str]:
    """Events any active hook fires on, in git's order."""
    used: set[str] = set()
    for _source, hook in config.active_hooks():
        used |= hook.events
    return [e for e in HOOK_EVENTS if e in used]


def install_dispatchers(
    hooks_dir: Path,
    events: Iterable[str],
    force: bool = False,
    command: str = "git-hooks",
) -> list[Path]:
    """Write an executable dispatcher script in ``hooks_dir`` for each event.

    A hook file not written by us is left alone unless ``force`` is set.
    """
    events = list(events)
    unknown = [e for e in events if e not in HOOK_EVENTS]
    if unknown:
        raise ConfigError(f"Unknown hook event(s): {', '.join(unknown)}")

    hooks_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for event in events:
        path = hooks_dir / event
        if path.exists() and not force and not is_managed(path):
            raise ConfigError(
                f"{path} already exists and was not installed by git-hooks "
                "(use --force to replace it)",
                path=path,
            )
        path.write_text(dispatcher_script(event, command), encoding="utf-8")
        path.chmod(
            path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH
        )
        logger.debug("installed %s", path)
        written.append(path)
    return written


def uninstall_dispatchers(hooks_dir: Path, events: Iterable[str] | None = None) -> list[Path]:
    """Remove the dispatcher scripts we installed; foreign hook files stay."""
    removed = []
    for event in events if events is not None else HOOK_EVENTS:
        path = hooks_dir / event
        if path.is_file() and is_managed(path):
            path.unlink()
            logger.debug("removed %s", path)
            removed.append(path)
    return removed
