from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import ConfigError

if TYPE_CHECKING:
    import os
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

# Git metadata never reaches a hook, whatever the patterns say.
VCS_DIR = ".git"


def matches(
    path: str | os.PathLike[str],
    patterns: Iterable[str],
    base: str | os.PathLike[str] | None = None,
) -> bool:
    """Return True if ``path`` is a file eligible for a hook with ``patterns``.

    Patterns are regular expressions searched (not anchored) in the path's
    string form; the first hit wins. ``base`` is only used to locate a
    relative path on disk for the directory check.

    Raises:
        ConfigError: if a pattern is not a valid regular expression.
    """
    p = Path(path)
    on_disk = Path(base, p) if base is not None else p
    if on_disk.is_dir():
        logger.debug("skipping dir %s", p)
        return False
    if VCS_DIR in p.parts:
        logger.debug("skipping git file %s", p)
        return False
    text = str(p)
    for pattern in patterns:
        if _compile(pattern).search(text):
            logger.debug("found matching file %s", text)
            return True
        logger.debug("file %s didn't match %r", text, pattern)
    return False


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigError(f"Invalid file pattern {pattern!r}: {e}") from e
