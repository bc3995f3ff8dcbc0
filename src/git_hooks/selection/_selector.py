from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from ._matcher import VCS_DIR, matches

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..engine._protocols import VCSAdapter

logger = logging.getLogger(__name__)


def all_files(root: str | os.PathLike[str], patterns: Sequence[str]) -> list[str]:
    """Walk ``root`` and return every file matching ``patterns``, in walk order.

    Patterns see the root-relative path, as with ``changed_files``; the
    returned paths are joined to ``root``.
    """
    root = Path(root)
    found = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d != VCS_DIR]
        for filename in filenames:
            path = Path(dirpath) / filename
            if matches(path.relative_to(root), patterns, base=root):
                found.append(str(path))
    logger.debug("all files under %s: %s", root, found)
    return found


def changed_files(
    vcs: VCSAdapter,
    staged: bool,
    patterns: Sequence[str],
    root: str | os.PathLike[str] | None = None,
) -> list[str]:
    """Return the repo-relative changed paths matching ``patterns``.

    ``staged`` selects files added/copied/modified in the index; otherwise the
    untracked, non-ignored files. Errors from ``vcs`` propagate unchanged.
    """
    candidates = vcs.changed_files(staged)
    found = [p for p in candidates if matches(p, patterns, base=root)]
    logger.debug("changed files (staged=%s): %s", staged, found)
    return found
