"""Hook engine API: materialize sources, merge overrides, dispatch events."""

from __future__ import annotations

from pathlib import Path

from ._adapters import GitAdapter, SubprocessAdapter
from ._dispatch import DispatchResult, dispatch
from ._engine import HookEngine
from ._executor import ExpandedAction, HookExecutor, HookRun, search_path
from ._merge import OVERRIDABLE_FIELDS, merge_hooks, override_fields
from ._protocols import CompletedCommand, ProcessAdapter, VCSAdapter
from ._sources import HOOK_REPOS_DIR, local_repo_path, materialize_source, materialize_sources


def make_engine(cwd: Path | None = None) -> HookEngine:
    """Build a HookEngine driving git and real processes from ``cwd``."""
    return HookEngine(
        vcs=GitAdapter(Path(cwd) if cwd is not None else None),
        process=SubprocessAdapter(),
    )


__all__ = [
    "HOOK_REPOS_DIR",
    "OVERRIDABLE_FIELDS",
    "CompletedCommand",
    "DispatchResult",
    "ExpandedAction",
    "GitAdapter",
    "HookEngine",
    "HookExecutor",
    "HookRun",
    "ProcessAdapter",
    "SubprocessAdapter",
    "VCSAdapter",
    "dispatch",
    "local_repo_path",
    "make_engine",
    "materialize_source",
    "materialize_sources",
    "merge_hooks",
    "override_fields",
    "search_path",
]
