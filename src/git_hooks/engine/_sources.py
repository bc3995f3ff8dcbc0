"""Materialization of external hook sources: fetch, pin, load, set up."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors import ConfigError, GitHooksError
from ..loaders.config import load_manifest

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from ..models.source import ExternalHookSource
    from ._executor import HookExecutor
    from ._protocols import VCSAdapter

logger = logging.getLogger(__name__)

# Working copies live under <git-dir>/hook-repos/<name>-<origin digest>.
HOOK_REPOS_DIR = "hook-repos"


def local_repo_path(vcs: VCSAdapter, source: ExternalHookSource) -> Path:
    return vcs.git_path(HOOK_REPOS_DIR) / source.dir_name


def materialize_source(
    source: ExternalHookSource,
    vcs: VCSAdapter,
    executor: HookExecutor,
    claimed: Mapping[str, str] | None = None,
) -> ExternalHookSource:
    """Fetch ``source``, load its hooks.yml into ``source.hooks`` and run setup scripts.

    ``claimed`` maps hook names already provided by other sources to their
    origin; a source redefining one of them is rejected before any of its
    setup scripts run.

    Raises:
        FetchError: if the working copy cannot be cloned, updated or pinned.
        ConfigError: if hooks.yml is missing or invalid, or on a name clash.
        ExecutionFailure: if a setup script fails.
    """
    local = local_repo_path(vcs, source)
    vcs.clone_or_update(source.origin, local)
    if source.pinned_revision:
        logger.debug("pinning %s to %s", source.origin, source.pinned_revision)
        vcs.checkout(source.pinned_revision, local)

    manifest = load_manifest(local)
    logger.debug("got hooks.yml from %s: %s", source.origin, [h.name for h in manifest.hooks])
    if claimed:
        clashes = sorted(h.name for h in manifest.hooks if h.name in claimed)
        if clashes:
            owners = ", ".join(f"{n} ({claimed[n]})" for n in clashes)
            raise ConfigError(f"{source.origin} redefines hooks already provided: {owners}")

    source.attach(local, manifest.hooks)
    for hook in source.hooks:
        executor.run_setup(hook, local)
    return source


def materialize_sources(
    sources: Sequence[ExternalHookSource],
    vcs: VCSAdapter,
    executor: HookExecutor,
) -> list[ExternalHookSource]:
    """Materialize every source in order, dropping those that fail.

    A failing source is logged and skipped; the others are unaffected.
    """
    ready = []
    claimed: dict[str, str] = {}
    for source in sources:
        logger.debug("init %s", source.origin)
        try:
            materialize_source(source, vcs, executor, claimed)
        except GitHooksError as e:
            logger.warning(
                "Got an error while attempting to initialize source %s: %s", source.origin, e
            )
            continue
        claimed.update((h.name, source.origin) for h in source.hooks)
        ready.append(source)
    return ready
