"""HookEngine: the facade the command line drives."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ..installer import events_in_use, install_dispatchers, uninstall_dispatchers
from ..loaders.config import CONFIG_FILENAME, load_config
from ._dispatch import DispatchResult, dispatch
from ._executor import HookExecutor, HookRun
from ._merge import merge_hooks
from ._sources import materialize_source, materialize_sources

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..models.config import TopLevelConfig
    from ..models.hook import Hook
    from ..models.source import ExternalHookSource
    from ._protocols import ProcessAdapter, VCSAdapter

logger = logging.getLogger(__name__)


class HookEngine:
    def __init__(self, vcs: VCSAdapter, process: ProcessAdapter) -> None:
        self._vcs = vcs
        self._executor = HookExecutor(vcs, process)

    @property
    def executor(self) -> HookExecutor:
        return self._executor

    def config_path(self, path: Path | None = None) -> Path:
        return Path(path) if path is not None else self._vcs.root() / CONFIG_FILENAME

    def read(self, path: Path | None = None) -> TopLevelConfig:
        """Parse the top-level document without touching any source."""
        return load_config(self.config_path(path))

    def load(self, path: Path | None = None) -> TopLevelConfig:
        """Parse the config, materialize its sources and apply the overrides.

        Sources that fail to materialize are dropped from the returned config.
        """
        logger.debug("reading conf")
        config = self.read(path)
        self.resolve(config)
        return config

    def resolve(self, config: TopLevelConfig) -> TopLevelConfig:
        config.sources = materialize_sources(config.sources, self._vcs, self._executor)
        merge_hooks(config.hooks, config.sources)
        logger.debug("merged conf: %r", config)
        return config

    def materialize(self, source: ExternalHookSource) -> ExternalHookSource:
        return materialize_source(source, self._vcs, self._executor)

    def dispatch(self, event: str, config: TopLevelConfig) -> DispatchResult:
        return dispatch(event, config, self._executor)

    def run_hook(self, hook: Hook, source: ExternalHookSource) -> HookRun:
        if source.local_path is None:
            source = self.materialize(source)
        return self._executor.run(hook, source.local_path)

    def hooks_dir(self) -> Path:
        return self._vcs.git_path("hooks")

    def install(
        self,
        config: TopLevelConfig | None = None,
        events: Iterable[str] | None = None,
        force: bool = False,
    ) -> list[Path]:
        """Install dispatcher scripts for ``events``, default: those ``config`` uses."""
        if events is None:
            events = events_in_use(config) if config is not None else ["pre-commit"]
        return install_dispatchers(self.hooks_dir(), events, force=force)

    def uninstall(self, events: Iterable[str] | None = None) -> list[Path]:
        return uninstall_dispatchers(self.hooks_dir(), events)
