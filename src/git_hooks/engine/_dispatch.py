from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..errors import AggregateFailure, ConfigError, ExecutionFailure, ResolutionError
from ..models.hook import HOOK_EVENTS

if TYPE_CHECKING:
    from ..errors import GitHooksError
    from ..models.config import TopLevelConfig
    from ._executor import HookExecutor, HookRun

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """What happened when an event was dispatched."""

    event: str
    matched: list[str] = field(default_factory=list)
    runs: list[HookRun] = field(default_factory=list)
    failures: list[GitHooksError] = field(default_factory=list)

    @property
    def nothing_to_do(self) -> bool:
        return not self.matched

    @property
    def ok(self) -> bool:
        return not self.failures


def dispatch(event: str, config: TopLevelConfig, executor: HookExecutor) -> DispatchResult:
    """Run every active hook bound to ``event``, one after the other.

    A hook is active when its name is in ``config.hooks``. Every matched hook
    is checked before the first one runs. A failing hook does not stop the
    others; once all have been attempted the failures are raised together.

    Raises:
        ConfigError: if ``event`` is not a git hook event, or a matched hook
            has no usable action or an unmaterialized source. Nothing runs.
        UnimplementedPlaceholderError: if a matched hook uses {file} or
            {changed_file}. Nothing runs.
        AggregateFailure: if at least one matched hook failed.
    """
    if event not in HOOK_EVENTS:
        raise ConfigError(f"Unknown hook event: {event!r}")

    selected = [(s, h) for s, h in config.active_hooks() if h.fires_on(event)]
    for source, hook in selected:
        if source.local_path is None:
            raise ConfigError(f"Source {source.origin} was not materialized")
        executor.check(hook)

    result = DispatchResult(event)
    for source, hook in selected:
        logger.debug("would run hook %s from %s", hook.name, source.origin)
        result.matched.append(hook.name)
        try:
            run = executor.run(hook, source.local_path)
        except (ExecutionFailure, ResolutionError) as e:
            logger.warning("An error occurred while executing %s: %s", hook.name, e)
            result.failures.append(e)
            continue
        result.runs.append(run)

    if result.nothing_to_do:
        logger.info("Nothing to do.")
    if result.failures:
        raise AggregateFailure(event, result.failures)
    return result
