from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ..models.hook import Hook
    from ..models.source import ExternalHookSource

logger = logging.getLogger(__name__)

OVERRIDABLE_FIELDS = ("on_event", "on_file_regex", "action", "setup_script")


def override_fields(
    target: Hook,
    override: Hook,
    fields: Iterable[str] = OVERRIDABLE_FIELDS,
) -> list[str]:
    """Copy each of ``fields`` that is set on ``override`` onto ``target``.

    Returns the names of the fields that were replaced.
    """
    replaced = []
    for name in fields:
        value = getattr(override, name)
        if value is None:
            continue
        setattr(target, name, copy.copy(value))
        replaced.append(name)
    return replaced


def merge_hooks(local_overrides: Sequence[Hook], sources: Sequence[ExternalHookSource]) -> None:
    """Apply the local override list to every source hook, in place, by name.

    A later override with the same name replaces an earlier one.
    """
    by_name = {h.name: h for h in local_overrides}
    for source in sources:
        for hook in source.hooks:
            override = by_name.get(hook.name)
            if override is None:
                continue
            replaced = override_fields(hook, override)
            logger.debug("%s from %s: overrode %s", hook.name, source.origin, replaced)
