from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from ..actions import placeholders
from ..errors import ConfigError
from ..models.hook import HOOK_EVENTS
from ._result import ValidationResult

if TYPE_CHECKING:
    from ..models.config import TopLevelConfig


def validate_config(data: dict[str, Any]) -> ValidationResult:
    result = ValidationResult()

    sources = data.get("sources", data.get("repos"))
    if sources is not None and not isinstance(sources, list):
        result.error("sources", "sources: Expected a list")
    elif sources:
        for i, entry in enumerate(sources):
            path = f"sources[{i}]"
            if not isinstance(entry, dict):
                result.error(path, f"{path}: Expected a mapping")
                continue
            origin = entry.get("origin", entry.get("url"))
            if not isinstance(origin, str) or not origin.strip():
                result.error(f"{path}.origin", "origin: Required")
            if entry.get("hooks"):
                result.warning(
                    f"{path}.hooks",
                    "Ignored: a source's hooks come from the hooks.yml in its repository",
                )

    hooks = data.get("hooks")
    if hooks is not None and not isinstance(hooks, list):
        result.error("hooks", "hooks: Expected a list")
    elif hooks:
        _check_hook_list(hooks, result)
    return result


def validate_manifest(data: dict[str, Any]) -> ValidationResult:
    """Validate a source's hooks.yml; there every hook needs an action."""
    result = ValidationResult()
    hooks = data.get("hooks")
    if hooks is None:
        result.warning("hooks", "No hooks defined")
        return result
    if not isinstance(hooks, list):
        result.error("hooks", "hooks: Expected a list")
        return result
    _check_hook_list(hooks, result)
    for i, entry in enumerate(hooks):
        if isinstance(entry, dict) and entry.get("action") is None:
            name = entry.get("name") or f"hooks[{i}]"
            result.error(f"hooks[{i}].action", f'Hook "{name}" has no action')
    return result


def validate_resolved(config: TopLevelConfig) -> ValidationResult:
    """Cross-check overrides against the hooks materialized sources provide."""
    result = ValidationResult()
    provided = {h.name for s in config.sources for h in s.hooks}
    for i, hook in enumerate(config.hooks):
        if hook.name not in provided:
            result.warning(
                f"hooks[{i}].name",
                f'No source provides a hook named "{hook.name}"; it will never run',
            )
    for source, hook in config.active_hooks():
        if hook.action is None:
            result.error(
                source.origin, f'Hook "{hook.name}" has no action after merging overrides'
            )
    return result


def _check_hook_list(hooks: list[Any], result: ValidationResult) -> None:
    seen_names: set[str] = set()
    for i, entry in enumerate(hooks):
        path = f"hooks[{i}]"
        if not isinstance(entry, dict):
            result.error(path, f"{path}: Expected a mapping")
            continue

        name = entry.get("name")
        if not isinstance(name, str) or not name.strip():
            result.error(f"{path}.name", "name: Required")
        elif name in seen_names:
            result.warning(
                f"{path}.name", f'Duplicate hook name "{name}"; the last definition wins'
            )
        else:
            seen_names.add(name)

        events = entry.get("on_event")
        if events is not None:
            if not isinstance(events, list):
                result.error(f"{path}.on_event", "on_event: Expected a list")
            else:
                for j, event in enumerate(events):
                    if event not in HOOK_EVENTS:
                        result.error(f"{path}.on_event[{j}]", f'Unknown hook event "{event}"')

        patterns = entry.get("on_file_regex")
        if patterns is not None:
            if not isinstance(patterns, list):
                result.error(f"{path}.on_file_regex", "on_file_regex: Expected a list")
            else:
                for j, pattern in enumerate(patterns):
                    try:
                        re.compile(str(pattern))
                    except re.error as e:
                        result.error(
                            f"{path}.on_file_regex[{j}]",
                            f"Invalid regular expression {pattern!r}: {e}",
                        )

        action = entry.get("action")
        if action is None:
            continue
        try:
            used = placeholders(str(action))
        except ConfigError as e:
            result.error(f"{path}.action", str(e))
            continue
        for placeholder in used:
            if not placeholder.implemented:
                result.error(f"{path}.action", f"Placeholder {placeholder.value} is not supported")
