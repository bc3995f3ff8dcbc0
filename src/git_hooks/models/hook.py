from __future__ import annotations

import re
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, field_validator

# Git lifecycle events a hook can be bound to (file names under .git/hooks/).
HookEvent = Literal[
    "applypatch-msg",
    "pre-applypatch",
    "post-applypatch",
    "pre-commit",
    "pre-merge-commit",
    "prepare-commit-msg",
    "commit-msg",
    "post-commit",
    "pre-rebase",
    "post-checkout",
    "post-merge",
    "pre-push",
    "pre-receive",
    "update",
    "proc-receive",
    "post-receive",
    "post-update",
    "reference-transaction",
    "push-to-checkout",
    "pre-auto-gc",
    "post-rewrite",
    "sendemail-validate",
    "fsmonitor-watchman",
    "p4-changelist",
    "p4-prepare-changelist",
    "p4-post-changelist",
    "p4-pre-submit",
    "post-index-change",
]

HOOK_EVENTS: tuple[str, ...] = get_args(HookEvent)

DEFAULT_EVENT: HookEvent = "pre-commit"

MATCH_ALL = ".*"


class Hook(BaseModel):
    """One named hook: when it fires, which files it sees, and what it runs.

    Every field but ``name`` is optional so the same model serves as a full
    definition (in a source manifest) and as a partial override (in the
    top-level config). Use ``events`` and ``patterns`` to read the values with
    their dispatch-time defaults applied.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
    name: str
    on_event: list[HookEvent] | None = None
    on_file_regex: list[str] | None = None
    action: str | None = None
    setup_script: str | None = None

    @field_validator("on_file_regex")
    @classmethod
    def check_patterns(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"invalid regular expression {pattern!r}: {e}") from e
        return v

    @property
    def events(self) -> frozenset[str]:
        return frozenset(self.on_event) if self.on_event is not None else frozenset({DEFAULT_EVENT})

    @property
    def patterns(self) -> list[str]:
        return list(self.on_file_regex) if self.on_file_regex is not None else [MATCH_ALL]

    def fires_on(self, event: str) -> bool:
        return event in self.events
