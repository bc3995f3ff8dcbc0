"""Document models for .hooks.yml (top level) and hooks.yml (per source)."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .hook import Hook  # noqa: TC001
from .source import ExternalHookSource  # noqa: TC001


def _none_as_empty(v: object) -> object:
    # "hooks:" with nothing under it parses to None
    return [] if v is None else v


class HookManifest(BaseModel):
    """Root object of a source's hooks.yml."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
    hooks: list[Hook] = []

    @field_validator("hooks", mode="before")
    @classmethod
    def empty_hooks_as_list(cls, v: object) -> object:
        return _none_as_empty(v)


class TopLevelConfig(BaseModel):
    """Root object of the project's .hooks.yml.

    ``hooks`` is the override authority: only names listed here are ever
    dispatched, and their set fields replace the same-named source hook's.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
    sources: list[ExternalHookSource] = Field(
        [], validation_alias=AliasChoices("sources", "repos")
    )
    hooks: list[Hook] = []

    @field_validator("sources", "hooks", mode="before")
    @classmethod
    def empty_lists(cls, v: object) -> object:
        return _none_as_empty(v)

    @property
    def active_names(self) -> set[str]:
        return {h.name for h in self.hooks}

    def active_hooks(self) -> list[tuple[ExternalHookSource, Hook]]:
        """(source, hook) pairs whose name is in the override list, in source order."""
        names = self.active_names
        return [(s, h) for s in self.sources for h in s.hooks if h.name in names]
