from __future__ import annotations

import hashlib
from pathlib import Path

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from .hook import Hook  # noqa: TC001


class ExternalHookSource(BaseModel):
    """A repository supplying hook definitions through its own hooks.yml.

    The top-level config only declares ``origin`` and ``pinned_revision``.
    ``hooks`` is filled in by materialization, which discards anything the
    declaring document put there.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
    origin: str = Field(validation_alias=AliasChoices("origin", "url"))
    pinned_revision: str | None = Field(
        None, validation_alias=AliasChoices("pinned_revision", "rev")
    )
    hooks: list[Hook] = []

    _local_path: Path | None = PrivateAttr(default=None)

    @field_validator("hooks", mode="before")
    @classmethod
    def discard_declared_hooks(cls, v: object) -> list[Hook]:
        # only materialization fills hooks, from the source's own hooks.yml
        return []

    @property
    def name(self) -> str:
        """Display name: last origin segment minus ``.git``."""
        segment = self.origin.rstrip("/").rsplit("/", 1)[-1]
        segment = segment.rsplit(":", 1)[-1]
        if segment.endswith(".git"):
            segment = segment[: -len(".git")]
        return segment or "source"

    @property
    def dir_name(self) -> str:
        """Working copy directory: ``name`` plus a short digest of the full origin.

        Two origins ending in the same segment never share a working copy.
        """
        digest = hashlib.sha1(self.origin.encode("utf-8")).hexdigest()[:8]
        return f"{self.name}-{digest}"

    @property
    def local_path(self) -> Path | None:
        """Working copy location, set once the source is materialized."""
        return self._local_path

    @property
    def materialized(self) -> bool:
        return self._local_path is not None

    def attach(self, local_path: Path, hooks: list[Hook]) -> None:
        self._local_path = Path(local_path)
        self.hooks = list(hooks)

    def hook_names(self) -> set[str]:
        return {h.name for h in self.hooks}
