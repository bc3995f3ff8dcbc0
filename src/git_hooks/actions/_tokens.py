"""Action string parsing: Placeholder, Argument, ParsedAction, tokenize."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Union

from ..errors import ConfigError, UnimplementedPlaceholderError


class Placeholder(Enum):
    """Tokens replaced by computed values before the action runs."""

    FILES = "{files}"
    FILE = "{file}"
    CHANGED_FILES = "{changed_files}"
    CHANGED_FILE = "{changed_file}"
    ROOT = "{root}"

    @property
    def implemented(self) -> bool:
        # The singular forms would need one process per file.
        return self not in (Placeholder.FILE, Placeholder.CHANGED_FILE)

    def require_implemented(self) -> None:
        if not self.implemented:
            raise UnimplementedPlaceholderError(self.value)


@dataclass(frozen=True)
class Argument:
    """A literal argument, passed through verbatim."""

    value: str


ActionToken = Union[Argument, Placeholder]

_PLACEHOLDERS = {p.value: p for p in Placeholder}


class ParsedAction(NamedTuple):
    command: str
    tokens: list[ActionToken]


def tokenize(action: str) -> ParsedAction:
    """Split ``action`` with POSIX shell quoting rules into command and tokens.

    No variable expansion, globbing or subshells happen. Placeholders are only
    recognised as whole words; ``"{files}"`` quoted still counts, ``x{files}``
    does not.

    Raises:
        ConfigError: on unbalanced quotes or an empty action.
    """
    try:
        words = shlex.split(action, comments=False, posix=True)
    except ValueError as e:
        raise ConfigError(f"Could not parse action {action!r}: {e}") from e
    if not words:
        raise ConfigError(f"Empty action {action!r}")
    command, *rest = words
    return ParsedAction(command, [classify(word) for word in rest])


def classify(word: str) -> ActionToken:
    placeholder = _PLACEHOLDERS.get(word)
    if placeholder is not None:
        return placeholder
    return Argument(word)


def placeholders(action: str) -> list[Placeholder]:
    """Placeholders used by ``action``, in order of appearance."""
    return [t for t in tokenize(action).tokens if isinstance(t, Placeholder)]
