from ._tokens import (
    ActionToken,
    Argument,
    ParsedAction,
    Placeholder,
    classify,
    placeholders,
    tokenize,
)

__all__ = [
    "ActionToken",
    "Argument",
    "ParsedAction",
    "Placeholder",
    "classify",
    "placeholders",
    "tokenize",
]
