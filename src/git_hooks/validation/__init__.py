from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

from ..loaders.config import MANIFEST_FILENAME, read_document
from ._config import validate_config as _validate_config
from ._config import validate_manifest as _validate_manifest
from ._config import validate_resolved
from ._result import ValidationIssue, ValidationResult


def validate_config(data: dict[str, Any]) -> ValidationResult:
    """Validate a top-level hooks document (e.g. parsed from .hooks.yml).

    Checks source origins, event names, regular expressions, placeholders and
    duplicate hook names.
    """
    return _validate_config(data)


def validate_manifest(data: dict[str, Any]) -> ValidationResult:
    """Validate a source manifest dict (e.g. from hooks.yml)."""
    return _validate_manifest(data)


def validate_config_file(path: Path) -> ValidationResult:
    """Load and validate a .hooks.yml file from disk."""
    return _validate_config(read_document(path))


def validate_manifest_file(path: Path) -> ValidationResult:
    """Load and validate a source's hooks.yml (file or working copy directory)."""
    if path.is_dir():
        path = path / MANIFEST_FILENAME
    return _validate_manifest(read_document(path))


__all__ = [
    "ValidationIssue",
    "ValidationResult",
    "validate_config",
    "validate_config_file",
    "validate_manifest",
    "validate_manifest_file",
    "validate_resolved",
]
