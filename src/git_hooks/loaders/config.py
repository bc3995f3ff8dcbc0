from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from ..errors import ConfigError
from ..models.config import HookManifest, TopLevelConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".hooks.yml"
MANIFEST_FILENAME = "hooks.yml"

_T = TypeVar("_T", bound=BaseModel)


def load_config(path: Path) -> TopLevelConfig:
    """Load and validate the project's top-level hooks document.

    Accepts either a path to the YAML file itself or a repository directory
    containing .hooks.yml.
    """
    resolved = path if not path.is_dir() else path / CONFIG_FILENAME
    return _load_model(resolved, TopLevelConfig)


def load_manifest(path: Path) -> HookManifest:
    """Load the hooks.yml an external source ships at its root.

    Accepts either the source's working copy directory or the manifest file.
    """
    resolved = path / MANIFEST_FILENAME if path.is_dir() else path
    return _load_model(resolved, HookManifest)


def read_document(path: Path) -> dict[str, Any]:
    """Parse a YAML mapping from disk without validating it against a model."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigError(f"Hooks file not found: {path}", path=path) from e
    except OSError as e:
        raise ConfigError(f"Could not read {path}: {e}", path=path) from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}", path=path) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Expected a mapping at the top of {path}, got {type(data).__name__}",
            path=path,
        )
    return data


def _load_model(path: Path, model_class: type[_T]) -> _T:
    data = read_document(path)
    logger.debug("parsed %s: %r", path, data)
    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid hooks file {path}: {e}", path=path) from e
