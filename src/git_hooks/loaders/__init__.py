from .config import (
    CONFIG_FILENAME,
    MANIFEST_FILENAME,
    load_config,
    load_manifest,
    read_document,
)

__all__ = [
    "CONFIG_FILENAME",
    "MANIFEST_FILENAME",
    "load_config",
    "load_manifest",
    "read_document",
]
