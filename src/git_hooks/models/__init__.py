from .config import HookManifest, TopLevelConfig
from .hook import DEFAULT_EVENT, HOOK_EVENTS, MATCH_ALL, Hook, HookEvent
from .source import ExternalHookSource

__all__ = [
    "DEFAULT_EVENT",
    "HOOK_EVENTS",
    "MATCH_ALL",
    "ExternalHookSource",
    "Hook",
    "HookEvent",
    "HookManifest",
    "TopLevelConfig",
]
