"""git-hooks: run hooks from external repositories on git lifecycle events."""

from .actions import ActionToken, Argument, ParsedAction, Placeholder, tokenize
from .engine import (
    CompletedCommand,
    DispatchResult,
    GitAdapter,
    HookEngine,
    HookExecutor,
    HookRun,
    SubprocessAdapter,
    dispatch,
    make_engine,
    materialize_source,
    materialize_sources,
    merge_hooks,
)
from .errors import (
    AggregateFailure,
    ConfigError,
    ExecutionFailure,
    FetchError,
    GitHooksError,
    ResolutionError,
    UnimplementedPlaceholderError,
)
from .installer import install_dispatchers, uninstall_dispatchers
from .loaders import load_config, load_manifest
from .models import (
    HOOK_EVENTS,
    ExternalHookSource,
    Hook,
    HookEvent,
    HookManifest,
    TopLevelConfig,
)
from .selection import all_files, changed_files, matches
from .validation import (
    ValidationIssue,
    ValidationResult,
    validate_config,
    validate_config_file,
    validate_manifest,
    validate_manifest_file,
    validate_resolved,
)

__all__ = [
    "HOOK_EVENTS",
    "ActionToken",
    "AggregateFailure",
    "Argument",
    "CompletedCommand",
    "ConfigError",
    "DispatchResult",
    "ExecutionFailure",
    "ExternalHookSource",
    "FetchError",
    "GitAdapter",
    "GitHooksError",
    "Hook",
    "HookEngine",
    "HookEvent",
    "HookExecutor",
    "HookManifest",
    "HookRun",
    "ParsedAction",
    "Placeholder",
    "ResolutionError",
    "SubprocessAdapter",
    "TopLevelConfig",
    "UnimplementedPlaceholderError",
    "ValidationIssue",
    "ValidationResult",
    "all_files",
    "changed_files",
    "dispatch",
    "install_dispatchers",
    "load_config",
    "load_manifest",
    "make_engine",
    "matches",
    "materialize_source",
    "materialize_sources",
    "merge_hooks",
    "tokenize",
    "uninstall_dispatchers",
    "validate_config",
    "validate_config_file",
    "validate_manifest",
    "validate_manifest_file",
    "validate_resolved",
]
