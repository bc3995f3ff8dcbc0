"""File eligibility and file-list selection for hooks."""

from ._matcher import VCS_DIR, matches
from ._selector import all_files, changed_files

__all__ = ["VCS_DIR", "all_files", "changed_files", "matches"]
