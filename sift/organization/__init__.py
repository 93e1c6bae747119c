"""
Organization module for sorting files into sub-folders.

Handles traversal of the source tree, destination resolution with
collision-safe renaming, and the undo log that allows a pass to be reverted.
"""

from .file_organizer import (
    FileOrganizer,
    OrganizationResult,
    organize_by_date,
    organize_by_type,
)
from .resolver import resolve_collision
from .rules import DEFAULT_CATEGORIES, FALLBACK_CATEGORY, RuleSet
from .strategy import OrganizationMode, OrganizationStrategy
from .traversal import Traverser, VisitAction, VisitDecision
from .undo import UndoResult, undo
from .undo_log import LOG_FILE_NAME, LOG_SEPARATOR, UndoLogWriter, UndoRecord

__all__ = [
    "FileOrganizer",
    "OrganizationResult",
    "organize_by_date",
    "organize_by_type",
    "resolve_collision",
    "DEFAULT_CATEGORIES",
    "FALLBACK_CATEGORY",
    "RuleSet",
    "OrganizationMode",
    "OrganizationStrategy",
    "Traverser",
    "VisitAction",
    "VisitDecision",
    "UndoResult",
    "undo",
    "LOG_FILE_NAME",
    "LOG_SEPARATOR",
    "UndoLogWriter",
    "UndoRecord",
]
