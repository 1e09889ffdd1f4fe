"""
PathPlan - local goal tracking data model

Goals with date ranges and categories, decomposed into daily/weekly/monthly
steps whose completion drives each goal's progress.
"""

from pathplan.models import Base, Cadence, Goal, Step, SUGGESTED_CATEGORIES
from pathplan.richtext import Attachment, RichText, StyledSpan, TextStyle
from pathplan.events import ChangeEvent, ChangeKind, ChangeNotifier
from pathplan.core.exceptions import PathPlanError, StorageError
from pathplan.progress import GoalStats, is_completed, progress_of
from pathplan.store import GoalStore
from pathplan import crud

__all__ = [
    "Base",
    "Cadence",
    "Goal",
    "Step",
    "SUGGESTED_CATEGORIES",
    "Attachment",
    "RichText",
    "StyledSpan",
    "TextStyle",
    "ChangeEvent",
    "ChangeKind",
    "ChangeNotifier",
    "PathPlanError",
    "StorageError",
    "GoalStats",
    "is_completed",
    "progress_of",
    "GoalStore",
    "crud",
]

__version__ = "0.1.0"
