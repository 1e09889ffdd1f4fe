from pathplan.models.base import Base
from pathplan.models.cadence import Cadence
from pathplan.models.goal import Goal, SUGGESTED_CATEGORIES
from pathplan.models.step import Step
from pathplan.models.types import RichTextType

__all__ = [
    "Base",
    "Cadence",
    "Goal",
    "Step",
    "RichTextType",
    "SUGGESTED_CATEGORIES",
]
