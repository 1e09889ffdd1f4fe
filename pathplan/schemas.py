"""
Pydantic records mirroring the persisted layout

A goal record embeds its three buckets as ordered step records; progress and
is_completed are derived at build time and never read back.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from pathplan.models import Cadence
from pathplan.richtext import RichText


class StepRecord(BaseModel):
    """Step record"""
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Step ID")
    goal_id: str = Field(..., description="Owning goal ID")
    cadence: Cadence = Field(..., description="Bucket")
    content: RichText = Field(default_factory=RichText, description="Rich text content")
    end_date: Optional[date] = Field(default=None, description="Due date")
    is_done: bool = Field(default=False, description="Done flag")


class GoalRecord(BaseModel):
    """Goal record with embedded buckets"""
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Goal ID")
    title: str = Field(..., description="Title")
    start_date: date = Field(..., description="Start date")
    end_date: date = Field(..., description="End date")
    category: Optional[str] = Field(default=None, description="Category")
    daily_steps: List[StepRecord] = Field(default_factory=list)
    weekly_steps: List[StepRecord] = Field(default_factory=list)
    monthly_steps: List[StepRecord] = Field(default_factory=list)
    progress: float = Field(default=0.0, ge=0.0, le=1.0, description="Derived, done / total")
    is_completed: bool = Field(default=False, description="Derived completion")

    @classmethod
    def from_goal(cls, goal) -> "GoalRecord":
        return cls.model_validate(goal)
