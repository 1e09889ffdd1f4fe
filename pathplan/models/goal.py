"""
PathPlan - Goal entity
Owns every Step in its daily/weekly/monthly buckets
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Integer, String
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship

from pathplan.models.base import Base
from pathplan.models.cadence import Cadence
from pathplan.progress import is_completed, progress_of

SUGGESTED_CATEGORIES = ("Personal", "Work", "Health", "Education", "Finance", "Other")


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Goal(Base):
    """Goal table - a trackable objective with a date range and category"""

    __tablename__ = "goals"

    id = Column(String(36), primary_key=True, default=_new_id, comment="Opaque goal identifier")
    sequence = Column(Integer, nullable=False, default=0, index=True, comment="Insertion order")
    title = Column(String(255), nullable=False, default="", comment="Display title")
    start_date = Column(Date, nullable=False, comment="Start date")
    end_date = Column(Date, nullable=False, comment="End date, not checked against start_date")
    category = Column(String(100), nullable=True, comment="Free-form category")
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, comment="Creation time")

    # Single step collection, buckets are filters on Step.cadence (1:N)
    steps = relationship(
        "Step",
        back_populates="goal",
        order_by="Step.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )

    def steps_for(self, cadence) -> list:
        cadence = Cadence.parse(cadence)
        return [step for step in self.steps if step.cadence == cadence]

    @property
    def daily_steps(self) -> list:
        return self.steps_for(Cadence.DAILY)

    @property
    def weekly_steps(self) -> list:
        return self.steps_for(Cadence.WEEKLY)

    @property
    def monthly_steps(self) -> list:
        return self.steps_for(Cadence.MONTHLY)

    @property
    def progress(self) -> float:
        """Done steps / all steps, recomputed on every access"""
        return progress_of(self.steps)

    @property
    def is_completed(self) -> bool:
        return is_completed(self.steps)

    def __repr__(self):
        return f"<Goal(id={self.id}, title='{self.title}', start_date={self.start_date}, end_date={self.end_date})>"
