"""
PathPlan - Step entity
An actionable item in exactly one cadence bucket of a goal
"""

from sqlalchemy import Boolean, Column, Date, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from pathplan.models.base import Base
from pathplan.models.cadence import Cadence
from pathplan.models.goal import _new_id, _utcnow
from pathplan.models.types import RichTextType
from pathplan.richtext import RichText


class Step(Base):
    """Step table - content is replaced, never mutated in place"""

    __tablename__ = "steps"

    id = Column(String(36), primary_key=True, default=_new_id, comment="Opaque step identifier")
    goal_id = Column(
        String(36),
        ForeignKey("goals.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning goal FK",
    )
    cadence = Column(
        Enum(Cadence, name="cadence", native_enum=False, values_callable=lambda e: [c.value for c in e]),
        nullable=False,
        comment="daily / weekly / monthly bucket",
    )
    position = Column(Integer, nullable=False, default=0, comment="Order within the goal")
    content = Column(RichTextType, nullable=False, default=lambda: RichText(), comment="Rich text JSON")
    end_date = Column(Date, nullable=True, comment="Optional due date")
    is_done = Column(Boolean, nullable=False, default=False, comment="Completion flag")
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, comment="Creation time")

    # Lookup only, ownership runs Goal -> Step (N:1)
    goal = relationship("Goal", back_populates="steps")

    def __repr__(self):
        return f"<Step(id={self.id}, goal_id={self.goal_id}, cadence={self.cadence}, is_done={self.is_done})>"
