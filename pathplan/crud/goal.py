from datetime import date
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from pathplan.core.logging import get_logger
from pathplan.crud.common import storage_guard
from pathplan.models import Goal

logger = get_logger(__name__)


# Goal CRUD operations
def create_goal(db: Session, title: str, start_date: date, end_date: date, category: Optional[str] = None) -> Goal:
    """Create a goal with empty step buckets. Empty titles and inverted ranges are accepted."""
    with storage_guard(db, "create_goal"):
        last = db.query(func.max(Goal.sequence)).scalar() or 0
        db_goal = Goal(
            title=title,
            start_date=start_date,
            end_date=end_date,
            category=category,
            sequence=last + 1,
        )
        db.add(db_goal)
        db.commit()
        db.refresh(db_goal)
    if end_date < start_date:
        logger.debug("Goal %s ends before it starts (%s > %s)", db_goal.id, start_date, end_date)
    logger.info("Created goal %s", db_goal.id)
    return db_goal


def get_goal(db: Session, goal_id: str) -> Optional[Goal]:
    with storage_guard(db, "get_goal"):
        return db.get(Goal, goal_id)


def get_goals(db: Session, skip: int = 0, limit: Optional[int] = None) -> List[Goal]:
    """All goals in insertion order"""
    with storage_guard(db, "get_goals"):
        query = db.query(Goal).order_by(Goal.sequence).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()


def update_goal(
    db: Session,
    goal_id: str,
    title: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    category: Optional[str] = None,
    clear_category: bool = False,
) -> Optional[Goal]:
    """Apply the given fields; None leaves a field unchanged. Steps are not re-validated."""
    db_goal = get_goal(db, goal_id)
    if db_goal is None:
        return None
    with storage_guard(db, "update_goal"):
        if title is not None:
            db_goal.title = title
        if start_date is not None:
            db_goal.start_date = start_date
        if end_date is not None:
            db_goal.end_date = end_date
        if clear_category:
            db_goal.category = None
        elif category is not None:
            db_goal.category = category
        db.commit()
        db.refresh(db_goal)
    logger.debug("Updated goal %s", goal_id)
    return db_goal


def delete_goal(db: Session, goal_id: str) -> bool:
    """Delete a goal and every step it owns. Irreversible."""
    db_goal = get_goal(db, goal_id)
    if db_goal is None:
        return False
    with storage_guard(db, "delete_goal"):
        step_count = len(db_goal.steps)
        db.delete(db_goal)
        db.commit()
    logger.info("Deleted goal %s with %d steps", goal_id, step_count)
    return True
