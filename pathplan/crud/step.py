from datetime import date
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from pathplan.core.logging import get_logger
from pathplan.crud.common import storage_guard
from pathplan.crud.goal import get_goal
from pathplan.models import Cadence, Step
from pathplan.richtext import RichText, coerce

logger = get_logger(__name__)

Content = Union[RichText, str]


# Step CRUD operations
def add_step(
    db: Session,
    goal_id: str,
    cadence: Union[Cadence, str],
    content: Content,
    end_date: Optional[date] = None,
) -> Optional[Step]:
    """Append a step to one bucket of a goal. Blank content is a no-op and returns None."""
    cadence = Cadence.parse(cadence)
    content = coerce(content)
    if content.is_blank:
        logger.debug("Ignoring blank %s step for goal %s", cadence.value, goal_id)
        return None

    db_goal = get_goal(db, goal_id)
    if db_goal is None:
        return None

    with storage_guard(db, "add_step"):
        db_step = Step(cadence=cadence, content=content, end_date=end_date, is_done=False)
        db_goal.steps.append(db_step)
        db.commit()
        db.refresh(db_step)
    logger.debug("Added %s step %s to goal %s", cadence.value, db_step.id, goal_id)
    return db_step


def get_step(db: Session, step_id: str) -> Optional[Step]:
    with storage_guard(db, "get_step"):
        return db.get(Step, step_id)


def get_steps(db: Session, goal_id: str, cadence: Optional[Union[Cadence, str]] = None) -> List[Step]:
    """Steps of a goal in display order, optionally limited to one bucket"""
    with storage_guard(db, "get_steps"):
        query = db.query(Step).filter(Step.goal_id == goal_id)
        if cadence is not None:
            query = query.filter(Step.cadence == Cadence.parse(cadence))
        return query.order_by(Step.position).all()


def update_step(
    db: Session,
    step_id: str,
    content: Optional[Content] = None,
    end_date: Optional[date] = None,
    is_done: Optional[bool] = None,
    clear_end_date: bool = False,
) -> Optional[Step]:
    """Update a step in place; omitted fields stay as they are. Blank content is ignored."""
    db_step = get_step(db, step_id)
    if db_step is None:
        return None
    with storage_guard(db, "update_step"):
        if content is not None:
            content = coerce(content)
            if content.is_blank:
                logger.debug("Keeping content of step %s, new content is blank", step_id)
            else:
                db_step.content = content
        if clear_end_date:
            db_step.end_date = None
        elif end_date is not None:
            db_step.end_date = end_date
        if is_done is not None:
            db_step.is_done = is_done
        db.commit()
        db.refresh(db_step)
    logger.debug("Updated step %s", step_id)
    return db_step


def set_step_done(db: Session, step_id: str, done: bool = True) -> Optional[Step]:
    return update_step(db, step_id, is_done=done)


def remove_step(db: Session, goal_id: str, cadence: Union[Cadence, str], step_id: str) -> bool:
    """Remove one step from a goal's bucket; False if it is not in that bucket"""
    cadence = Cadence.parse(cadence)
    db_step = get_step(db, step_id)
    if db_step is None or db_step.goal_id != goal_id or db_step.cadence != cadence:
        return False
    with storage_guard(db, "remove_step"):
        db_step.goal.steps.remove(db_step)
        db.commit()
    logger.debug("Removed %s step %s from goal %s", cadence.value, step_id, goal_id)
    return True
