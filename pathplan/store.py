"""
GoalStore

Session-backed facade over the CRUD functions. Every successful mutation is
committed first and then announced to subscribers as a single ChangeEvent.
"""

from datetime import date
from typing import Callable, List, Optional, Union

from sqlalchemy.orm import Session

from pathplan.core.logging import get_logger
from pathplan.crud import goal as goal_crud
from pathplan.crud import step as step_crud
from pathplan.events import ChangeEvent, ChangeKind, ChangeNotifier, Observer
from pathplan.models import Cadence, Goal, Step
from pathplan.progress import GoalStats, summarize
from pathplan.schemas import GoalRecord

logger = get_logger(__name__)

GoalRef = Union[Goal, str]
StepRef = Union[Step, str]

_GOAL_FIELDS = ("title", "start_date", "end_date", "category")
_STEP_FIELDS = ("content", "end_date", "is_done")


def _ref_id(ref) -> str:
    return ref if isinstance(ref, str) else ref.id


def _check_fields(fields: dict, allowed: tuple) -> None:
    unknown = set(fields) - set(allowed)
    if unknown:
        raise TypeError(f"unknown field(s): {', '.join(sorted(unknown))}")


class GoalStore:
    """Goals and their steps on one session, with change notification"""

    def __init__(self, db: Session, notifier: Optional[ChangeNotifier] = None):
        self.db = db
        self.notifier = notifier or ChangeNotifier()

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        return self.notifier.subscribe(observer)

    def _emit(self, kind: ChangeKind, goal_id: str, step_id: Optional[str] = None) -> None:
        self.notifier.notify(ChangeEvent(kind=kind, goal_id=goal_id, step_id=step_id))

    # Goals

    def create(self, title: str, start_date: date, end_date: date, category: Optional[str] = None) -> Goal:
        goal = goal_crud.create_goal(self.db, title=title, start_date=start_date, end_date=end_date, category=category)
        self._emit(ChangeKind.GOAL_CREATED, goal.id)
        return goal

    def get(self, goal_id: str) -> Optional[Goal]:
        return goal_crud.get_goal(self.db, goal_id)

    def list(self) -> List[Goal]:
        return goal_crud.get_goals(self.db)

    def update(self, goal: GoalRef, **fields) -> Optional[Goal]:
        """
        Apply the given fields (title, start_date, end_date, category).

        Only keys that are passed change; passing category=None clears it.
        """
        _check_fields(fields, _GOAL_FIELDS)
        clear_category = "category" in fields and fields["category"] is None
        updated = goal_crud.update_goal(self.db, _ref_id(goal), clear_category=clear_category, **fields)
        if updated is not None:
            self._emit(ChangeKind.GOAL_UPDATED, updated.id)
        return updated

    def delete(self, goal: GoalRef) -> bool:
        goal_id = _ref_id(goal)
        deleted = goal_crud.delete_goal(self.db, goal_id)
        if deleted:
            self._emit(ChangeKind.GOAL_DELETED, goal_id)
        return deleted

    # Steps

    def steps(self, goal: GoalRef, cadence: Optional[Union[Cadence, str]] = None) -> List[Step]:
        return step_crud.get_steps(self.db, _ref_id(goal), cadence)

    def add_step(
        self,
        goal: GoalRef,
        cadence: Union[Cadence, str],
        content,
        end_date: Optional[date] = None,
    ) -> Optional[Step]:
        """Append to a bucket; blank content is ignored and returns None"""
        step = step_crud.add_step(self.db, _ref_id(goal), cadence, content, end_date=end_date)
        if step is not None:
            self._emit(ChangeKind.STEP_ADDED, step.goal_id, step.id)
        return step

    def update_step(self, step: StepRef, **fields) -> Optional[Step]:
        """
        Update content, end_date or is_done in place.

        Omitted fields stay unchanged; passing end_date=None clears the due date.
        """
        _check_fields(fields, _STEP_FIELDS)
        clear_end_date = "end_date" in fields and fields["end_date"] is None
        updated = step_crud.update_step(self.db, _ref_id(step), clear_end_date=clear_end_date, **fields)
        if updated is not None:
            self._emit(ChangeKind.STEP_UPDATED, updated.goal_id, updated.id)
        return updated

    def set_done(self, step: StepRef, done: bool = True) -> Optional[Step]:
        return self.update_step(step, is_done=done)

    def remove_step(self, goal: GoalRef, cadence: Union[Cadence, str], step: StepRef) -> bool:
        goal_id = _ref_id(goal)
        step_id = _ref_id(step)
        removed = step_crud.remove_step(self.db, goal_id, cadence, step_id)
        if removed:
            self._emit(ChangeKind.STEP_REMOVED, goal_id, step_id)
        return removed

    # Derived views

    def stats(self) -> GoalStats:
        return summarize(self.list())

    def snapshot(self) -> List[GoalRecord]:
        return [GoalRecord.from_goal(goal) for goal in self.list()]
