"""
Derived goal progress

Nothing here is stored: callers pass the current steps and get a fresh answer.
"""

from dataclasses import dataclass
from typing import Iterable


def progress_of(steps: Iterable) -> float:
    """Fraction of steps marked done, 0.0 when there are none"""
    total = 0
    done = 0
    for step in steps:
        total += 1
        if step.is_done:
            done += 1
    if total == 0:
        return 0.0
    return done / total


def is_completed(steps: Iterable) -> bool:
    """True iff at least one step exists and every step is done"""
    seen = False
    for step in steps:
        if not step.is_done:
            return False
        seen = True
    return seen


@dataclass(frozen=True)
class GoalStats:
    """Home screen counters"""

    total: int = 0
    in_progress: int = 0
    completed: int = 0


def summarize(goals: Iterable) -> GoalStats:
    total = 0
    completed = 0
    for goal in goals:
        total += 1
        if goal.is_completed:
            completed += 1
    return GoalStats(total=total, in_progress=total - completed, completed=completed)
