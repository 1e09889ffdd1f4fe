from datetime import date
from types import SimpleNamespace

import pytest

from pathplan.models import Cadence, Goal, Step
from pathplan.progress import GoalStats, is_completed, progress_of, summarize


def make_goal(*buckets):
    """buckets: (cadence, is_done) pairs"""
    goal = Goal(title="Goal", start_date=date(2024, 1, 1), end_date=date(2024, 2, 1))
    for cadence, done in buckets:
        goal.steps.append(Step(cadence=cadence, content="step", is_done=done))
    return goal


def test_progress_of_no_steps():
    assert progress_of([]) == 0.0
    assert is_completed([]) is False


def test_progress_of_counts_done_steps():
    steps = [SimpleNamespace(is_done=d) for d in (True, False, True, False)]

    assert progress_of(steps) == 0.5
    assert is_completed(steps) is False


def test_one_incomplete_step_among_ten():
    steps = [SimpleNamespace(is_done=True) for _ in range(9)] + [SimpleNamespace(is_done=False)]

    assert progress_of(steps) == pytest.approx(0.9)
    assert is_completed(steps) is False


@pytest.mark.parametrize("flags", [
    (),
    (False,),
    (True,),
    (True, False, False),
    (True, True, True, True),
])
def test_progress_bounds(flags):
    steps = [SimpleNamespace(is_done=f) for f in flags]

    assert 0.0 <= progress_of(steps) <= 1.0
    assert is_completed(steps) == (len(flags) > 0 and all(flags))


def test_new_goal_has_no_progress():
    goal = make_goal()

    assert goal.progress == 0.0
    assert goal.is_completed is False


def test_progress_spans_all_buckets():
    goal = make_goal((Cadence.DAILY, True), (Cadence.DAILY, False), (Cadence.WEEKLY, True))

    assert goal.progress == pytest.approx(2 / 3)
    assert goal.is_completed is False

    goal.daily_steps[1].is_done = True

    assert goal.progress == 1.0
    assert goal.is_completed is True


def test_progress_follows_step_changes():
    goal = make_goal((Cadence.MONTHLY, True))
    assert goal.is_completed is True

    goal.steps.append(Step(cadence=Cadence.WEEKLY, content="new", is_done=False))
    assert goal.progress == 0.5
    assert goal.is_completed is False

    goal.steps.remove(goal.weekly_steps[0])
    assert goal.progress == 1.0
    assert goal.is_completed is True


def test_bucket_views_filter_the_single_collection():
    goal = make_goal((Cadence.DAILY, False), (Cadence.MONTHLY, False), (Cadence.DAILY, True))

    assert [s.is_done for s in goal.daily_steps] == [False, True]
    assert goal.weekly_steps == []
    assert len(goal.monthly_steps) == 1
    assert goal.steps_for("Monthly") == goal.monthly_steps


def test_summarize():
    goals = [
        make_goal(),
        make_goal((Cadence.DAILY, True)),
        make_goal((Cadence.DAILY, True), (Cadence.WEEKLY, False)),
    ]

    assert summarize(goals) == GoalStats(total=3, in_progress=2, completed=1)
    assert summarize([]) == GoalStats()
