from datetime import date

import pytest

from pathplan.events import ChangeEvent, ChangeKind, ChangeNotifier
from pathplan.models import Cadence, Step
from pathplan.progress import GoalStats
from pathplan.richtext import RichText, StyledSpan, TextStyle
from pathplan.schemas import GoalRecord
from pathplan.store import GoalStore


@pytest.fixture
def events(store):
    received = []
    store.subscribe(received.append)
    return received


def test_scenario_two_thirds_then_complete(store, goal_dates):
    goal = store.create("Learn Spanish", *goal_dates, category="Education")
    done = store.add_step(goal, Cadence.DAILY, "Vocabulary")
    pending = store.add_step(goal, Cadence.DAILY, "Listening")
    weekly = store.add_step(goal, Cadence.WEEKLY, "Conversation class")
    store.set_done(done)
    store.set_done(weekly)

    assert goal.progress == pytest.approx(2 / 3)
    assert goal.is_completed is False

    store.set_done(pending)

    assert goal.progress == 1.0
    assert goal.is_completed is True


def test_new_goal_without_steps(store, goal_dates):
    goal = store.create("Empty", *goal_dates)

    assert goal.progress == 0.0
    assert goal.is_completed is False
    assert goal.daily_steps == goal.weekly_steps == goal.monthly_steps == []


def test_create_and_list(store, goal_dates, events):
    first = store.create("First", *goal_dates)
    second = store.create("First", *goal_dates)

    assert [g.id for g in store.list()] == [first.id, second.id]
    assert store.get(first.id).title == "First"
    assert events == [
        ChangeEvent(ChangeKind.GOAL_CREATED, first.id),
        ChangeEvent(ChangeKind.GOAL_CREATED, second.id),
    ]


def test_update_only_given_fields(store, goal_dates, events):
    goal = store.create("Goal", *goal_dates, category="Work")

    store.update(goal, title="Renamed", end_date=date(2023, 1, 1))

    goal = store.get(goal.id)
    assert goal.title == "Renamed"
    assert goal.end_date == date(2023, 1, 1)
    assert goal.start_date == goal_dates[0]
    assert goal.category == "Work"
    assert events[-1] == ChangeEvent(ChangeKind.GOAL_UPDATED, goal.id)


def test_update_clears_category(store, goal_dates):
    goal = store.create("Goal", *goal_dates, category="Work")

    assert store.update(goal.id, category=None).category is None


def test_update_rejects_unknown_fields(store, goal_dates):
    goal = store.create("Goal", *goal_dates)

    with pytest.raises(TypeError):
        store.update(goal, progress=0.5)
    with pytest.raises(TypeError):
        store.update_step("any", goal_id="x")


def test_update_missing_goal_emits_nothing(store, events):
    assert store.update("missing", title="x") is None
    assert events == []


def test_delete_goal_cascades(store, db, goal_dates, events):
    goal = store.create("Goal", *goal_dates)
    store.add_step(goal, Cadence.DAILY, "a")
    store.add_step(goal, Cadence.MONTHLY, "b")
    goal_id = goal.id

    assert store.delete(goal) is True

    assert store.get(goal_id) is None
    assert db.query(Step).count() == 0
    assert events[-1] == ChangeEvent(ChangeKind.GOAL_DELETED, goal_id)
    assert store.delete(goal_id) is False


def test_add_step_visible_only_in_its_bucket(store, goal_dates):
    goal = store.create("Goal", *goal_dates)
    step = store.add_step(goal, "daily", "Meditate")

    assert [s.id for s in store.steps(goal, Cadence.DAILY)] == [step.id]
    assert store.steps(goal, Cadence.WEEKLY) == []
    assert store.steps(goal, Cadence.MONTHLY) == []
    assert [s.id for s in goal.daily_steps] == [step.id]


def test_blank_step_is_ignored(store, goal_dates, events):
    goal = store.create("Goal", *goal_dates)
    events.clear()

    assert store.add_step(goal, Cadence.WEEKLY, "   ") is None
    assert events == []
    assert goal.steps == []


def test_add_rich_step(store, goal_dates):
    goal = store.create("Goal", *goal_dates)
    content = RichText(spans=[
        StyledSpan(text="Bold ", style=TextStyle(bold=True)),
        StyledSpan(text="red", style=TextStyle(color="#FF0000", underline=True)),
    ])

    step = store.add_step(goal, Cadence.MONTHLY, content, end_date=date(2024, 11, 30))
    store.db.expire_all()

    reloaded = store.steps(goal.id, Cadence.MONTHLY)[0]
    assert reloaded.id == step.id
    assert reloaded.content.runs() == content.runs()
    assert reloaded.end_date == date(2024, 11, 30)


def test_update_step_fields(store, goal_dates, events):
    goal = store.create("Goal", *goal_dates)
    step = store.add_step(goal, Cadence.DAILY, "Before", end_date=date(2024, 10, 3))

    store.update_step(step, content="After")
    assert step.content.plain_text == "After"
    assert step.end_date == date(2024, 10, 3)
    assert step.is_done is False

    store.update_step(step.id, end_date=None, is_done=True)
    assert step.end_date is None
    assert step.is_done is True
    assert events[-1] == ChangeEvent(ChangeKind.STEP_UPDATED, goal.id, step.id)


def test_remove_step(store, goal_dates, events):
    goal = store.create("Goal", *goal_dates)
    step = store.add_step(goal, Cadence.WEEKLY, "Step")
    step_id = step.id

    assert store.remove_step(goal, Cadence.DAILY, step) is False
    assert store.remove_step(goal, Cadence.WEEKLY, step) is True

    assert store.steps(goal) == []
    assert events[-1] == ChangeEvent(ChangeKind.STEP_REMOVED, goal.id, step_id)


def test_event_sequence(store, goal_dates, events):
    goal = store.create("Goal", *goal_dates)
    step = store.add_step(goal, Cadence.DAILY, "Step")
    store.set_done(step)
    store.remove_step(goal, Cadence.DAILY, step.id)
    store.delete(goal.id)

    assert [e.kind for e in events] == [
        ChangeKind.GOAL_CREATED,
        ChangeKind.STEP_ADDED,
        ChangeKind.STEP_UPDATED,
        ChangeKind.STEP_REMOVED,
        ChangeKind.GOAL_DELETED,
    ]


def test_observer_sees_recomputed_progress(store, goal_dates):
    goal = store.create("Goal", *goal_dates)
    step = store.add_step(goal, Cadence.DAILY, "Only step")
    seen = []
    store.subscribe(lambda event: seen.append((store.get(event.goal_id).progress, store.get(event.goal_id).is_completed)))

    store.set_done(step)

    assert seen == [(1.0, True)]


def test_failing_observer_does_not_block_others(db, goal_dates):
    notifier = ChangeNotifier()
    received = []

    def broken(event):
        raise RuntimeError("boom")

    notifier.subscribe(broken)
    notifier.subscribe(received.append)
    store = GoalStore(db, notifier)

    goal = store.create("Goal", *goal_dates)

    assert received == [ChangeEvent(ChangeKind.GOAL_CREATED, goal.id)]


def test_unsubscribe(store, goal_dates):
    received = []
    unsubscribe = store.subscribe(received.append)
    store.create("One", *goal_dates)

    unsubscribe()
    unsubscribe()
    store.create("Two", *goal_dates)

    assert len(received) == 1
    assert len(store.notifier) == 0


def test_stats(store, goal_dates):
    store.create("Empty", *goal_dates)
    done_goal = store.create("Done", *goal_dates)
    store.set_done(store.add_step(done_goal, Cadence.DAILY, "Step"))
    open_goal = store.create("Open", *goal_dates)
    store.add_step(open_goal, Cadence.WEEKLY, "Step")

    assert store.stats() == GoalStats(total=3, in_progress=2, completed=1)


def test_snapshot_records(store, goal_dates):
    goal = store.create("Goal", *goal_dates, category="Health")
    daily = store.add_step(goal, Cadence.DAILY, "Walk")
    store.add_step(goal, Cadence.MONTHLY, "Check-up")
    store.set_done(daily)

    records = store.snapshot()

    assert len(records) == 1
    record = records[0]
    assert isinstance(record, GoalRecord)
    assert record.id == goal.id
    assert record.category == "Health"
    assert [s.content.plain_text for s in record.daily_steps] == ["Walk"]
    assert record.weekly_steps == []
    assert record.monthly_steps[0].goal_id == goal.id
    assert record.progress == 0.5
    assert record.is_completed is False
    assert GoalRecord.model_validate_json(record.model_dump_json()) == record
