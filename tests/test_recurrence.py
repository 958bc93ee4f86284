"""Task recurrence and completion toggle tests."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from tracker.recurrence import is_completed_on, occurs_on, toggle_occurrence
from tracker.types import KeyResult, Task, TaskRecurrence

# 2024-01-01 is a Monday.
MONDAY = datetime(2024, 1, 1, 9, tzinfo=UTC)
NOW = datetime(2024, 1, 3, 10, tzinfo=UTC)
LOS_ANGELES = ZoneInfo("America/Los_Angeles")


def build_task(recurrence: TaskRecurrence, weight: float = 0.0, title: str = "Read chapter") -> Task:
    return Task(title=title, date=MONDAY, recurrence=recurrence, weight=weight)


def build_key_result(current: float = 2.0, target: float = 10.0) -> KeyResult:
    return KeyResult(title="Read books", current_value=current, target_value=target)


def test_one_off_task_occurs_only_on_its_day() -> None:
    task = build_task(TaskRecurrence.NONE)
    assert occurs_on(task, datetime(2024, 1, 1, 23, 30, tzinfo=UTC))
    assert occurs_on(task, date(2024, 1, 1))
    assert not occurs_on(task, date(2024, 1, 2))
    assert not occurs_on(task, date(2023, 12, 31))


def test_daily_task_occurs_from_anchor_onwards() -> None:
    task = build_task(TaskRecurrence.DAILY)
    assert not occurs_on(task, date(2023, 12, 31))
    assert all(occurs_on(task, date(2024, 1, 1) + timedelta(days=n)) for n in range(30))


def test_weekly_task_occurs_on_anchor_weekday_only() -> None:
    task = build_task(TaskRecurrence.WEEKLY)
    for offset in range(35):
        day = date(2024, 1, 1) + timedelta(days=offset)
        assert occurs_on(task, day) == (day.weekday() == 0)
    assert not occurs_on(task, date(2023, 12, 25))


def test_weekdays_task_skips_weekends() -> None:
    task = build_task(TaskRecurrence.WEEKDAYS)
    for offset in range(21):
        day = date(2024, 1, 1) + timedelta(days=offset)
        assert occurs_on(task, day) == (day.weekday() < 5)
    assert not occurs_on(task, date(2023, 12, 29))


def test_completion_is_tracked_per_day() -> None:
    task = build_task(TaskRecurrence.DAILY)
    task.completed_dates.append(date(2024, 1, 2))
    assert is_completed_on(task, datetime(2024, 1, 2, 22, tzinfo=UTC))
    assert not is_completed_on(task, date(2024, 1, 3))


def test_completed_dates_are_normalized_to_days() -> None:
    task = Task(
        title="Stretch",
        completed_dates=[datetime(2024, 1, 2, 8, tzinfo=UTC), date(2024, 1, 2), "2024-01-05", "2024-01-02"],
    )
    assert task.completed_dates == [date(2024, 1, 2), date(2024, 1, 5)]


def test_toggle_on_then_off_restores_value_and_log() -> None:
    key_result = build_key_result()
    task = build_task(TaskRecurrence.DAILY, weight=1.5)

    done = toggle_occurrence(key_result, task, date(2024, 1, 2), now=NOW)
    assert done.completed
    assert key_result.current_value == pytest.approx(3.5)
    assert task.completed_dates == [date(2024, 1, 2)]
    assert key_result.logs[0].message == "Task completed: Read chapter"
    assert key_result.logs[0].previous_value == pytest.approx(2.0)
    assert key_result.logs[0].new_value == pytest.approx(3.5)

    undone = toggle_occurrence(key_result, task, date(2024, 1, 2), now=NOW + timedelta(hours=1))
    assert not undone.completed
    assert undone.log_removed is not None
    assert key_result.current_value == pytest.approx(2.0)
    assert key_result.logs == []
    assert task.completed_dates == []


def test_rollback_only_matches_logs_written_today() -> None:
    key_result = build_key_result()
    task = build_task(TaskRecurrence.DAILY, weight=1.0)

    toggle_occurrence(key_result, task, date(2024, 1, 2), now=NOW)
    result = toggle_occurrence(key_result, task, date(2024, 1, 2), now=NOW + timedelta(days=1))

    assert result.log_removed is None
    assert key_result.current_value == pytest.approx(2.0)
    assert len(key_result.logs) == 1


def test_rollback_removes_most_recent_matching_log() -> None:
    key_result = build_key_result()
    task = build_task(TaskRecurrence.DAILY, weight=1.0)

    toggle_occurrence(key_result, task, date(2024, 1, 1), now=NOW)
    toggle_occurrence(key_result, task, date(2024, 1, 2), now=NOW + timedelta(minutes=5))
    newest = key_result.logs[0]

    result = toggle_occurrence(key_result, task, date(2024, 1, 1), now=NOW + timedelta(minutes=10))

    assert result.log_removed == newest
    assert len(key_result.logs) == 1
    assert task.completed_dates == [date(2024, 1, 2)]


def test_completion_is_capped_at_target() -> None:
    key_result = build_key_result(current=9.5)
    task = build_task(TaskRecurrence.NONE, weight=2.0)

    toggle_occurrence(key_result, task, MONDAY, now=NOW)

    assert key_result.current_value == 10.0
    assert key_result.logs[0].new_value == 10.0


def test_uncompletion_is_floored_at_zero() -> None:
    key_result = build_key_result(current=1.0)
    task = build_task(TaskRecurrence.NONE, weight=3.0)
    task.completed_dates.append(date(2024, 1, 1))

    result = toggle_occurrence(key_result, task, MONDAY, now=NOW)

    assert not result.completed
    assert key_result.current_value == 0.0


def test_zero_weight_task_only_records_completion() -> None:
    key_result = build_key_result()
    task = build_task(TaskRecurrence.WEEKLY)

    toggle_occurrence(key_result, task, date(2024, 1, 8), now=NOW)

    assert task.completed_dates == [date(2024, 1, 8)]
    assert key_result.current_value == 2.0
    assert key_result.logs == []


def test_toggle_off_clears_day_loaded_in_mixed_forms() -> None:
    task = Task(
        title="Stretch",
        recurrence=TaskRecurrence.DAILY,
        date=MONDAY,
        completed_dates=["2024-01-05", date(2024, 1, 5)],
    )
    assert len(task.completed_dates) == 1

    result = toggle_occurrence(build_key_result(), task, date(2024, 1, 5), now=NOW)

    assert not result.completed
    assert not is_completed_on(task, date(2024, 1, 5))
    assert task.completed_dates == []


def test_occurrences_follow_local_calendar_day() -> None:
    # 06:00 UTC on Monday 2024-01-01 is Sunday evening in Los Angeles.
    anchor = datetime(2024, 1, 1, 6, tzinfo=UTC)
    one_off = Task(title="Call home", date=anchor)
    weekly = Task(title="Plan week", date=anchor, recurrence=TaskRecurrence.WEEKLY)

    assert occurs_on(one_off, date(2023, 12, 31), tz=LOS_ANGELES)
    assert not occurs_on(one_off, date(2024, 1, 1), tz=LOS_ANGELES)
    assert occurs_on(one_off, date(2024, 1, 1))

    assert occurs_on(weekly, date(2024, 1, 7), tz=LOS_ANGELES)
    assert not occurs_on(weekly, date(2024, 1, 8), tz=LOS_ANGELES)
    assert occurs_on(weekly, date(2024, 1, 8))


def test_rollback_uses_local_today() -> None:
    # 03:00 UTC on 2024-01-03 is still 2024-01-02 in Los Angeles.
    evening = datetime(2024, 1, 3, 3, tzinfo=UTC)

    key_result = build_key_result()
    task = build_task(TaskRecurrence.DAILY, weight=1.0)
    toggle_occurrence(key_result, task, date(2024, 1, 2), now=evening, tz=LOS_ANGELES)
    undone = toggle_occurrence(key_result, task, date(2024, 1, 2), now=evening + timedelta(hours=1), tz=LOS_ANGELES)
    assert undone.log_removed is not None
    assert key_result.logs == []

    key_result = build_key_result()
    task = build_task(TaskRecurrence.DAILY, weight=1.0)
    toggle_occurrence(key_result, task, date(2024, 1, 2), now=evening, tz=LOS_ANGELES)
    # 09:00 UTC is past local midnight, so the log now belongs to yesterday.
    undone = toggle_occurrence(key_result, task, date(2024, 1, 2), now=evening + timedelta(hours=6), tz=LOS_ANGELES)
    assert undone.log_removed is None
    assert len(key_result.logs) == 1
    assert key_result.current_value == pytest.approx(2.0)
