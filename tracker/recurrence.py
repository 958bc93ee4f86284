"""Recurring task expansion and occurrence toggling."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, tzinfo

from tracker.calendar import WEEKDAYS, day_of, ensure_aware, utc_now
from tracker.types.activity_log import ActivityLog
from tracker.types.key_result import KeyResult
from tracker.types.task import Task, TaskRecurrence

logger = logging.getLogger("okr.recurrence")

TASK_COMPLETED_MESSAGE = "Task completed: {title}"


@dataclass
class ToggleResult:
    """Outcome of toggling one task occurrence."""

    completed: bool
    previous_value: float
    new_value: float
    log_added: ActivityLog | None = None
    log_removed: ActivityLog | None = None


def completion_message(task: Task) -> str:
    return TASK_COMPLETED_MESSAGE.format(title=task.title)


def occurs_on(task: Task, day: date | datetime, tz: tzinfo = UTC) -> bool:
    """Return whether ``task`` has an occurrence on calendar day ``day``."""
    target = day_of(day, tz)
    anchor = day_of(task.date, tz)
    if task.recurrence == TaskRecurrence.NONE:
        return target == anchor
    if anchor > target:
        return False
    if task.recurrence == TaskRecurrence.DAILY:
        return True
    if task.recurrence == TaskRecurrence.WEEKLY:
        return target.weekday() == anchor.weekday()
    if task.recurrence == TaskRecurrence.WEEKDAYS:
        return target.weekday() in WEEKDAYS
    return False


def is_completed_on(task: Task, day: date | datetime, tz: tzinfo = UTC) -> bool:
    return day_of(day, tz) in task.completed_dates


def _rollback_index(key_result: KeyResult, task: Task, today: date, tz: tzinfo) -> int | None:
    # Matches the completion log written today, not on the toggled occurrence day.
    message = completion_message(task)
    for index, log in enumerate(key_result.logs):
        if log.message == message and day_of(log.date, tz) == today:
            return index
    return None


def toggle_occurrence(
    key_result: KeyResult,
    task: Task,
    day: date | datetime,
    now: datetime | None = None,
    tz: tzinfo = UTC,
) -> ToggleResult:
    """Flip completion of ``task`` on ``day`` and move the key result value.

    Completing adds ``task.weight`` (capped at the target) and logs it.
    Un-completing subtracts the weight (floored at 0) and removes the
    matching completion log from today if one exists; no log is added.
    """
    current = ensure_aware(now) if now is not None else utc_now()
    target_day = day_of(day, tz)
    previous = key_result.current_value

    if target_day in task.completed_dates:
        task.completed_dates.remove(target_day)
        result = ToggleResult(completed=False, previous_value=previous, new_value=previous)
        if task.weight > 0:
            key_result.current_value = max(0.0, previous - task.weight)
            result.new_value = key_result.current_value
            index = _rollback_index(key_result, task, day_of(current, tz), tz)
            if index is not None:
                result.log_removed = key_result.logs.pop(index)
            else:
                logger.debug("No completion log to roll back for task %s", task.id)
        return result

    task.completed_dates.append(target_day)
    result = ToggleResult(completed=True, previous_value=previous, new_value=previous)
    if task.weight > 0:
        new_value = min(key_result.target_value, previous + task.weight)
        log = ActivityLog(
            date=current,
            message=completion_message(task),
            previous_value=previous,
            new_value=new_value,
        )
        key_result.current_value = new_value
        key_result.logs.insert(0, log)
        result.new_value = new_value
        result.log_added = log
    return result
