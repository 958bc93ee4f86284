"""Cross-objective aggregates for the dashboard."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime, tzinfo

from tracker.calendar import day_of, end_of_day, start_of_day
from tracker.progress import DatePoint
from tracker.types.objective import Objective


def active_count(objectives: Sequence[Objective]) -> int:
    """Objectives neither archived nor manually completed."""
    return sum(1 for objective in objectives if not objective.is_archived and not objective.is_completed)


def overall_progress_points(
    objectives: Sequence[Objective],
    now: datetime | None = None,
    tz: tzinfo = UTC,
) -> list[DatePoint]:
    """Mean progress per day across objectives that had started by that day.

    Each objective contributes the last point of its history at or before the
    end of the day, or 0 when it has none yet.
    """
    histories = {objective.id: objective.progress_history(now).points() for objective in objectives}
    days = sorted({day_of(point.date, tz) for points in histories.values() for point in points})

    result: list[DatePoint] = []
    for day in days:
        started = [objective for objective in objectives if day_of(objective.start_date, tz) <= day]
        if not started:
            continue
        cutoff = end_of_day(day, tz)
        total = 0.0
        for objective in started:
            reached = [point for point in histories[objective.id] if point.date <= cutoff]
            total += reached[-1].value if reached else 0.0
        result.append(DatePoint(date=start_of_day(day, tz), value=total / len(started)))
    return result
