"""Daily activity counts bucketed for heatmap rendering."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, date, timedelta, tzinfo

from tracker.calendar import day_of
from tracker.types.objective import Objective

DEFAULT_WINDOW_DAYS = 140


@dataclass(frozen=True)
class HeatmapDay:
    """Activity for one calendar day."""

    date: date
    count: int
    level: int


def intensity_level(count: int) -> int:
    """Map an activity count onto the 0-4 scale."""
    if count <= 0:
        return 0
    if count <= 2:
        return 1
    if count <= 4:
        return 2
    if count <= 6:
        return 3
    return 4


def _scope(objectives: Sequence[Objective], objective_id: str | None) -> list[Objective]:
    if objective_id is None:
        return list(objectives)
    return [objective for objective in objectives if objective.id == objective_id]


def activity_count(
    objectives: Sequence[Objective],
    day: date,
    objective_id: str | None = None,
    tz: tzinfo = UTC,
) -> int:
    """Count task completions and log entries dated on ``day``."""
    day = day_of(day, tz)
    completions = 0
    logs = 0
    for objective in _scope(objectives, objective_id):
        for key_result in objective.key_results:
            completions += sum(1 for task in key_result.tasks if day in task.completed_dates)
            logs += sum(1 for log in key_result.logs if day_of(log.date, tz) == day)
    return completions + logs


def heatmap(
    objectives: Sequence[Objective],
    today: date,
    days: int = DEFAULT_WINDOW_DAYS,
    objective_id: str | None = None,
    week_start: int | None = None,
    tz: tzinfo = UTC,
) -> list[HeatmapDay]:
    """Daily intensity from ``today - days`` through ``today`` inclusive.

    With ``week_start`` (0=Monday .. 6=Sunday) the window start moves back
    to that weekday so the grid fills whole week columns.
    """
    today = day_of(today, tz)
    start = today - timedelta(days=days)
    if week_start is not None:
        start -= timedelta(days=(start.weekday() - week_start) % 7)

    cells: list[HeatmapDay] = []
    current = start
    while current <= today:
        count = activity_count(objectives, current, objective_id=objective_id, tz=tz)
        cells.append(HeatmapDay(date=current, count=count, level=intensity_level(count)))
        current += timedelta(days=1)
    return cells
