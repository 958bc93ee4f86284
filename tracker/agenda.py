"""Task occurrences planned for a calendar day."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime, tzinfo

from tracker.health import Health
from tracker.recurrence import is_completed_on, occurs_on
from tracker.types.objective import Objective
from tracker.types.task import Task


@dataclass
class AgendaItem:
    """One task occurrence with its owning objective and key result."""

    objective_id: str
    key_result_id: str
    objective_title: str
    key_result_title: str
    task: Task
    is_completed: bool
    health: Health


def agenda_for(
    objectives: Sequence[Objective],
    day: date | datetime,
    now: datetime | None = None,
    tz: tzinfo = UTC,
) -> list[AgendaItem]:
    """List occurrences on ``day`` across active objectives, pending first."""
    items: list[AgendaItem] = []
    for objective in objectives:
        if objective.is_archived:
            continue
        health = objective.health(now)
        for key_result in objective.key_results:
            for task in key_result.tasks:
                if not occurs_on(task, day, tz):
                    continue
                items.append(
                    AgendaItem(
                        objective_id=objective.id,
                        key_result_id=key_result.id,
                        objective_title=objective.title,
                        key_result_title=key_result.title,
                        task=task,
                        is_completed=is_completed_on(task, day, tz),
                        health=health,
                    )
                )
    return sorted(items, key=lambda item: item.is_completed)
