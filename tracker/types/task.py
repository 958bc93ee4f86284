"""Planned task records."""

from __future__ import annotations

from datetime import date as date_type
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from tracker.calendar import day_of, ensure_aware, utc_now
from tracker.types.document import DocumentModel, new_id


class TaskRecurrence(str, Enum):
    """How a task repeats after its anchor date."""

    NONE = "None"
    DAILY = "Daily"
    WEEKLY = "Weekly"
    WEEKDAYS = "Weekdays"


class Task(DocumentModel):
    """A one-off or recurring action feeding a key result."""

    id: str = Field(default_factory=new_id)
    title: str
    date: datetime = Field(default_factory=utc_now)
    recurrence: TaskRecurrence = TaskRecurrence.NONE
    weight: float = 0.0
    completed_dates: list[date_type] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("date", "created_at")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)

    @field_validator("completed_dates", mode="before")
    @classmethod
    def _days_only(cls, value: Any) -> Any:
        # Instants collapse to their UTC day.
        if not isinstance(value, (list, tuple, set, frozenset)):
            return value
        return [day_of(item) if isinstance(item, (datetime, date_type)) else item for item in value]

    @field_validator("completed_dates")
    @classmethod
    def _unique_days(cls, value: list[date_type]) -> list[date_type]:
        # Parsed days are compared, so "2024-01-05" and date(2024, 1, 5) collapse; first-seen order kept.
        return list(dict.fromkeys(value))
