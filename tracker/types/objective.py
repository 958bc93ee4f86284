"""Objective records."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from tracker.calendar import ensure_aware, utc_now
from tracker.health import Health, classify_health, time_progress
from tracker.progress import ProgressHistory, weighted_progress
from tracker.types.document import DocumentModel, new_id
from tracker.types.key_result import KeyResult


class Objective(DocumentModel):
    """A goal with a due date measured through its key results.

    ``progress`` and the time-dependent getters are recomputed on every
    access and never stored.
    """

    id: str = Field(default_factory=new_id)
    title: str
    description: str = ""
    icon: str = "target"
    key_results: list[KeyResult] = Field(default_factory=list)
    start_date: datetime = Field(default_factory=utc_now)
    due_date: datetime
    is_completed: bool = False
    is_archived: bool = False

    @field_validator("start_date", "due_date")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)

    @property
    def progress(self) -> float:
        return weighted_progress((kr.progress, kr.weight) for kr in self.key_results)

    def time_progress(self, now: datetime | None = None) -> float:
        return time_progress(self.start_date, self.due_date, now)

    def health(self, now: datetime | None = None) -> Health:
        return classify_health(
            progress=self.progress,
            start=self.start_date,
            due=self.due_date,
            is_completed=self.is_completed,
            now=now,
        )

    def progress_history(self, now: datetime | None = None) -> ProgressHistory:
        return ProgressHistory(self, now=now)

    def key_result_index(self, key_result_id: str) -> int | None:
        for index, key_result in enumerate(self.key_results):
            if key_result.id == key_result_id:
                return index
        return None
