"""Activity log records."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from tracker.calendar import ensure_aware, utc_now
from tracker.types.document import DocumentModel, new_id


class ActivityLog(DocumentModel):
    """Immutable audit entry for a key-result value change."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    date: datetime = Field(default_factory=utc_now)
    message: str
    previous_value: float
    new_value: float

    @field_validator("date")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)
