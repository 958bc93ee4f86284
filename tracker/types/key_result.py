"""Key result records."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from tracker.progress import ratio_progress
from tracker.types.activity_log import ActivityLog
from tracker.types.document import DocumentModel, new_id
from tracker.types.task import Task


class KeyResultType(str, Enum):
    """Measurement kind of a key result."""

    NUMBER = "Number"
    PERCENTAGE = "Percentage"
    CURRENCY = "Currency"
    BOOLEAN = "Yes/No"


class KeyResult(DocumentModel):
    """Measurable sub-goal owned by one objective.

    ``logs`` is kept newest-first: index 0 is always the most recently
    inserted entry.
    """

    id: str = Field(default_factory=new_id)
    title: str
    type: KeyResultType = KeyResultType.NUMBER
    current_value: float = 0.0
    target_value: float
    unit: str = ""
    weight: float = 100.0
    logs: list[ActivityLog] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)

    @property
    def progress(self) -> float:
        return ratio_progress(self.current_value, self.target_value)

    @property
    def is_completed(self) -> bool:
        return self.current_value >= self.target_value

    def task_index(self, task_id: str) -> int | None:
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                return index
        return None
