"""Typed OKR entity models."""

from tracker.health import Health
from tracker.progress import DatePoint
from tracker.types.activity_log import ActivityLog
from tracker.types.key_result import KeyResult, KeyResultType
from tracker.types.objective import Objective
from tracker.types.task import Task, TaskRecurrence

__all__ = [
    "ActivityLog",
    "DatePoint",
    "Health",
    "KeyResult",
    "KeyResultType",
    "Objective",
    "Task",
    "TaskRecurrence",
]
