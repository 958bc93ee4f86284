"""Mutation service owning the in-memory objective list."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, date, datetime, tzinfo
from typing import Any

from pydantic import TypeAdapter, ValidationError

from core.event_bus import EventBus
from governance.audit_logger import AuditLogger
from tracker.archive import auto_archive, newly_archived
from tracker.calendar import ensure_aware, utc_now
from tracker.recurrence import ToggleResult, toggle_occurrence
from tracker.seed import sample_objectives
from tracker.stores.base import DocumentBackend
from tracker.types.activity_log import ActivityLog
from tracker.types.key_result import KeyResult
from tracker.types.objective import Objective
from tracker.types.task import Task, TaskRecurrence

logger = logging.getLogger("okr.store")

DOCUMENT_NAME = "okrs.json"
AUTO_LOG_MESSAGE = "Update progress"
AUTO_LOG_THRESHOLD = 0.001

SeedPolicy = Callable[[], list[Objective]]

_DOCUMENT = TypeAdapter(list[Objective])


class OKRStore:
    """Single writer for all objectives.

    Every mutation ends in one commit: the auto-archive pass runs over the
    whole list and the result is written to the backend as one document.
    Unknown ids make a mutation a silent no-op.
    """

    def __init__(
        self,
        backend: DocumentBackend,
        *,
        document_name: str = DOCUMENT_NAME,
        audit_logger: AuditLogger | None = None,
        event_bus: EventBus | None = None,
        seed: SeedPolicy | None = sample_objectives,
        tz: tzinfo = UTC,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.backend = backend
        self.document_name = document_name
        self.audit_logger = audit_logger
        self.event_bus = event_bus
        self.seed = seed
        self.tz = tz
        self.clock = clock
        self._objectives: list[Objective] = []

    # -- lifecycle --------------------------------------------------------

    def open(self) -> OKRStore:
        """Load the persisted document once, seeding when it is absent or unreadable."""
        loaded = self._load()
        if loaded is not None:
            self._objectives = loaded
            return self
        self._objectives = []
        if self.seed is not None:
            self._objectives = list(self.seed())
            logger.info("Seeded %d sample objectives", len(self._objectives))
            self._commit("seed", None, {"count": len(self._objectives)})
        return self

    def close(self) -> None:
        self.backend.close()

    def __enter__(self) -> OKRStore:
        return self.open()

    def __exit__(self, *exc: object) -> None:
        self.close()

    # -- reads ------------------------------------------------------------

    @property
    def objectives(self) -> list[Objective]:
        return list(self._objectives)

    def get(self, objective_id: str) -> Objective | None:
        index = self._objective_index(objective_id)
        return self._objectives[index] if index is not None else None

    def active(self) -> list[Objective]:
        return [objective for objective in self._objectives if not objective.is_archived]

    def archived(self) -> list[Objective]:
        return [objective for objective in self._objectives if objective.is_archived]

    # -- objective mutations ----------------------------------------------

    def add(self, objective: Objective) -> Objective:
        self._objectives.append(objective)
        self._commit("objective.add", objective.id, {"title": objective.title})
        return self.get(objective.id) or objective

    def delete(self, objective_id: str) -> bool:
        index = self._objective_index(objective_id)
        if index is None:
            return False
        del self._objectives[index]
        self._commit("objective.delete", objective_id, {})
        return True

    def delete_at(self, positions: Iterable[int]) -> int:
        """Remove objectives by list position; out-of-range positions are ignored."""
        doomed = {p for p in positions if 0 <= p < len(self._objectives)}
        if not doomed:
            return 0
        removed_ids = [self._objectives[p].id for p in sorted(doomed)]
        self._objectives = [o for p, o in enumerate(self._objectives) if p not in doomed]
        self._commit("objective.delete", None, {"ids": removed_ids})
        return len(doomed)

    def edit_objective(
        self,
        objective_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
        icon: str | None = None,
        start_date: datetime | None = None,
        due_date: datetime | None = None,
        is_completed: bool | None = None,
        is_archived: bool | None = None,
    ) -> Objective | None:
        """Apply direct field edits; ``None`` leaves a field unchanged."""
        index = self._objective_index(objective_id)
        if index is None:
            return None
        changes: dict[str, Any] = {
            "title": title,
            "description": description,
            "icon": icon,
            "start_date": ensure_aware(start_date) if start_date is not None else None,
            "due_date": ensure_aware(due_date) if due_date is not None else None,
            "is_completed": is_completed,
            "is_archived": is_archived,
        }
        changes = {key: value for key, value in changes.items() if value is not None}
        objective = self._objectives[index]
        for key, value in changes.items():
            setattr(objective, key, value)
        self._commit("objective.edit", objective_id, changes)
        return self._objectives[index]

    # -- key result mutations ---------------------------------------------

    def add_key_result(self, objective_id: str, key_result: KeyResult) -> KeyResult | None:
        index = self._objective_index(objective_id)
        if index is None:
            return None
        self._objectives[index].key_results.append(key_result)
        self._commit("key_result.add", objective_id, {"key_result_id": key_result.id})
        return key_result

    def remove_key_result(self, objective_id: str, key_result_id: str) -> bool:
        located = self._locate(objective_id, key_result_id)
        if located is None:
            return False
        objective, kr_index = located
        del objective.key_results[kr_index]
        self._commit("key_result.remove", objective_id, {"key_result_id": key_result_id})
        return True

    def update_key_result_value(
        self,
        objective_id: str,
        key_result_id: str,
        new_value: float,
        message: str | None = None,
    ) -> KeyResult | None:
        """Set a key result's current value and log the change.

        A non-empty ``message`` is always logged. Without one, only changes
        larger than 0.001 get an automatic entry.
        """
        located = self._locate(objective_id, key_result_id)
        if located is None:
            return None
        objective, kr_index = located
        key_result = objective.key_results[kr_index]
        old_value = key_result.current_value
        key_result.current_value = new_value

        if message:
            log_message: str | None = message
        elif abs(new_value - old_value) > AUTO_LOG_THRESHOLD:
            log_message = AUTO_LOG_MESSAGE
        else:
            log_message = None
        if log_message is not None:
            key_result.logs.insert(
                0,
                ActivityLog(
                    date=self.clock(),
                    message=log_message,
                    previous_value=old_value,
                    new_value=new_value,
                ),
            )

        self._commit(
            "key_result.update_value",
            objective_id,
            {"key_result_id": key_result_id, "old": old_value, "new": new_value, "logged": log_message},
        )
        return key_result

    # -- task mutations ---------------------------------------------------

    def add_task(self, objective_id: str, key_result_id: str, task: Task) -> Task | None:
        located = self._locate(objective_id, key_result_id)
        if located is None:
            return None
        objective, kr_index = located
        objective.key_results[kr_index].tasks.append(task)
        self._commit("task.add", objective_id, {"key_result_id": key_result_id, "task_id": task.id})
        return task

    def update_task(
        self,
        objective_id: str,
        key_result_id: str,
        task_id: str,
        *,
        title: str | None = None,
        date: datetime | None = None,
        recurrence: TaskRecurrence | None = None,
        weight: float | None = None,
    ) -> Task | None:
        task = self._find_task(objective_id, key_result_id, task_id)
        if task is None:
            return None
        if title is not None:
            task.title = title
        if date is not None:
            task.date = ensure_aware(date)
        if recurrence is not None:
            task.recurrence = recurrence
        if weight is not None:
            task.weight = weight
        self._commit("task.edit", objective_id, {"task_id": task_id})
        return task

    def remove_task(self, objective_id: str, key_result_id: str, task_id: str) -> bool:
        located = self._locate(objective_id, key_result_id)
        if located is None:
            return False
        objective, kr_index = located
        key_result = objective.key_results[kr_index]
        task_index = key_result.task_index(task_id)
        if task_index is None:
            logger.debug("Task %s not found", task_id)
            return False
        del key_result.tasks[task_index]
        self._commit("task.remove", objective_id, {"task_id": task_id})
        return True

    def toggle_task(
        self,
        objective_id: str,
        key_result_id: str,
        task_id: str,
        day: date | datetime,
    ) -> ToggleResult | None:
        """Toggle one task occurrence and move the owning key result value."""
        located = self._locate(objective_id, key_result_id)
        if located is None:
            return None
        objective, kr_index = located
        key_result = objective.key_results[kr_index]
        task_index = key_result.task_index(task_id)
        if task_index is None:
            logger.debug("Task %s not found", task_id)
            return None
        result = toggle_occurrence(
            key_result,
            key_result.tasks[task_index],
            day,
            now=self.clock(),
            tz=self.tz,
        )
        self._commit(
            "task.toggle",
            objective_id,
            {"task_id": task_id, "day": str(day), "completed": result.completed},
        )
        return result

    # -- internals --------------------------------------------------------

    def _objective_index(self, objective_id: str) -> int | None:
        for index, objective in enumerate(self._objectives):
            if objective.id == objective_id:
                return index
        logger.debug("Objective %s not found", objective_id)
        return None

    def _locate(self, objective_id: str, key_result_id: str) -> tuple[Objective, int] | None:
        index = self._objective_index(objective_id)
        if index is None:
            return None
        objective = self._objectives[index]
        kr_index = objective.key_result_index(key_result_id)
        if kr_index is None:
            logger.debug("Key result %s not found in %s", key_result_id, objective_id)
            return None
        return objective, kr_index

    def _find_task(self, objective_id: str, key_result_id: str, task_id: str) -> Task | None:
        located = self._locate(objective_id, key_result_id)
        if located is None:
            return None
        objective, kr_index = located
        key_result = objective.key_results[kr_index]
        task_index = key_result.task_index(task_id)
        return key_result.tasks[task_index] if task_index is not None else None

    def _commit(self, action: str, objective_id: str | None, inputs: dict[str, Any]) -> None:
        before = self._objectives
        after = auto_archive(before)
        archived_now = newly_archived(before, after)
        self._objectives = after

        saved = self._save()
        if self.audit_logger is not None:
            self.audit_logger.log(
                action=action,
                objective_id=objective_id,
                inputs=inputs,
                outcome="saved" if saved else "unsaved",
            )
        # Events go out only once the new state is in place and persisted.
        for objective in archived_now:
            logger.info("Auto-archived objective %s (%s)", objective.id, objective.title)
            if self.event_bus is not None:
                self.event_bus.emit("objective.archived", {"objective_id": objective.id})
        if self.event_bus is not None:
            self.event_bus.emit("store.changed", {"action": action, "objective_id": objective_id})

    def _save(self) -> bool:
        try:
            body = _DOCUMENT.dump_json(self._objectives, by_alias=True).decode("utf-8")
            self.backend.write(self.document_name, body)
        except Exception:
            logger.exception("Failed to save objectives to %s", self.document_name)
            return False
        return True

    def _load(self) -> list[Objective] | None:
        try:
            body = self.backend.read(self.document_name)
        except Exception:
            logger.exception("Failed to read %s", self.document_name)
            return None
        if body is None:
            return None
        try:
            return _DOCUMENT.validate_json(body)
        except ValidationError as exc:
            logger.warning("Discarding unreadable document %s: %s", self.document_name, exc)
            return None
