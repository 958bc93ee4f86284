"""Post-mutation auto-archive pass."""

from __future__ import annotations

from collections.abc import Sequence

from tracker.types.objective import Objective


def auto_archive(objectives: Sequence[Objective]) -> list[Objective]:
    """Return a new list where every fully progressed objective is archived.

    Archived objectives are never unarchived, so the pass is idempotent.
    """
    result: list[Objective] = []
    for objective in objectives:
        if not objective.is_archived and objective.progress >= 1.0:
            objective = objective.model_copy(update={"is_archived": True})
        result.append(objective)
    return result


def newly_archived(before: Sequence[Objective], after: Sequence[Objective]) -> list[Objective]:
    """Objectives that the pass flipped to archived."""
    return [
        new for old, new in zip(before, after, strict=True)
        if new.is_archived and not old.is_archived
    ]
