"""Weighted progress aggregation and historical reconstruction."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from tracker.calendar import ensure_aware, utc_now

if TYPE_CHECKING:
    from tracker.types.key_result import KeyResult
    from tracker.types.objective import Objective

# A trailing "now" point is only added when the newest point is older than this.
TRAILING_POINT_GAP = timedelta(seconds=60)


@dataclass(frozen=True)
class DatePoint:
    """One sample of an objective's progress curve."""

    date: datetime
    value: float


def ratio_progress(value: float, target: float) -> float:
    """Map a value against its target to [0, 1]; non-positive targets give 0."""
    if target <= 0:
        return 0.0
    return max(0.0, min(value / target, 1.0))


def weighted_progress(samples: Iterable[tuple[float, float]]) -> float:
    """Combine ``(progress, weight)`` pairs.

    Uses the weighted mean when the total weight is positive and falls back
    to the plain mean otherwise (all-zero weights). No samples yields 0.
    """
    pairs = list(samples)
    if not pairs:
        return 0.0
    total_weight = sum(weight for _, weight in pairs)
    if total_weight > 0:
        return sum(progress * weight for progress, weight in pairs) / total_weight
    return sum(progress for progress, _ in pairs) / len(pairs)


def value_at(key_result: KeyResult, instant: datetime) -> float:
    """Return the key result's logged value as it stood at ``instant``.

    Picks the log with the latest date not after ``instant``. Logs are kept
    newest-first, so among equal dates the lowest index wins.
    """
    instant = ensure_aware(instant)
    best = None
    for log in key_result.logs:
        if log.date > instant:
            continue
        if best is None or log.date > best.date:
            best = log
    return best.new_value if best is not None else 0.0


def progress_at(key_results: Sequence[KeyResult], instant: datetime) -> float:
    """Reconstruct weighted progress at ``instant`` from the log history."""
    return weighted_progress(
        (ratio_progress(value_at(kr, instant), kr.target_value), kr.weight)
        for kr in key_results
    )


class ProgressHistory:
    """Lazy, restartable progress curve of one objective.

    Points are recomputed from the objective's logs on every iteration.
    """

    def __init__(self, objective: Objective, now: datetime | None = None) -> None:
        self.objective = objective
        self._now = now

    def __iter__(self) -> Iterator[DatePoint]:
        return iter(self.points())

    def points(self) -> list[DatePoint]:
        objective = self.objective
        now = ensure_aware(self._now) if self._now is not None else utc_now()
        points = [DatePoint(date=objective.start_date, value=0.0)]

        log_dates = sorted({log.date for kr in objective.key_results for log in kr.logs})
        for instant in log_dates:
            points.append(DatePoint(date=instant, value=progress_at(objective.key_results, instant)))

        if points[-1].date < now - TRAILING_POINT_GAP:
            points.append(DatePoint(date=now, value=objective.progress))

        return sorted(points, key=lambda point: point.date)
