"""Time-based health classification of objectives."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from tracker.calendar import ensure_aware, utc_now

AT_RISK_TIME_RATIO = 0.5
AT_RISK_PROGRESS = 0.2
OFF_TRACK_TIME_RATIO = 0.8
OFF_TRACK_PROGRESS = 0.6


class Health(str, Enum):
    """Qualitative status derived from progress against elapsed time."""

    ON_TRACK = "On Track"
    AT_RISK = "At Risk"
    OFF_TRACK = "Off Track"
    COMPLETED = "Completed"


def _span(start: datetime, due: datetime, now: datetime | None) -> tuple[float, float]:
    current = ensure_aware(now) if now is not None else utc_now()
    start = ensure_aware(start)
    total = (ensure_aware(due) - start).total_seconds()
    elapsed = (current - start).total_seconds()
    return elapsed, total


def time_ratio(start: datetime, due: datetime, now: datetime | None = None) -> float:
    """Elapsed share of the objective's window, unclamped; 1.0 for empty windows."""
    elapsed, total = _span(start, due, now)
    if total <= 0:
        return 1.0
    return elapsed / total


def time_progress(start: datetime, due: datetime, now: datetime | None = None) -> float:
    """Elapsed share of the window clamped to [0, 1]."""
    elapsed, total = _span(start, due, now)
    if total <= 0:
        return 1.0
    return min(max(elapsed / total, 0.0), 1.0)


def classify(progress: float, ratio: float, is_completed: bool = False) -> Health:
    """Classify from progress and time ratio. At-risk is checked before off-track."""
    if is_completed or progress >= 1.0:
        return Health.COMPLETED
    if ratio > AT_RISK_TIME_RATIO and progress < AT_RISK_PROGRESS:
        return Health.AT_RISK
    if ratio > OFF_TRACK_TIME_RATIO and progress < OFF_TRACK_PROGRESS:
        return Health.OFF_TRACK
    return Health.ON_TRACK


def classify_health(
    *,
    progress: float,
    start: datetime,
    due: datetime,
    is_completed: bool = False,
    now: datetime | None = None,
) -> Health:
    """Derive health for an objective window at ``now``."""
    return classify(progress, time_ratio(start, due, now), is_completed=is_completed)
