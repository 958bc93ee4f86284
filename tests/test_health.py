"""Health classification tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from tracker.health import Health, classify, time_progress, time_ratio
from tracker.types import KeyResult, Objective

START = datetime(2024, 1, 1, tzinfo=UTC)
DUE = START + timedelta(days=100)


def objective_at(progress_value: float, due: datetime = DUE, is_completed: bool = False) -> Objective:
    return Objective(
        title="Health",
        key_results=[KeyResult(title="kr", current_value=progress_value * 10, target_value=10)],
        start_date=START,
        due_date=due,
        is_completed=is_completed,
    )


def days_in(days: float) -> datetime:
    return START + timedelta(days=days)


def test_at_risk_when_past_half_with_little_progress() -> None:
    assert objective_at(0.1).health(now=days_in(60)) == Health.AT_RISK


def test_off_track_when_late_with_partial_progress() -> None:
    assert objective_at(0.5).health(now=days_in(85)) == Health.OFF_TRACK


def test_at_risk_wins_over_off_track() -> None:
    assert objective_at(0.1).health(now=days_in(90)) == Health.AT_RISK


def test_completed_regardless_of_time() -> None:
    assert objective_at(1.0).health(now=days_in(500)) == Health.COMPLETED
    assert objective_at(0.0, is_completed=True).health(now=days_in(99)) == Health.COMPLETED


def test_on_track_otherwise() -> None:
    assert objective_at(0.1).health(now=days_in(40)) == Health.ON_TRACK
    assert objective_at(0.6).health(now=days_in(95)) == Health.ON_TRACK


def test_empty_window_saturates_time() -> None:
    assert time_ratio(START, START, now=days_in(-5)) == 1.0
    assert time_progress(START, START - timedelta(days=1), now=days_in(1)) == 1.0
    assert objective_at(0.1, due=START).health(now=START) == Health.AT_RISK


def test_time_progress_is_clamped() -> None:
    assert time_progress(START, DUE, now=days_in(-10)) == 0.0
    assert time_progress(START, DUE, now=days_in(250)) == 1.0
    assert time_progress(START, DUE, now=days_in(25)) == pytest.approx(0.25)
    assert objective_at(0.0).time_progress(now=days_in(50)) == pytest.approx(0.5)


def test_classify_thresholds_are_strict() -> None:
    assert classify(0.1, 0.5) == Health.ON_TRACK
    assert classify(0.2, 0.6) == Health.ON_TRACK
    assert classify(0.6, 0.9) == Health.ON_TRACK
    assert classify(0.59, 0.81) == Health.OFF_TRACK
