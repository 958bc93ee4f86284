"""Sample objectives for a first run."""

from __future__ import annotations

from datetime import datetime, timedelta

from tracker.calendar import utc_now
from tracker.types.key_result import KeyResult, KeyResultType
from tracker.types.objective import Objective


def sample_objectives(now: datetime | None = None) -> list[Objective]:
    """Three example objectives covering every key-result type."""
    now = now or utc_now()
    day = timedelta(days=1)

    fitness = Objective(
        title="Improve Physical Fitness",
        description="Prepare for the summer marathon",
        key_results=[
            KeyResult(title="Run weekly", current_value=1, target_value=3, unit="times"),
            KeyResult(title="Lose weight", current_value=0.5, target_value=5, unit="kg"),
        ],
        start_date=now - 5 * day,
        due_date=now + 30 * day,
    )
    learning = Objective(
        title="Master iOS Development",
        description="Learn SwiftUI and Combine deeply",
        key_results=[
            KeyResult(
                title="Finish Swift Course",
                type=KeyResultType.PERCENTAGE,
                current_value=25,
                target_value=100,
                unit="%",
            ),
            KeyResult(
                title="Publish App to App Store",
                type=KeyResultType.BOOLEAN,
                current_value=0,
                target_value=1,
                unit="Done",
            ),
        ],
        start_date=now - 10 * day,
        due_date=now + 60 * day,
    )
    business = Objective(
        title="Grow Business Revenue",
        description="Focus on new customer acquisition",
        key_results=[
            KeyResult(
                title="Achieve Q1 Revenue",
                type=KeyResultType.CURRENCY,
                current_value=5000,
                target_value=20000,
                unit="USD",
            ),
        ],
        start_date=now - 15 * day,
        due_date=now + 90 * day,
    )
    return [fitness, learning, business]
