"""Key-result defaults and display formatting per measurement type."""

from __future__ import annotations

from tracker.types.key_result import KeyResult, KeyResultType

DEFAULTS: dict[KeyResultType, tuple[float, str]] = {
    KeyResultType.NUMBER: (10.0, "times"),
    KeyResultType.PERCENTAGE: (100.0, "%"),
    KeyResultType.CURRENCY: (1000.0, "$"),
    KeyResultType.BOOLEAN: (1.0, "Done"),
}


def defaults_for(kind: KeyResultType) -> tuple[float, str]:
    """Return ``(target_value, unit)`` suggested for a new key result."""
    return DEFAULTS[kind]


def new_key_result(
    title: str,
    kind: KeyResultType = KeyResultType.NUMBER,
    target_value: float | None = None,
    unit: str | None = None,
    weight: float = 100.0,
) -> KeyResult:
    """Build a key result starting at zero. Boolean results always target 1."""
    default_target, default_unit = defaults_for(kind)
    target = default_target if target_value is None else target_value
    if kind == KeyResultType.BOOLEAN:
        target = 1.0
    return KeyResult(
        title=title,
        type=kind,
        current_value=0.0,
        target_value=target,
        unit=default_unit if unit is None else unit,
        weight=weight,
    )


def format_value(key_result: KeyResult) -> str:
    current, target, unit = key_result.current_value, key_result.target_value, key_result.unit
    if key_result.type == KeyResultType.CURRENCY:
        return f"{unit}{current:.2f} / {unit}{target:.2f}"
    if key_result.type == KeyResultType.PERCENTAGE:
        return f"{int(current)}% / {int(target)}%"
    if key_result.type == KeyResultType.BOOLEAN:
        return "Done" if key_result.is_completed else "Not Done"
    return f"{current:.1f} / {target:.1f} {unit}"
