"""Typer command handlers."""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any

import typer

from core.orchestrator import Orchestrator, RuntimeBundle
from tracker.agenda import agenda_for
from tracker.calendar import day_of, utc_now
from tracker.dashboard import active_count, overall_progress_points
from tracker.intensity import heatmap
from tracker.presets import format_value, new_key_result
from tracker.types import KeyResultType, Objective, Task, TaskRecurrence

LEVEL_GLYPHS = " .:*#"


def _runtime(root: Path | None = None) -> RuntimeBundle:
    return Orchestrator(root=root).build()


def _today(bundle: RuntimeBundle, on: datetime | None) -> date:
    return on.date() if on is not None else day_of(utc_now(), bundle.tz)


def _summary(objective: Objective) -> dict[str, Any]:
    return {
        "id": objective.id,
        "title": objective.title,
        "progress": round(objective.progress, 4),
        "time_progress": round(objective.time_progress(), 4),
        "health": objective.health().value,
        "due_date": objective.due_date,
        "archived": objective.is_archived,
    }


def objectives_list(archived: bool = False) -> None:
    """List active (or archived) objectives."""
    bundle = _runtime()
    items = bundle.store.archived() if archived else bundle.store.active()
    typer.echo(json.dumps(_json_safe([_summary(o) for o in items]), indent=2))


def objectives_show(objective_id: str) -> None:
    """Show one objective with key results and progress history."""
    bundle = _runtime()
    objective = bundle.store.get(objective_id)
    if objective is None:
        typer.echo(f"Objective not found: {objective_id}")
        raise typer.Exit(code=1)
    data = _summary(objective)
    data["description"] = objective.description
    data["key_results"] = [
        {
            "id": kr.id,
            "title": kr.title,
            "type": kr.type.value,
            "value": format_value(kr),
            "progress": round(kr.progress, 4),
            "weight": kr.weight,
            "tasks": [{"id": t.id, "title": t.title, "recurrence": t.recurrence.value} for t in kr.tasks],
            "logs": [log.model_dump() for log in kr.logs],
        }
        for kr in objective.key_results
    ]
    data["history"] = [{"date": p.date, "value": round(p.value, 4)} for p in objective.progress_history()]
    typer.echo(json.dumps(_json_safe(data), indent=2))


def objectives_add(title: str, due: datetime, description: str, icon: str) -> None:
    """Create an objective starting now."""
    bundle = _runtime()
    objective = bundle.store.add(Objective(title=title, description=description, icon=icon, due_date=due))
    typer.echo(f"Added objective {objective.id}: {title}")


def objectives_delete(objective_id: str) -> None:
    bundle = _runtime()
    if bundle.store.delete(objective_id):
        typer.echo(f"Deleted objective {objective_id}")
    else:
        typer.echo(f"Objective not found: {objective_id}")


def objectives_edit(objective_id: str, **fields: Any) -> None:
    """Apply direct field edits."""
    bundle = _runtime()
    objective = bundle.store.edit_objective(objective_id, **fields)
    if objective is None:
        typer.echo(f"Objective not found: {objective_id}")
        return
    typer.echo(json.dumps(_json_safe(_summary(objective)), indent=2))


def key_result_add(
    objective_id: str,
    title: str,
    kind: KeyResultType,
    target: float | None,
    unit: str | None,
    weight: float,
) -> None:
    bundle = _runtime()
    key_result = new_key_result(title, kind, target_value=target, unit=unit, weight=weight)
    if bundle.store.add_key_result(objective_id, key_result) is None:
        typer.echo(f"Objective not found: {objective_id}")
        return
    typer.echo(f"Added key result {key_result.id}: {title}")


def key_result_update(objective_id: str, key_result_id: str, value: float, message: str | None) -> None:
    bundle = _runtime()
    key_result = bundle.store.update_key_result_value(objective_id, key_result_id, value, message)
    if key_result is None:
        typer.echo("Key result not found")
        return
    typer.echo(f"{key_result.title}: {format_value(key_result)}")


def tasks_add(
    objective_id: str,
    key_result_id: str,
    title: str,
    on: datetime | None,
    recurrence: TaskRecurrence,
    weight: float,
) -> None:
    bundle = _runtime()
    task = Task(title=title, date=on or utc_now(), recurrence=recurrence, weight=weight)
    if bundle.store.add_task(objective_id, key_result_id, task) is None:
        typer.echo("Key result not found")
        return
    typer.echo(f"Added task {task.id}: {title}")


def tasks_today(on: datetime | None) -> None:
    """Show task occurrences for a day, pending first."""
    bundle = _runtime()
    day = _today(bundle, on)
    items = agenda_for(bundle.store.objectives, day, tz=bundle.tz)
    if not items:
        typer.echo(f"No tasks on {day.isoformat()}")
        return
    for item in items:
        mark = "x" if item.is_completed else " "
        typer.echo(
            f"[{mark}] {item.task.title} ({item.objective_title} / {item.key_result_title}) "
            f"{item.objective_id} {item.key_result_id} {item.task.id}"
        )


def tasks_toggle(objective_id: str, key_result_id: str, task_id: str, on: datetime | None) -> None:
    bundle = _runtime()
    day = _today(bundle, on)
    result = bundle.store.toggle_task(objective_id, key_result_id, task_id, day)
    if result is None:
        typer.echo("Task not found")
        return
    state = "completed" if result.completed else "reopened"
    typer.echo(f"Task {state} on {day.isoformat()}: {result.previous_value:g} -> {result.new_value:g}")


def dashboard_summary() -> None:
    bundle = _runtime()
    objectives = bundle.store.objectives
    data = {
        "active": active_count(objectives),
        "archived": len(bundle.store.archived()),
        "overall": [
            {"date": p.date, "value": round(p.value, 4)} for p in overall_progress_points(objectives, tz=bundle.tz)
        ],
    }
    typer.echo(json.dumps(_json_safe(data), indent=2))


def dashboard_heatmap(objective_id: str | None, days: int | None) -> None:
    """Render the activity heatmap as week columns of glyphs."""
    bundle = _runtime()
    heatmap_cfg = bundle.config.get("heatmap", {})
    week_start = heatmap_cfg.get("week_start")
    cells = heatmap(
        bundle.store.objectives,
        day_of(utc_now(), bundle.tz),
        days=days or int(heatmap_cfg.get("days", 140)),
        objective_id=objective_id,
        week_start=None if week_start is None else int(week_start),
        tz=bundle.tz,
    )
    columns = [cells[i : i + 7] for i in range(0, len(cells), 7)]
    for row in range(7):
        typer.echo("".join(LEVEL_GLYPHS[col[row].level] if row < len(col) else " " for col in columns))


def config_show() -> None:
    """Show effective runtime config."""
    bundle = _runtime()
    typer.echo(json.dumps(_json_safe(bundle.config), indent=2))


def _json_safe(payload: object) -> object:
    """Convert datetimes to strings for JSON output."""
    if isinstance(payload, dict):
        return {k: _json_safe(v) for k, v in payload.items()}
    if isinstance(payload, list):
        return [_json_safe(v) for v in payload]
    if isinstance(payload, (date, datetime)):
        return payload.isoformat()
    return payload
