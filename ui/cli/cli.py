"""CLI entrypoint for the OKR tracker."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import typer

from tracker.types import KeyResultType, TaskRecurrence
from ui.cli import commands

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"]

app = typer.Typer(help="Personal OKR tracker")
objectives_app = typer.Typer(help="Objective commands")
kr_app = typer.Typer(help="Key result commands")
tasks_app = typer.Typer(help="Daily task commands")
dashboard_app = typer.Typer(help="Dashboard commands")
config_app = typer.Typer(help="Configuration commands")


@objectives_app.command("list")
def objectives_list_cmd(
    archived: bool = typer.Option(False, "--archived", help="Show archived objectives instead"),
) -> None:
    """List objectives with progress and health."""
    commands.objectives_list(archived=archived)


@objectives_app.command("show")
def objectives_show_cmd(objective_id: str) -> None:
    """Show one objective in detail."""
    commands.objectives_show(objective_id=objective_id)


@objectives_app.command("add")
def objectives_add_cmd(
    title: str = typer.Argument(..., help="Objective title"),
    due: datetime = typer.Option(..., "--due", formats=DATE_FORMATS, help="Due date"),
    description: str = typer.Option("", help="Free-text description"),
    icon: str = typer.Option("target", help="Icon name"),
) -> None:
    """Add a new objective starting now."""
    commands.objectives_add(title=title, due=due, description=description, icon=icon)


@objectives_app.command("delete")
def objectives_delete_cmd(objective_id: str) -> None:
    """Delete an objective with everything it owns."""
    commands.objectives_delete(objective_id=objective_id)


@objectives_app.command("edit")
def objectives_edit_cmd(
    objective_id: str,
    title: Optional[str] = typer.Option(None),
    description: Optional[str] = typer.Option(None),
    icon: Optional[str] = typer.Option(None),
    start: Optional[datetime] = typer.Option(None, formats=DATE_FORMATS),
    due: Optional[datetime] = typer.Option(None, formats=DATE_FORMATS),
    completed: Optional[bool] = typer.Option(None, "--completed/--not-completed"),
) -> None:
    """Edit objective fields."""
    commands.objectives_edit(
        objective_id,
        title=title,
        description=description,
        icon=icon,
        start_date=start,
        due_date=due,
        is_completed=completed,
    )


@objectives_app.command("archive")
def objectives_archive_cmd(
    objective_id: str,
    undo: bool = typer.Option(False, "--undo", help="Move back to active"),
) -> None:
    """Archive (or unarchive) an objective manually."""
    commands.objectives_edit(objective_id, is_archived=not undo)


@kr_app.command("add")
def kr_add_cmd(
    objective_id: str,
    title: str,
    kind: KeyResultType = typer.Option(KeyResultType.NUMBER, "--type"),
    target: Optional[float] = typer.Option(None, help="Target value (type default when omitted)"),
    unit: Optional[str] = typer.Option(None),
    weight: float = typer.Option(100.0, min=0),
) -> None:
    """Add a key result to an objective."""
    commands.key_result_add(objective_id, title, kind, target, unit, weight)


@kr_app.command("update")
def kr_update_cmd(
    objective_id: str,
    key_result_id: str,
    value: float,
    message: Optional[str] = typer.Option(None, "--message", "-m"),
) -> None:
    """Set a key result's current value."""
    commands.key_result_update(objective_id, key_result_id, value, message)


@tasks_app.command("add")
def tasks_add_cmd(
    objective_id: str,
    key_result_id: str,
    title: str,
    on: Optional[datetime] = typer.Option(None, "--date", formats=DATE_FORMATS),
    recurrence: TaskRecurrence = typer.Option(TaskRecurrence.NONE, "--repeat"),
    weight: float = typer.Option(0.0, min=0, help="Value added to the key result on completion"),
) -> None:
    """Plan a task under a key result."""
    commands.tasks_add(objective_id, key_result_id, title, on, recurrence, weight)


@tasks_app.command("today")
def tasks_today_cmd(
    on: Optional[datetime] = typer.Option(None, "--date", formats=DATE_FORMATS),
) -> None:
    """Show the agenda for a day."""
    commands.tasks_today(on=on)


@tasks_app.command("toggle")
def tasks_toggle_cmd(
    objective_id: str,
    key_result_id: str,
    task_id: str,
    on: Optional[datetime] = typer.Option(None, "--date", formats=DATE_FORMATS),
) -> None:
    """Mark a task occurrence done, or undo it."""
    commands.tasks_toggle(objective_id, key_result_id, task_id, on)


@dashboard_app.command("summary")
def dashboard_summary_cmd() -> None:
    """Show active counts and the overall progress curve."""
    commands.dashboard_summary()


@dashboard_app.command("heatmap")
def dashboard_heatmap_cmd(
    objective_id: Optional[str] = typer.Option(None, "--objective"),
    days: Optional[int] = typer.Option(None, min=1, max=366),
) -> None:
    """Render the daily activity heatmap."""
    commands.dashboard_heatmap(objective_id=objective_id, days=days)


@config_app.command("show")
def config_show_cmd() -> None:
    """Show effective configuration."""
    commands.config_show()


app.add_typer(objectives_app, name="objectives")
app.add_typer(kr_app, name="kr")
app.add_typer(tasks_app, name="tasks")
app.add_typer(dashboard_app, name="dashboard")
app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
