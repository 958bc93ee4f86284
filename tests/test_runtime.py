"""Configuration and runtime wiring tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from core.event_bus import EventBus
from core.orchestrator import Orchestrator
from core.policy_runtime import load_effective_config, merge_dicts
from tracker.stores.file_store import JSONFileStore
from tracker.stores.sql_store import SQLDocumentStore


def write_config(root: Path, name: str, text: str) -> None:
    config_dir = root / "config"
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / name).write_text(text, encoding="utf-8")


def test_defaults_apply_without_config_files(tmp_path: Path) -> None:
    config = load_effective_config(tmp_path)
    assert config["persistence"]["backend"] == "sqlite"
    assert config["heatmap"]["days"] == 140
    assert config["calendar"]["timezone"] == "UTC"


def test_local_config_overrides_default(tmp_path: Path) -> None:
    write_config(tmp_path, "default.yaml", "heatmap:\n  days: 180\npersistence:\n  backend: json\n")
    write_config(tmp_path, "local.yaml", "heatmap:\n  week_start: 6\n")

    config = load_effective_config(tmp_path)

    assert config["heatmap"] == {"days": 180, "week_start": 6}
    assert config["persistence"]["backend"] == "json"
    assert config["persistence"]["document"] == "okrs.json"


def test_non_mapping_config_is_rejected(tmp_path: Path) -> None:
    write_config(tmp_path, "default.yaml", "- just\n- a list\n")
    with pytest.raises(ValueError):
        load_effective_config(tmp_path)


def test_merge_dicts_is_recursive() -> None:
    merged = merge_dicts({"a": {"x": 1, "y": 2}, "b": 1}, {"a": {"y": 3}, "c": 4})
    assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}


def test_orchestrator_builds_sqlite_store_and_reloads(tmp_path: Path) -> None:
    bundle = Orchestrator(root=tmp_path).build()
    assert isinstance(bundle.store.backend, SQLDocumentStore)
    ids = [o.id for o in bundle.store.objectives]
    assert len(ids) == 3
    bundle.close()

    again = Orchestrator(root=tmp_path).build()
    assert [o.id for o in again.store.objectives] == ids
    again.close()

    audit = (tmp_path / "logs" / "audit.jsonl").read_text(encoding="utf-8").splitlines()
    assert json.loads(audit[0])["action"] == "seed"


def test_orchestrator_honours_json_backend_and_disabled_seed(tmp_path: Path) -> None:
    write_config(tmp_path, "local.yaml", "persistence:\n  backend: json\nseed:\n  enabled: false\n")

    bundle = Orchestrator(root=tmp_path).build()

    assert isinstance(bundle.store.backend, JSONFileStore)
    assert bundle.store.objectives == []


def test_unknown_backend_fails_fast(tmp_path: Path) -> None:
    write_config(tmp_path, "local.yaml", "persistence:\n  backend: mongo\n")
    with pytest.raises(ValueError):
        Orchestrator(root=tmp_path).build()


def test_event_bus_wildcard_and_unsubscribe() -> None:
    bus = EventBus()
    seen: list[dict] = []
    named: list[dict] = []
    bus.subscribe("*", seen.append)
    bus.subscribe("store.changed", named.append)

    bus.emit("store.changed", {"action": "objective.add"})
    bus.unsubscribe("store.changed", named.append)
    bus.emit("store.changed", {"action": "objective.delete"})

    assert named == [{"action": "objective.add"}]
    assert [event["event"] for event in seen] == ["store.changed", "store.changed"]
