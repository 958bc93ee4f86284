"""Configuration loading and runtime directory bootstrapping."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "paths": {
        "data_dir": "data",
        "db_path": "data/okr.db",
        "audit_log_path": "logs/audit.jsonl",
    },
    "persistence": {"backend": "sqlite", "document": "okrs.json"},
    "calendar": {"timezone": "UTC"},
    "heatmap": {"days": 140, "week_start": None},
    "seed": {"enabled": True},
    "logging": {"level": "INFO"},
}


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def ensure_runtime_dirs(root: Path, config: dict[str, Any]) -> dict[str, Path]:
    """Ensure data and log directories exist and return resolved paths."""
    paths_cfg = config.get("paths", {})
    data_dir = (root / paths_cfg.get("data_dir", "data")).resolve()
    db_path = (root / paths_cfg.get("db_path", "data/okr.db")).resolve()
    audit_log_path = (root / paths_cfg.get("audit_log_path", "logs/audit.jsonl")).resolve()

    data_dir.mkdir(parents=True, exist_ok=True)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    audit_log_path.parent.mkdir(parents=True, exist_ok=True)

    return {
        "data_dir": data_dir,
        "db_path": db_path,
        "audit_log_path": audit_log_path,
    }


def load_effective_config(root: Path) -> dict[str, Any]:
    """Built-in defaults, overlaid by ``config/default.yaml`` then ``config/local.yaml``."""
    config_dir = root / "config"
    merged = merge_dicts(DEFAULT_CONFIG, load_yaml(config_dir / "default.yaml"))
    return merge_dicts(merged, load_yaml(config_dir / "local.yaml"))


def configure_logging(config: dict[str, Any]) -> None:
    """Apply the configured root log level."""
    level = str(config.get("logging", {}).get("level", "INFO")).upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
