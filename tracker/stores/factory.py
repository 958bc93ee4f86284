"""Persistence backend factory."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from tracker.stores.base import DocumentBackend
from tracker.stores.file_store import JSONFileStore
from tracker.stores.memory_store import InMemoryStore
from tracker.stores.sql_store import SQLDocumentStore


def build_backend(config: dict[str, Any], paths: dict[str, Path]) -> DocumentBackend:
    """Build the configured backend, defaulting to SQLite."""
    kind = str(config.get("persistence", {}).get("backend", "sqlite")).lower()
    if kind == "json":
        return JSONFileStore(paths["data_dir"])
    if kind == "memory":
        return InMemoryStore()
    if kind != "sqlite":
        raise ValueError(f"Unknown persistence backend: {kind}")
    store = SQLDocumentStore(paths["db_path"])
    store.create_all()
    return store
