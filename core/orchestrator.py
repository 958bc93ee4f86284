"""Top-level application wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import Any

from core.event_bus import EventBus
from core.policy_runtime import configure_logging, ensure_runtime_dirs, load_effective_config
from governance.audit_logger import AuditLogger
from tracker.calendar import resolve_timezone
from tracker.seed import sample_objectives
from tracker.store import DOCUMENT_NAME, OKRStore
from tracker.stores.factory import build_backend

logger = logging.getLogger("okr.orchestrator")


@dataclass
class RuntimeBundle:
    """Holds initialized runtime components."""

    config: dict[str, Any]
    paths: dict[str, Path]
    store: OKRStore
    event_bus: EventBus
    tz: tzinfo

    def close(self) -> None:
        self.store.close()


class Orchestrator:
    """Creates and wires runtime components for CLI use."""

    def __init__(self, root: Path | None = None) -> None:
        default_root = Path(__file__).resolve().parents[1]
        self.root = (root or default_root).resolve()

    def build(self) -> RuntimeBundle:
        config = load_effective_config(self.root)
        configure_logging(config)
        paths = ensure_runtime_dirs(self.root, config)
        tz = resolve_timezone(config.get("calendar", {}).get("timezone"))
        event_bus = EventBus()

        store = OKRStore(
            build_backend(config, paths),
            document_name=str(config.get("persistence", {}).get("document", DOCUMENT_NAME)),
            audit_logger=AuditLogger(paths["audit_log_path"]),
            event_bus=event_bus,
            seed=sample_objectives if config.get("seed", {}).get("enabled", True) else None,
            tz=tz,
        )
        store.open()
        logger.debug("Opened store with %d objectives", len(store.objectives))

        return RuntimeBundle(config=config, paths=paths, store=store, event_bus=event_bus, tz=tz)
