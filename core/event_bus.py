"""In-process event bus for store notifications."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

logger = logging.getLogger("okr.events")

EventHandler = Callable[[dict[str, Any]], None]

ANY_EVENT = "*"


class EventBus:
    """Dispatches events to subscribers by event name.

    Handlers registered under ``"*"`` receive every event, with the event
    name added to the payload as ``"event"``.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        """Register a callback for an event."""
        self._handlers[event_name].append(handler)

    def unsubscribe(self, event_name: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_name, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event_name: str, payload: dict[str, Any]) -> None:
        """Emit an event to its subscribers, then to wildcard subscribers."""
        logger.debug("event %s %s", event_name, payload)
        for handler in list(self._handlers.get(event_name, [])):
            handler(payload)
        for handler in list(self._handlers.get(ANY_EVENT, [])):
            handler({**payload, "event": event_name})
