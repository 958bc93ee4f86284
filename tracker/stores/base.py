"""Persistence backend protocol."""

from __future__ import annotations

from typing import Protocol


class DocumentBackend(Protocol):
    """Reads and writes one named text document."""

    def read(self, name: str) -> str | None:
        """Return the stored body, or None when nothing was saved yet."""
        ...

    def write(self, name: str, body: str) -> None:
        ...

    def close(self) -> None:
        ...
