"""In-process document store."""

from __future__ import annotations


class InMemoryStore:
    """Dictionary-backed document store for tests and throwaway sessions."""

    def __init__(self, documents: dict[str, str] | None = None) -> None:
        self.documents: dict[str, str] = dict(documents or {})
        self.writes = 0

    def read(self, name: str) -> str | None:
        return self.documents.get(name)

    def write(self, name: str, body: str) -> None:
        self.documents[name] = body
        self.writes += 1

    def close(self) -> None:
        return None
