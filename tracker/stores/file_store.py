"""Plain JSON file document store."""

from __future__ import annotations

import os
from pathlib import Path


class JSONFileStore:
    """Stores each document as ``<root>/<name>``."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def read(self, name: str) -> str | None:
        path = self.root / name
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, name: str, body: str) -> None:
        path = self.root / name
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_text(body, encoding="utf-8")
        os.replace(tmp, path)

    def close(self) -> None:
        return None
