"""Shared base for records embedded in the persisted document."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid.uuid4().hex


class DocumentModel(BaseModel):
    """Stored under camelCase keys, populated by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
