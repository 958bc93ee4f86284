"""SQLAlchemy schemas for the persisted document table."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from tracker.calendar import utc_now


class Base(DeclarativeBase):
    """Declarative base."""


class DocumentRecord(Base):
    """Whole-document storage keyed by document name."""

    __tablename__ = "documents"

    name: Mapped[str] = mapped_column(String(128), primary_key=True)
    body: Mapped[str] = mapped_column(Text, default="")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )
