"""Immutable event payloads published on the event channel."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


def now_iso() -> str:
    """Current UTC time as standard ISO 8601."""
    return datetime.now(UTC).isoformat()


class Event(BaseModel):
    """Base event. Subclasses add their payload fields."""

    model_config = {"frozen": True}

    occurred_at: str = Field(default_factory=now_iso)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def payload(self) -> dict[str, Any]:
        """Event fields without the timestamp, for log lines."""
        return self.model_dump(exclude={"occurred_at"})


class NameEntered(Event):
    """The user answered the name prompt."""

    name: str
