"""
# Event Models

Events are append-only records owned by a user. The time range invariant
(`end_at` not earlier than `start_at`) is checked twice: on the create request, so the
API answers before touching storage, and on the stored record itself.
"""

from datetime import datetime, timezone
from typing import Optional
import uuid

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator

EVENT_STATUS_OPEN = "OPEN"


class _TimeRange(BaseModel):
    @model_validator(mode="after")
    def end_not_before_start(self):
        if self.end_at < self.start_at:
            raise ValueError("end_at must be after start_at")
        return self


class EventCreate(_TimeRange):
    """Event creation payload. Timestamps are RFC 3339, offset required."""

    model_config = ConfigDict(str_strip_whitespace=True)

    event_owner: uuid.UUID
    title: str = Field(..., min_length=1)
    start_at: AwareDatetime
    end_at: AwareDatetime
    location: Optional[str] = None
    status: Optional[str] = None


class Event(_TimeRange):
    """An event as stored in the `events` collection."""

    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    event_owner: str
    title: str
    start_at: datetime
    end_at: datetime
    location: Optional[str] = None
    status: str = EVENT_STATUS_OPEN
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
