"""
Event-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, field_validator

from .common import assume_utc

class EventDraft(BaseModel):
    """Raw event fields as submitted by a caller"""
    title: Optional[str] = None
    description: Optional[str] = None
    overview: Optional[str] = None
    image: Optional[str] = None
    venue: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    mode: Optional[str] = None
    audience: Optional[str] = None
    agenda: Optional[List[str]] = None
    organizer: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator("agenda", "tags", mode="before")
    @classmethod
    def single_item_as_list(cls, value):
        # a lone string is a one-item list, as form posts send it
        return [value] if isinstance(value, str) else value

class EventFields(BaseModel):
    """Canonical event fields produced by validation"""
    title: str
    slug: str
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: str
    time: str
    mode: str
    audience: str
    agenda: List[str]
    organizer: str
    tags: List[str]

class EventRecord(EventFields):
    """Stored event"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def timestamps_in_utc(cls, value: datetime) -> datetime:
        return assume_utc(value)

    def to_draft(self) -> EventDraft:
        """Editable view of the stored fields, used as the base for updates"""
        return EventDraft(**self.model_dump(include=set(EventDraft.model_fields)))
