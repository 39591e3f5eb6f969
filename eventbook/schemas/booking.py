"""
Booking-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator

from .common import assume_utc

class BookingDraft(BaseModel):
    """Raw booking fields as submitted by a caller"""
    event_id: Optional[str] = None
    email: Optional[str] = None

class BookingFields(BaseModel):
    """Canonical booking fields produced by validation"""
    event_id: str
    email: str

class BookingRecord(BookingFields):
    """Stored booking"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def timestamps_in_utc(cls, value: datetime) -> datetime:
        return assume_utc(value)

    def to_draft(self) -> BookingDraft:
        return BookingDraft(event_id=self.event_id, email=self.email)
