"""
Pydantic schemas package
"""

from .common import ErrorResponse
from .event import EventDraft, EventFields, EventRecord
from .booking import BookingDraft, BookingFields, BookingRecord

__all__ = [
    "ErrorResponse",
    "EventDraft",
    "EventFields",
    "EventRecord",
    "BookingDraft",
    "BookingFields",
    "BookingRecord",
]
