"""
Validate-then-persist services for events and bookings.

Each write runs the validator to completion first and calls the record
store exactly once afterwards, so a rejected attempt never reaches storage.
Updates pass the stored record to the validator as `previous`; that diff
decides whether the slug is rebuilt and whether the event reference is
looked up again.
"""

import logging
from typing import Any, List, Mapping, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from eventbook.core.errors import BookingNotFoundError, DomainError, EventNotFoundError, InvalidFormatError
from eventbook.schemas.booking import BookingDraft, BookingRecord
from eventbook.schemas.event import EventDraft, EventRecord
from eventbook.services.booking_validator import validate_booking
from eventbook.services.event_validator import validate_event
from eventbook.services.repositories import RecordStore

logger = logging.getLogger(__name__)

DraftT = TypeVar("DraftT", bound=BaseModel)


def parse_draft(model: Type[DraftT], data: Union[DraftT, Mapping[str, Any]]) -> DraftT:
    """Build a draft from raw input, reporting badly typed fields as InvalidFormatError"""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else "input"
        raise InvalidFormatError(field, error["msg"]) from exc


class EventService:
    """Service for event writes and lookups"""

    def __init__(self, store: RecordStore):
        self.store = store

    async def create_event(self, data: Union[EventDraft, Mapping[str, Any]]) -> EventRecord:
        try:
            draft = parse_draft(EventDraft, data)
            fields = validate_event(draft)
            event = await self.store.persist_event(fields)
        except DomainError as exc:
            logger.warning("Event creation rejected: %s", exc)
            raise

        logger.info("Event created: %s (%s)", event.slug, event.id)
        return event

    async def update_event(self, event_id: str, changes: Mapping[str, Any]) -> EventRecord:
        previous = await self.store.find_event(event_id)
        if previous is None:
            raise EventNotFoundError(event_id)

        try:
            draft = parse_draft(EventDraft, {**previous.to_draft().model_dump(), **changes})
            fields = validate_event(draft, previous=previous)
            event = await self.store.persist_event(fields, previous=previous)
        except DomainError as exc:
            logger.warning("Event update rejected for %s: %s", event_id, exc)
            raise

        if event.slug != previous.slug:
            logger.info("Event %s slug changed: %s -> %s", event.id, previous.slug, event.slug)
        return event

    async def get_event(self, key: str) -> EventRecord:
        """Return an event by id or slug"""
        event = await self.store.find_event(key)
        if event is None:
            raise EventNotFoundError(key)
        return event

    async def list_events(self) -> List[EventRecord]:
        """Return all events, newest first"""
        return await self.store.list_events()


class BookingService:
    """Service for booking writes and lookups"""

    def __init__(self, store: RecordStore):
        self.store = store

    async def create_booking(self, data: Union[BookingDraft, Mapping[str, Any]]) -> BookingRecord:
        try:
            draft = parse_draft(BookingDraft, data)
            fields = await validate_booking(draft, self.store)
            booking = await self.store.persist_booking(fields)
        except DomainError as exc:
            logger.warning("Booking creation rejected: %s", exc)
            raise

        logger.info("Booking %s created for event %s", booking.id, booking.event_id)
        return booking

    async def update_booking(self, booking_id: str, changes: Mapping[str, Any]) -> BookingRecord:
        previous = await self.store.get_booking(booking_id)
        if previous is None:
            raise BookingNotFoundError(booking_id)

        try:
            draft = parse_draft(BookingDraft, {**previous.to_draft().model_dump(), **changes})
            fields = await validate_booking(draft, self.store, previous=previous)
            booking = await self.store.persist_booking(fields, previous=previous)
        except DomainError as exc:
            logger.warning("Booking update rejected for %s: %s", booking_id, exc)
            raise

        return booking

    async def get_booking(self, booking_id: str) -> BookingRecord:
        booking = await self.store.get_booking(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    async def list_bookings_for_event(self, event_id: str) -> List[BookingRecord]:
        return await self.store.list_bookings_for_event(event_id)
