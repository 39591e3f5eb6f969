"""
Record store layer abstracting storage (SQLAlchemy vs Firebase Firestore).

Stores return pydantic records and report failures as domain errors: a
slug collision is a DuplicateSlugError, a driver or connectivity failure is
a StoreUnavailableError chained to the original exception.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from google.api_core.exceptions import AlreadyExists, GoogleAPIError, NotFound
from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from eventbook.core.config import settings
from eventbook.core.db import create_engine, create_session_factory, init_models
from eventbook.core.errors import (
    BookingNotFoundError,
    DuplicateSlugError,
    EventNotFoundError,
    StoreUnavailableError,
)
from eventbook.models import Booking, Event
from eventbook.models.event import new_id, utcnow
from eventbook.schemas.booking import BookingFields, BookingRecord
from eventbook.schemas.event import EventFields, EventRecord
from eventbook.services.firebase_client import get_firestore_client

logger = logging.getLogger(__name__)


def use_firestore() -> bool:
    return settings.USE_FIREBASE is True


class RecordStore(ABC):
    """Interface for event and booking persistence."""

    @abstractmethod
    async def find_event(self, key: str) -> Optional[EventRecord]:
        """Return an event by id or slug, or None if not found."""
        ...

    @abstractmethod
    async def event_exists(self, event_id: str) -> bool:
        """Check if an event exists without loading the document."""
        ...

    @abstractmethod
    async def persist_event(self, fields: EventFields, previous: Optional[EventRecord] = None) -> EventRecord:
        """Insert a new event, or overwrite `previous` with `fields`.

        Raises:
            DuplicateSlugError: Another event already holds the slug.
            EventNotFoundError: `previous` no longer exists.
        """
        ...

    @abstractmethod
    async def list_events(self) -> List[EventRecord]:
        """Return all events ordered by created_at descending."""
        ...

    @abstractmethod
    async def delete_event(self, event_id: str) -> bool:
        """Delete an event. Bookings referencing it are left untouched."""
        ...

    @abstractmethod
    async def get_booking(self, booking_id: str) -> Optional[BookingRecord]:
        """Return a booking by id, or None if not found."""
        ...

    @abstractmethod
    async def persist_booking(self, fields: BookingFields, previous: Optional[BookingRecord] = None) -> BookingRecord:
        """Insert a new booking, or overwrite `previous` with `fields`."""
        ...

    @abstractmethod
    async def list_bookings_for_event(self, event_id: str) -> List[BookingRecord]:
        """Return bookings for an event, oldest first."""
        ...


# -------- SQLAlchemy store --------

@contextmanager
def _sql_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Record store %s failed: %s", operation, exc)
        raise StoreUnavailableError(operation) from exc


class SqlRecordStore(RecordStore):
    """Relational store using the SQLAlchemy asyncio extension."""

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        self._session_factory = create_session_factory(engine)

    @classmethod
    async def connect(cls, database_url: Optional[str] = None) -> "SqlRecordStore":
        engine = create_engine(database_url)
        with _sql_errors("connect"):
            await init_models(engine)
        return cls(engine)

    async def close(self) -> None:
        await self._engine.dispose()

    async def find_event(self, key: str) -> Optional[EventRecord]:
        with _sql_errors("find_event"):
            async with self._session_factory() as session:
                row = await session.scalar(
                    select(Event).where(or_(Event.id == key, Event.slug == key)).limit(1)
                )
        return EventRecord.model_validate(row) if row else None

    async def event_exists(self, event_id: str) -> bool:
        with _sql_errors("event_exists"):
            async with self._session_factory() as session:
                found = await session.scalar(select(Event.id).where(Event.id == event_id).limit(1))
        return found is not None

    async def persist_event(self, fields: EventFields, previous: Optional[EventRecord] = None) -> EventRecord:
        now = utcnow()
        with _sql_errors("persist_event"):
            async with self._session_factory() as session:
                if previous is None:
                    row = Event(id=new_id(), created_at=now, updated_at=now, **fields.model_dump())
                    session.add(row)
                else:
                    row = await session.get(Event, previous.id)
                    if row is None:
                        raise EventNotFoundError(previous.id)
                    for key, value in fields.model_dump().items():
                        setattr(row, key, value)
                    row.updated_at = now
                try:
                    await session.commit()
                except IntegrityError as exc:
                    raise DuplicateSlugError(fields.slug) from exc
                return EventRecord.model_validate(row)

    async def list_events(self) -> List[EventRecord]:
        with _sql_errors("list_events"):
            async with self._session_factory() as session:
                rows = (await session.scalars(select(Event).order_by(Event.created_at.desc()))).all()
        return [EventRecord.model_validate(row) for row in rows]

    async def delete_event(self, event_id: str) -> bool:
        with _sql_errors("delete_event"):
            async with self._session_factory() as session:
                result = await session.execute(delete(Event).where(Event.id == event_id))
                await session.commit()
        return result.rowcount == 1

    async def get_booking(self, booking_id: str) -> Optional[BookingRecord]:
        with _sql_errors("get_booking"):
            async with self._session_factory() as session:
                row = await session.get(Booking, booking_id)
        return BookingRecord.model_validate(row) if row else None

    async def persist_booking(self, fields: BookingFields, previous: Optional[BookingRecord] = None) -> BookingRecord:
        now = utcnow()
        with _sql_errors("persist_booking"):
            async with self._session_factory() as session:
                if previous is None:
                    row = Booking(id=new_id(), created_at=now, updated_at=now, **fields.model_dump())
                    session.add(row)
                else:
                    row = await session.get(Booking, previous.id)
                    if row is None:
                        raise BookingNotFoundError(previous.id)
                    row.event_id = fields.event_id
                    row.email = fields.email
                    row.updated_at = now
                await session.commit()
                return BookingRecord.model_validate(row)

    async def list_bookings_for_event(self, event_id: str) -> List[BookingRecord]:
        with _sql_errors("list_bookings_for_event"):
            async with self._session_factory() as session:
                rows = (await session.scalars(
                    select(Booking).where(Booking.event_id == event_id).order_by(Booking.created_at)
                )).all()
        return [BookingRecord.model_validate(row) for row in rows]


# -------- Firestore store --------

@contextmanager
def _firestore_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except GoogleAPIError as exc:
        logger.error("Record store %s failed: %s", operation, exc)
        raise StoreUnavailableError(operation) from exc


class FirestoreRecordStore(RecordStore):
    """Document store on Firestore.

    Shape:
        events/{id}          event fields plus timestamps
        event_slugs/{slug}   {"event_id": id}; created in the same batch as
                             the event so a taken slug fails the whole write
        bookings/{id}        booking fields plus timestamps
    """

    def __init__(self, client=None):
        self._client = client or get_firestore_client()
        self._events = self._client.collection("events")
        self._slugs = self._client.collection("event_slugs")
        self._bookings = self._client.collection("bookings")

    @staticmethod
    def _event_from_doc(doc) -> EventRecord:
        data: Dict[str, Any] = doc.to_dict()
        data["id"] = doc.id
        return EventRecord.model_validate(data)

    @staticmethod
    def _booking_from_doc(doc) -> BookingRecord:
        data: Dict[str, Any] = doc.to_dict()
        data["id"] = doc.id
        return BookingRecord.model_validate(data)

    async def find_event(self, key: str) -> Optional[EventRecord]:
        with _firestore_errors("find_event"):
            doc = await self._events.document(key).get()
            if not doc.exists:
                claim = await self._slugs.document(key).get()
                if not claim.exists:
                    return None
                doc = await self._events.document(claim.to_dict()["event_id"]).get()
                if not doc.exists:
                    return None
        return self._event_from_doc(doc)

    async def event_exists(self, event_id: str) -> bool:
        with _firestore_errors("event_exists"):
            doc = await self._events.document(event_id).get(field_paths=[])
        return doc.exists

    async def persist_event(self, fields: EventFields, previous: Optional[EventRecord] = None) -> EventRecord:
        now = utcnow()
        event_id = previous.id if previous else new_id()
        created_at = previous.created_at if previous else now
        data = fields.model_dump()
        data["updated_at"] = now

        event_ref = self._events.document(event_id)
        batch = self._client.batch()
        if previous is None or fields.slug != previous.slug:
            batch.create(self._slugs.document(fields.slug), {"event_id": event_id})
            if previous is not None:
                batch.delete(self._slugs.document(previous.slug))
        if previous is None:
            batch.create(event_ref, {**data, "created_at": created_at})
        else:
            batch.update(event_ref, data)

        with _firestore_errors("persist_event"):
            try:
                await batch.commit()
            except AlreadyExists as exc:
                raise DuplicateSlugError(fields.slug) from exc
            except NotFound as exc:
                raise EventNotFoundError(event_id) from exc

        return EventRecord(id=event_id, created_at=created_at, **data)

    async def list_events(self) -> List[EventRecord]:
        query = self._events.order_by("created_at", direction="DESCENDING")
        with _firestore_errors("list_events"):
            return [self._event_from_doc(doc) async for doc in query.stream()]

    async def delete_event(self, event_id: str) -> bool:
        with _firestore_errors("delete_event"):
            doc = await self._events.document(event_id).get()
            if not doc.exists:
                return False
            batch = self._client.batch()
            batch.delete(self._events.document(event_id))
            batch.delete(self._slugs.document(doc.to_dict()["slug"]))
            await batch.commit()
        return True

    async def get_booking(self, booking_id: str) -> Optional[BookingRecord]:
        with _firestore_errors("get_booking"):
            doc = await self._bookings.document(booking_id).get()
        return self._booking_from_doc(doc) if doc.exists else None

    async def persist_booking(self, fields: BookingFields, previous: Optional[BookingRecord] = None) -> BookingRecord:
        now = utcnow()
        booking_id = previous.id if previous else new_id()
        created_at = previous.created_at if previous else now
        data = {**fields.model_dump(), "updated_at": now}

        with _firestore_errors("persist_booking"):
            ref = self._bookings.document(booking_id)
            try:
                if previous is None:
                    await ref.create({**data, "created_at": created_at})
                else:
                    await ref.update(data)
            except NotFound as exc:
                raise BookingNotFoundError(booking_id) from exc

        return BookingRecord(id=booking_id, created_at=created_at, **data)

    async def list_bookings_for_event(self, event_id: str) -> List[BookingRecord]:
        query = self._bookings.where("event_id", "==", event_id).order_by("created_at")
        with _firestore_errors("list_bookings_for_event"):
            return [self._booking_from_doc(doc) async for doc in query.stream()]


async def get_record_store() -> RecordStore:
    """Build the configured record store"""
    if use_firestore():
        return FirestoreRecordStore(get_firestore_client())
    return await SqlRecordStore.connect(settings.DATABASE_URL)
