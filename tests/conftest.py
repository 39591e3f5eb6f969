"""
Shared fixtures: an in-memory SQLite record store per test
"""

import pytest
import pytest_asyncio

from eventbook.services.record_service import BookingService, EventService
from eventbook.services.repositories import SqlRecordStore

SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def event_payload():
    """Raw event fields as a caller would submit them"""
    return {
        "title": "  PyCon Berlin 2024  ",
        "description": "Three days of talks",
        "overview": "Community conference",
        "image": "https://example.com/pycon.png",
        "venue": "BCC",
        "location": "Berlin, Germany",
        "date": "2024-04-22",
        "time": "09:30:00",
        "mode": "offline",
        "audience": "Developers",
        "agenda": ["  Registration ", "Keynote"],
        "organizer": "PySV",
        "tags": ["Python", " Community "],
    }


@pytest_asyncio.fixture
async def store():
    """Create test record store"""
    record_store = await SqlRecordStore.connect(SQLALCHEMY_DATABASE_URL)
    try:
        yield record_store
    finally:
        await record_store.close()


@pytest.fixture
def event_service(store):
    return EventService(store)


@pytest.fixture
def booking_service(store):
    return BookingService(store)


@pytest_asyncio.fixture
async def stored_event(event_service, event_payload):
    return await event_service.create_event(event_payload)
