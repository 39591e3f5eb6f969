"""
Tests for booking validation
"""

from datetime import datetime, timezone

import pytest

from eventbook.core.errors import DanglingReferenceError, InvalidFormatError, MissingFieldError
from eventbook.schemas.booking import BookingDraft, BookingRecord
from eventbook.services.booking_validator import is_valid_email, validate_booking


class ExistenceRecorder:
    """Minimal store stand-in recording every existence lookup"""

    def __init__(self, *event_ids):
        self.event_ids = set(event_ids)
        self.lookups = []

    async def event_exists(self, event_id):
        self.lookups.append(event_id)
        return event_id in self.event_ids


def booking(**overrides) -> BookingRecord:
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    data = {"id": "b1", "event_id": "evt1", "email": "user@example.com", "created_at": now, "updated_at": now}
    data.update(overrides)
    return BookingRecord(**data)


@pytest.mark.parametrize("email, expected", [
    ("user@example.com", True),
    ("first.last@mail.example.org", True),
    ("user@example", False),
    ("user example@mail.com", False),
    ("user@@example.com", False),
    ("@example.com", False),
])
def test_email_shape(email, expected):
    assert is_valid_email(email) is expected


@pytest.mark.asyncio
async def test_normalizes_email_and_checks_reference():
    recorder = ExistenceRecorder("evt1")

    fields = await validate_booking(BookingDraft(event_id="evt1", email="  USER@Example.COM  "), recorder)

    assert fields.email == "user@example.com"
    assert fields.event_id == "evt1"
    assert recorder.lookups == ["evt1"]


@pytest.mark.asyncio
async def test_unknown_event_is_dangling():
    recorder = ExistenceRecorder()

    with pytest.raises(DanglingReferenceError) as exc_info:
        await validate_booking(BookingDraft(event_id="missing", email="a@b.co"), recorder)
    assert exc_info.value.event_id == "missing"
    assert exc_info.value.field == "event_id"


@pytest.mark.asyncio
async def test_blank_email_is_missing_and_skips_lookup():
    recorder = ExistenceRecorder("evt1")

    with pytest.raises(MissingFieldError) as exc_info:
        await validate_booking(BookingDraft(event_id="evt1", email="   "), recorder)
    assert exc_info.value.field == "email"
    assert recorder.lookups == []


@pytest.mark.asyncio
async def test_malformed_email_is_rejected_before_lookup():
    recorder = ExistenceRecorder("evt1")

    with pytest.raises(InvalidFormatError):
        await validate_booking(BookingDraft(event_id="evt1", email="not-an-email"), recorder)
    assert recorder.lookups == []


@pytest.mark.asyncio
async def test_blank_event_id_is_missing():
    with pytest.raises(MissingFieldError) as exc_info:
        await validate_booking(BookingDraft(event_id=" ", email="a@b.co"), ExistenceRecorder())
    assert exc_info.value.field == "event_id"


@pytest.mark.asyncio
async def test_unchanged_reference_is_not_looked_up_again():
    recorder = ExistenceRecorder()  # the referenced event has gone away

    fields = await validate_booking(
        BookingDraft(event_id="evt1", email="new@example.com"), recorder, previous=booking()
    )

    assert fields.email == "new@example.com"
    assert recorder.lookups == []


@pytest.mark.asyncio
async def test_changed_reference_is_looked_up():
    recorder = ExistenceRecorder("evt2")

    fields = await validate_booking(
        BookingDraft(event_id="evt2", email="user@example.com"), recorder, previous=booking()
    )

    assert fields.event_id == "evt2"
    assert recorder.lookups == ["evt2"]
