"""
Booking validation: email shape plus an existence check on the referenced event
"""

import re
from typing import Optional

from eventbook.core.errors import DanglingReferenceError, InvalidFormatError, MissingFieldError
from eventbook.schemas.booking import BookingDraft, BookingFields, BookingRecord
from eventbook.services.repositories import RecordStore

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+", re.IGNORECASE)


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email.strip()) is not None


async def validate_booking(
    draft: BookingDraft,
    store: RecordStore,
    previous: Optional[BookingRecord] = None,
) -> BookingFields:
    """Validate and normalize a booking draft.

    The event reference is looked up only when the booking is new or its
    event_id differs from the stored one; a reference that was valid when
    it was written is trusted afterwards.

    Raises:
        MissingFieldError: email or event_id is blank.
        InvalidFormatError: email is not shaped like local@domain.tld.
        DanglingReferenceError: event_id does not match a stored event.
        StoreUnavailableError: the existence lookup itself failed.
    """
    email = (draft.email or "").strip().lower()
    if not email:
        raise MissingFieldError("email")

    if not is_valid_email(email):
        raise InvalidFormatError("email", "Invalid email format.")

    event_id = (draft.event_id or "").strip()
    if not event_id:
        raise MissingFieldError("event_id")

    if previous is None or event_id != previous.event_id:
        if not await store.event_exists(event_id):
            raise DanglingReferenceError(event_id)

    return BookingFields(event_id=event_id, email=email)
