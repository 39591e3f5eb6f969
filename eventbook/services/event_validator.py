"""
Event validation and normalization.

Runs every field rule in order and stops at the first failure. Nothing here
touches the record store: the result is a canonical candidate that the
caller persists in a single write.
"""

from typing import List, Optional

from eventbook.core.errors import EmptyListItemError, MissingFieldError
from eventbook.schemas.event import EventDraft, EventFields, EventRecord
from eventbook.services.slug import slugify
from eventbook.services.temporal import normalize_date, normalize_time

REQUIRED_TEXT_FIELDS = (
    "title",
    "description",
    "overview",
    "image",
    "venue",
    "location",
    "mode",
    "audience",
    "organizer",
)


def _require_text(draft: EventDraft, field: str) -> str:
    value = (getattr(draft, field) or "").strip()
    if not value:
        raise MissingFieldError(field)
    return value


def _clean_items(field: str, items: Optional[List[str]], lowercase: bool = False) -> List[str]:
    """Trim every element of a required list, rejecting blanks"""
    if not items:
        raise MissingFieldError(field, f"{field} is required and cannot be empty")

    cleaned = []
    for index, item in enumerate(items):
        trimmed = item.strip()
        if not trimmed:
            raise EmptyListItemError(field, index)
        cleaned.append(trimmed.lower() if lowercase else trimmed)
    return cleaned


def validate_event(draft: EventDraft, previous: Optional[EventRecord] = None) -> EventFields:
    """Validate and normalize an event draft.

    Args:
        draft: Raw submitted fields. For updates this is the stored record
            with the incoming changes applied on top.
        previous: The stored record being updated, or None on creation.

    Returns:
        The canonical fields ready to persist.

    Raises:
        MissingFieldError: A required field is blank, or the title has no
            characters a slug can be built from.
        EmptyListItemError: An agenda or tags element is blank.
        InvalidFormatError: The date or time cannot be normalized.
    """
    text = {field: _require_text(draft, field) for field in REQUIRED_TEXT_FIELDS}

    agenda = _clean_items("agenda", draft.agenda)
    tags = _clean_items("tags", draft.tags, lowercase=True)

    date = normalize_date(draft.date or "")
    time = normalize_time(draft.time or "")

    # Keep slugs (and therefore URLs) stable unless the title changes
    if previous is None or text["title"] != previous.title:
        slug = slugify(text["title"])
        if not slug:
            raise MissingFieldError("title", "Title must contain at least one letter or digit")
    else:
        slug = previous.slug

    return EventFields(
        slug=slug,
        date=date,
        time=time,
        agenda=agenda,
        tags=tags,
        **text,
    )
