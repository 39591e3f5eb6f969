"""Domain error codes for the record pipeline."""

from dataclasses import dataclass
from enum import Enum

from eventbook.schemas.common import ErrorResponse


class ErrorCode(Enum):
    """Domain error codes."""

    MISSING_FIELD = "MISSING_FIELD"
    EMPTY_LIST_ITEM = "EMPTY_LIST_ITEM"
    INVALID_FORMAT = "INVALID_FORMAT"
    DANGLING_REFERENCE = "DANGLING_REFERENCE"
    DUPLICATE_SLUG = "DUPLICATE_SLUG"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"


def _restore_error(cls, state):
    error = cls.__new__(cls)
    error.__dict__.update(state)
    Exception.__init__(error, state["message"])
    return error


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code, user-safe message and offending field."""

    code: ErrorCode
    message: str
    field: str | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __reduce__(self):
        # subclass __init__ signatures differ from the dataclass fields
        return _restore_error, (type(self), self.__dict__.copy())

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_response(self) -> ErrorResponse:
        details = {"field": self.field} if self.field else None
        return ErrorResponse(
            message=self.message,
            error_code=self.code.value,
            details=details,
        )


class MissingFieldError(DomainError):
    """Raised when a required scalar or list field is empty or absent."""

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(
            code=ErrorCode.MISSING_FIELD,
            message=message or f"{field} is required",
            field=field,
        )


class EmptyListItemError(DomainError):
    """Raised when an agenda or tags element is blank."""

    def __init__(self, field: str, index: int) -> None:
        super().__init__(
            code=ErrorCode.EMPTY_LIST_ITEM,
            message=f"{field} items cannot be empty",
            field=field,
        )
        self.index = index


class InvalidFormatError(DomainError):
    """Raised when a date, time or email does not have the required shape."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_FORMAT,
            message=message,
            field=field,
        )


class DanglingReferenceError(DomainError):
    """Raised when a booking points at an event that does not exist."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.DANGLING_REFERENCE,
            message="Referenced event does not exist",
            field="event_id",
        )
        self.event_id = event_id


class DuplicateSlugError(DomainError):
    """Raised when the store rejects a write because the slug is taken."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_SLUG,
            message="An event with this title already exists",
            field="title",
        )
        self.slug = slug


class StoreUnavailableError(DomainError):
    """Raised when the record store itself fails (connectivity, timeout)."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message="Record store unavailable",
        )
        self.operation = operation


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class BookingNotFoundError(DomainError):
    """Raised when a booking is not found."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_NOT_FOUND,
            message="Booking not found",
        )
        self.booking_id = booking_id
