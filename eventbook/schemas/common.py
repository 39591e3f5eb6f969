"""
Common Pydantic schemas
"""

from datetime import datetime, timezone
from typing import Any, Optional
from pydantic import BaseModel

class ErrorResponse(BaseModel):
    """Structured failure handed back to callers"""
    success: bool = False
    message: str
    error_code: Optional[str] = None
    details: Optional[Any] = None

def assume_utc(value: datetime) -> datetime:
    """SQLite hands timestamps back without a zone; they were written in UTC"""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
