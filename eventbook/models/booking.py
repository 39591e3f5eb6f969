"""
Booking model
"""

from sqlalchemy import Column, String, DateTime

from eventbook.core.db import Base
from eventbook.models.event import new_id, utcnow

class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(32), primary_key=True, default=new_id)
    # No foreign key: the reference is checked by the booking validator
    event_id = Column(String(32), nullable=False, index=True)
    email = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
