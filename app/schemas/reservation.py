"""Reservation schemas

Request fields are typed loosely. ``app.services.validation`` checks them and
reports the first violated rule with its own error code.
"""

from datetime import date, datetime, time
from typing import Any, Optional
from pydantic import BaseModel, field_serializer


class ReservationCreate(BaseModel):
    """Create reservation request"""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    mobile_number: Optional[str] = None
    reservation_date: Optional[str] = None  # YYYY-MM-DD
    reservation_time: Optional[str] = None  # HH:MM, 24h
    people: Optional[Any] = None
    status: Optional[str] = None


class ReservationUpdate(ReservationCreate):
    """Full edit of an existing reservation; ``status`` is ignored"""


class ReservationStatusUpdate(BaseModel):
    """Change reservation status"""
    status: Optional[str] = None


class ReservationResponse(BaseModel):
    """Reservation response"""
    reservation_id: int
    first_name: str
    last_name: str
    mobile_number: str
    reservation_date: date
    reservation_time: time
    people: int
    status: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @field_serializer("reservation_time")
    def serialize_time(self, value: time) -> str:
        return value.strftime("%H:%M")

    class Config:
        from_attributes = True
