"""Pydantic schemas for request/response validation"""

from app.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationStatusUpdate,
    ReservationResponse,
)
from app.schemas.table import (
    TableCreate,
    SeatRequest,
    TableResponse,
)

__all__ = [
    "ReservationCreate",
    "ReservationUpdate",
    "ReservationStatusUpdate",
    "ReservationResponse",
    "TableCreate",
    "SeatRequest",
    "TableResponse",
]
