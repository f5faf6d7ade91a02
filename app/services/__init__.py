"""Reservation and table business rules"""

from app.services.lifecycle import ReservationService
from app.services.queries import ReservationQueries
from app.services.seating import SeatingService

__all__ = [
    "ReservationService",
    "ReservationQueries",
    "SeatingService",
]
