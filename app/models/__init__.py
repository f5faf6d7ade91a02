"""Database models"""

from app.models.reservation import Reservation, ReservationStatus, INACTIVE_STATUSES
from app.models.table import Table

__all__ = [
    "Reservation",
    "ReservationStatus",
    "INACTIVE_STATUSES",
    "Table",
]
