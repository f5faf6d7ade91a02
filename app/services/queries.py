"""Read views for the dashboard and the search page"""

from datetime import date
from typing import List, Optional

from app.config import Settings
from app.models.reservation import Reservation
from app.services.validation import normalize_phone, restaurant_today
from app.store import Store


class ReservationQueries:
    """Date-scoped listing and phone search"""

    def __init__(self, store: Store, config: Optional[Settings] = None):
        self.store = store
        self.config = config

    async def list_by_date(
        self,
        reservation_date: Optional[date] = None,
        include_inactive: bool = False,
    ) -> List[Reservation]:
        """
        Reservations for one day ordered by time.

        Finished and cancelled reservations are left out unless
        ``include_inactive`` is set (history view). The day defaults to today
        at the restaurant.
        """
        reservation_date = reservation_date or restaurant_today(self.config)
        return await self.store.reservations.list_by_date(
            reservation_date,
            exclude_inactive=not include_inactive,
        )

    async def search_by_phone(self, mobile_number: str) -> List[Reservation]:
        """Substring match on digits only, so formatting never matters"""
        digits = normalize_phone(mobile_number)
        if not digits:
            return []
        return await self.store.reservations.search_by_phone(digits)
