"""
Reservation lifecycle: creation, edits and status transitions.

All status changes, including the ones made by seating, go through
``check_transition`` and the ``TRANSITIONS`` table below.
"""

import enum
from datetime import datetime
from typing import Any, List, Mapping, Optional

import structlog

from app.config import Settings
from app.errors import (
    InsufficientCapacity,
    InvalidStatus,
    InvalidTransition,
    NotFoundError,
    ReservationFinalized,
)
from app.models.reservation import Reservation, ReservationStatus
from app.services.queries import ReservationQueries
from app.services.validation import validate_reservation
from app.store import Store

logger = structlog.get_logger()


class TransitionTrigger(str, enum.Enum):
    """Operation requesting a status change"""
    SEAT = "seat"
    UNSEAT = "unseat"
    STATUS_UPDATE = "status_update"


TRANSITIONS = {
    (ReservationStatus.BOOKED, ReservationStatus.SEATED): TransitionTrigger.SEAT,
    (ReservationStatus.BOOKED, ReservationStatus.CANCELLED): TransitionTrigger.STATUS_UPDATE,
    (ReservationStatus.SEATED, ReservationStatus.CANCELLED): TransitionTrigger.STATUS_UPDATE,
    (ReservationStatus.SEATED, ReservationStatus.FINISHED): TransitionTrigger.UNSEAT,
}

ALLOWED_STATUSES = [status.value for status in ReservationStatus]


def parse_status(value: Any) -> ReservationStatus:
    """Map a raw status string onto the enum, or raise InvalidStatus"""
    try:
        return ReservationStatus(value)
    except ValueError:
        raise InvalidStatus(value, ALLOWED_STATUSES)


def ensure_not_finalized(reservation: Reservation) -> None:
    if reservation.lifecycle_status == ReservationStatus.FINISHED:
        raise ReservationFinalized(reservation.reservation_id)


def check_transition(
    reservation: Reservation,
    target: ReservationStatus,
    trigger: TransitionTrigger,
) -> None:
    """
    Single gate for every status change.

    Raises:
        ReservationFinalized: reservation is already finished
        InvalidTransition: the pair is not in TRANSITIONS for this trigger
    """
    ensure_not_finalized(reservation)
    current = reservation.lifecycle_status
    if TRANSITIONS.get((current, target)) != trigger:
        raise InvalidTransition(current.value, target.value)


class ReservationService:
    """Creates reservations and moves them through their lifecycle"""

    def __init__(self, store: Store, config: Optional[Settings] = None):
        self.store = store
        self.config = config

    async def _get(self, reservation_id: int) -> Reservation:
        reservation = await self.store.reservations.read(reservation_id)
        if reservation is None:
            raise NotFoundError("Reservation", reservation_id)
        return reservation

    async def create(self, fields: Mapping[str, Any], now: Optional[datetime] = None) -> Reservation:
        """Validate and persist a new reservation with status booked"""
        values = validate_reservation(fields, now=now, config=self.config)

        async with self.store.transaction():
            reservation = await self.store.reservations.create(
                **values.as_columns(),
                status=ReservationStatus.BOOKED.value,
            )
        await self.store.refresh(reservation)

        logger.info(
            "Reservation created",
            reservation_id=reservation.reservation_id,
            date=str(reservation.reservation_date),
            time=str(reservation.reservation_time),
            people=reservation.people,
        )
        return reservation

    async def read(self, reservation_id: int) -> Reservation:
        return await self._get(reservation_id)

    async def update(
        self,
        reservation_id: int,
        fields: Mapping[str, Any],
        now: Optional[datetime] = None,
    ) -> Reservation:
        """Replace every editable field; status is left untouched"""
        async with self.store.transaction():
            reservation = await self._get(reservation_id)
            ensure_not_finalized(reservation)
            values = validate_reservation(fields, now=now, config=self.config, check_status=False)

            if reservation.lifecycle_status == ReservationStatus.SEATED:
                table = await self.store.tables.find_by_reservation(reservation.reservation_id)
                if table is not None and values.people > table.capacity:
                    raise InsufficientCapacity(table.table_name, table.capacity, values.people)

            await self.store.reservations.update(reservation, **values.as_columns())

        logger.info("Reservation updated", reservation_id=reservation_id)
        return reservation

    async def update_status(self, reservation_id: int, new_status: Any) -> Reservation:
        """
        Direct status change from the dashboard (in practice: cancel).

        Cancelling a seated reservation frees its table in the same transaction.
        """
        async with self.store.transaction():
            reservation = await self._get(reservation_id)
            ensure_not_finalized(reservation)
            target = parse_status(new_status)
            check_transition(reservation, target, TransitionTrigger.STATUS_UPDATE)

            previous = reservation.lifecycle_status
            if previous == ReservationStatus.SEATED:
                table = await self.store.tables.find_by_reservation(reservation.reservation_id)
                if table is not None:
                    await self.store.tables.set_occupant(table, None)
                    logger.info("Table freed by cancellation", table_id=table.table_id)

            await self.store.reservations.update_status(reservation, target)

        logger.info(
            "Reservation status changed",
            reservation_id=reservation_id,
            from_status=previous.value,
            to_status=target.value,
        )
        return reservation

    async def search(self, mobile_number: str) -> List[Reservation]:
        return await ReservationQueries(self.store, self.config).search_by_phone(mobile_number)
