"""
Table assignment: creating tables and seating / freeing them.

Seat and unseat each write two rows (the table's occupant and the
reservation's status). Both writes happen inside one ``Store.transaction()``
so no reader ever sees one without the other.
"""

from typing import Any, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
import structlog

from app.errors import (
    AlreadySeated,
    InsufficientCapacity,
    MissingField,
    NotFoundError,
    TableNotOccupied,
    TableOccupied,
)
from app.models.reservation import Reservation, ReservationStatus
from app.models.table import Table
from app.services.lifecycle import TransitionTrigger, check_transition, ensure_not_finalized
from app.services.validation import validate_table
from app.store import Store

logger = structlog.get_logger()


class SeatingService:
    """Owns table occupancy"""

    def __init__(self, store: Store):
        self.store = store

    async def _get_table(self, table_id: int) -> Table:
        table = await self.store.tables.read(table_id)
        if table is None:
            raise NotFoundError("Table", table_id)
        return table

    async def _get_reservation(self, reservation_id: int) -> Reservation:
        reservation = await self.store.reservations.read(reservation_id)
        if reservation is None:
            raise NotFoundError("Reservation", reservation_id)
        return reservation

    async def create(self, fields: Mapping[str, Any]) -> Table:
        values = validate_table(fields)

        async with self.store.transaction():
            table = await self.store.tables.create(**values.as_columns())
        await self.store.refresh(table)

        logger.info("Table created", table_id=table.table_id, name=table.table_name, capacity=table.capacity)
        return table

    async def read(self, table_id: int) -> Table:
        return await self._get_table(table_id)

    async def list(self) -> List[Table]:
        """All tables ordered by name"""
        return await self.store.tables.list()

    async def seat(self, table_id: int, reservation_id: Optional[int]) -> Table:
        """
        Assign a reservation to a free table and mark it seated.

        Checks, in order: table exists, reservation id given, reservation
        exists, reservation not finished, not already seated, party fits the
        table, table is free.
        """
        try:
            table = await self._seat(table_id, reservation_id)
        except IntegrityError:
            # Unique occupant index: a concurrent seat of the same reservation committed first
            raise AlreadySeated(reservation_id)

        logger.info("Reservation seated", table_id=table_id, reservation_id=reservation_id)
        return table

    async def _seat(self, table_id: int, reservation_id: Optional[int]) -> Table:
        async with self.store.transaction():
            table = await self._get_table(table_id)
            if reservation_id is None:
                raise MissingField("reservation_id")
            reservation = await self._get_reservation(reservation_id)

            ensure_not_finalized(reservation)
            if reservation.lifecycle_status == ReservationStatus.SEATED:
                raise AlreadySeated(reservation.reservation_id)
            check_transition(reservation, ReservationStatus.SEATED, TransitionTrigger.SEAT)

            if reservation.people > table.capacity:
                raise InsufficientCapacity(table.table_name, table.capacity, reservation.people)
            if not table.is_free:
                raise TableOccupied(table.table_name)

            await self.store.tables.set_occupant(table, reservation.reservation_id)
            await self.store.reservations.update_status(reservation, ReservationStatus.SEATED)

        return table

    async def unseat(self, table_id: int) -> Table:
        """Free an occupied table and mark its reservation finished"""
        async with self.store.transaction():
            table = await self._get_table(table_id)
            if table.is_free:
                raise TableNotOccupied(table.table_name)

            reservation_id = table.reservation_id
            reservation = await self._get_reservation(reservation_id)
            check_transition(reservation, ReservationStatus.FINISHED, TransitionTrigger.UNSEAT)

            await self.store.tables.set_occupant(table, None)
            await self.store.reservations.update_status(reservation, ReservationStatus.FINISHED)

        logger.info("Table freed", table_id=table_id, reservation_id=reservation_id)
        return table
