"""Persistence layer for reservations and tables

Services never touch the session directly. They receive a ``Store`` which
bundles the two repositories with a unit of work: writes issued inside
``Store.transaction()`` are committed together or rolled back together.
"""

from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncIterator, List, Optional

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.database import get_db
from app.errors import ReservationSystemError
from app.models.reservation import Reservation, ReservationStatus, INACTIVE_STATUSES
from app.models.table import Table

logger = structlog.get_logger()

# Largest value an INTEGER primary key can hold
MAX_ROW_ID = 2**31 - 1


def _valid_id(value: int) -> bool:
    return 1 <= value <= MAX_ROW_ID


class ReservationRepository:
    """Reservation reads and writes"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **fields) -> Reservation:
        reservation = Reservation(**fields)
        self.session.add(reservation)
        await self.session.flush()
        return reservation

    async def read(self, reservation_id: int) -> Optional[Reservation]:
        if not _valid_id(reservation_id):
            return None
        result = await self.session.execute(
            select(Reservation).where(Reservation.reservation_id == reservation_id)
        )
        return result.scalar_one_or_none()

    async def update(self, reservation: Reservation, **fields) -> Reservation:
        for field, value in fields.items():
            setattr(reservation, field, value)
        await self.session.flush()
        return reservation

    async def update_status(self, reservation: Reservation, status: ReservationStatus) -> Reservation:
        reservation.status = status.value
        await self.session.flush()
        return reservation

    async def list_by_date(self, reservation_date: date, exclude_inactive: bool = True) -> List[Reservation]:
        query = select(Reservation).where(Reservation.reservation_date == reservation_date)
        if exclude_inactive:
            query = query.where(
                Reservation.status.not_in([status.value for status in INACTIVE_STATUSES])
            )
        query = query.order_by(Reservation.reservation_time.asc(), Reservation.reservation_id.asc())

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def search_by_phone(self, digits: str) -> List[Reservation]:
        result = await self.session.execute(
            select(Reservation)
            .where(Reservation.mobile_digits.contains(digits, autoescape=True))
            .order_by(
                Reservation.reservation_date.asc(),
                Reservation.reservation_time.asc(),
                Reservation.reservation_id.asc(),
            )
        )
        return list(result.scalars().all())


class TableRepository:
    """Table reads and writes"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **fields) -> Table:
        table = Table(**fields)
        self.session.add(table)
        await self.session.flush()
        return table

    async def read(self, table_id: int) -> Optional[Table]:
        if not _valid_id(table_id):
            return None
        result = await self.session.execute(select(Table).where(Table.table_id == table_id))
        return result.scalar_one_or_none()

    async def list(self) -> List[Table]:
        result = await self.session.execute(
            select(Table).order_by(Table.table_name.asc(), Table.table_id.asc())
        )
        return list(result.scalars().all())

    async def find_by_reservation(self, reservation_id: int) -> Optional[Table]:
        if not _valid_id(reservation_id):
            return None
        result = await self.session.execute(
            select(Table).where(Table.reservation_id == reservation_id)
        )
        return result.scalars().first()

    async def set_occupant(self, table: Table, reservation_id: Optional[int]) -> Table:
        table.reservation_id = reservation_id
        await self.session.flush()
        return table


class Store:
    """Repositories sharing one session, plus the transaction boundary"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.reservations = ReservationRepository(session)
        self.tables = TableRepository(session)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["Store"]:
        """Commit everything written in the block, or roll all of it back"""
        try:
            yield self
            await self.session.commit()
        except ReservationSystemError as e:
            await self.session.rollback()
            logger.debug("Transaction rolled back", error_type=type(e).__name__)
            raise
        except Exception as e:
            await self.session.rollback()
            logger.warning("Transaction rolled back", error=str(e), error_type=type(e).__name__)
            raise

    async def refresh(self, instance) -> None:
        await self.session.refresh(instance)


async def get_store(db: AsyncSession = Depends(get_db)) -> Store:
    """FastAPI dependency: a Store bound to the request session"""
    return Store(db)
