"""Table management and seating API endpoints"""

from typing import List

from fastapi import APIRouter, Depends

from app.schemas.table import TableCreate, SeatRequest, TableResponse
from app.services.seating import SeatingService
from app.store import Store, get_store

router = APIRouter()


@router.get("", response_model=List[TableResponse])
async def list_tables(store: Store = Depends(get_store)):
    """List all tables ordered by name"""
    return await SeatingService(store).list()


@router.post("", response_model=TableResponse, status_code=201)
async def create_table(
    table_data: TableCreate,
    store: Store = Depends(get_store),
):
    """Create a new table"""
    return await SeatingService(store).create(table_data.model_dump())


@router.get("/{table_id}", response_model=TableResponse)
async def get_table(
    table_id: int,
    store: Store = Depends(get_store),
):
    """Get table details"""
    return await SeatingService(store).read(table_id)


@router.put("/{table_id}/seat", response_model=TableResponse)
async def seat_table(
    table_id: int,
    seat_data: SeatRequest,
    store: Store = Depends(get_store),
):
    """Seat a reservation at this table"""
    return await SeatingService(store).seat(table_id, seat_data.reservation_id)


@router.delete("/{table_id}/seat", response_model=TableResponse)
async def unseat_table(
    table_id: int,
    store: Store = Depends(get_store),
):
    """Free this table and finish its reservation"""
    return await SeatingService(store).unseat(table_id)
