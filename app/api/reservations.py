"""Reservation management API endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from app.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationStatusUpdate,
    ReservationResponse,
)
from app.services.lifecycle import ReservationService
from app.services.queries import ReservationQueries
from app.services.validation import parse_date
from app.store import Store, get_store

router = APIRouter()


@router.get("", response_model=List[ReservationResponse])
async def list_reservations(
    date: Optional[str] = None,
    mobile_number: Optional[str] = None,
    include_inactive: bool = False,
    store: Store = Depends(get_store),
):
    """List a day's reservations, or search by phone when mobile_number is given"""
    queries = ReservationQueries(store)

    if mobile_number is not None:
        return await queries.search_by_phone(mobile_number)

    reservation_date = parse_date(date, "date") if date else None
    return await queries.list_by_date(reservation_date, include_inactive=include_inactive)


@router.post("", response_model=ReservationResponse, status_code=201)
async def create_reservation(
    reservation_data: ReservationCreate,
    store: Store = Depends(get_store),
):
    """Create a new reservation"""
    return await ReservationService(store).create(reservation_data.model_dump())


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: int,
    store: Store = Depends(get_store),
):
    """Get reservation details"""
    return await ReservationService(store).read(reservation_id)


@router.put("/{reservation_id}", response_model=ReservationResponse)
async def update_reservation(
    reservation_id: int,
    reservation_data: ReservationUpdate,
    store: Store = Depends(get_store),
):
    """Edit every field of a reservation"""
    return await ReservationService(store).update(reservation_id, reservation_data.model_dump())


@router.put("/{reservation_id}/status", response_model=ReservationResponse)
async def update_reservation_status(
    reservation_id: int,
    status_data: ReservationStatusUpdate,
    store: Store = Depends(get_store),
):
    """Change reservation status (cancel from the dashboard)"""
    return await ReservationService(store).update_status(reservation_id, status_data.status)
