"""Table schemas"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel


class TableCreate(BaseModel):
    """Create table request"""
    table_name: Optional[str] = None
    capacity: Optional[Any] = None


class SeatRequest(BaseModel):
    """Seat a reservation at a table"""
    reservation_id: Optional[int] = None


class TableResponse(BaseModel):
    """Table response"""
    table_id: int
    table_name: str
    capacity: int
    reservation_id: Optional[int]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
