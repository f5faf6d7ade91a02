"""Dining table model"""

from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey

from app.database import Base


class Table(Base):
    """Seating resource, occupied by at most one seated reservation"""
    __tablename__ = "tables"

    table_id = Column(Integer, primary_key=True, autoincrement=True)
    table_name = Column(String(255), nullable=False)
    capacity = Column(Integer, nullable=False)

    # Occupancy: null means the table is free; a reservation occupies at most one table
    reservation_id = Column(
        Integer,
        ForeignKey("reservations.reservation_id", ondelete="CASCADE"),
        nullable=True,
        unique=True,
        index=True,
    )

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def is_free(self) -> bool:
        return self.reservation_id is None

    def __repr__(self) -> str:
        return (
            f"<Table(table_id={self.table_id}, name='{self.table_name}', "
            f"capacity={self.capacity}, reservation_id={self.reservation_id})>"
        )
