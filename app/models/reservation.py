"""Reservation model"""

import enum
from datetime import datetime
from sqlalchemy import Column, String, Integer, Date, Time, DateTime, Index

from app.database import Base


class ReservationStatus(str, enum.Enum):
    """Reservation lifecycle stage"""
    BOOKED = "booked"
    SEATED = "seated"
    FINISHED = "finished"
    CANCELLED = "cancelled"


# Statuses hidden from the dashboard's active view
INACTIVE_STATUSES = (ReservationStatus.FINISHED, ReservationStatus.CANCELLED)


class Reservation(Base):
    """Party booking"""
    __tablename__ = "reservations"

    reservation_id = Column(Integer, primary_key=True, autoincrement=True)

    # Guest information
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    mobile_number = Column(String(255), nullable=False)
    mobile_digits = Column(String(255), nullable=False, index=True)  # mobile_number without formatting

    # Reservation details
    reservation_date = Column(Date, nullable=False, index=True)
    reservation_time = Column(Time, nullable=False)
    people = Column(Integer, nullable=False)

    status = Column(String(20), nullable=False, default=ReservationStatus.BOOKED.value)

    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_reservations_date_time", "reservation_date", "reservation_time"),
    )

    @property
    def lifecycle_status(self) -> ReservationStatus:
        return ReservationStatus(self.status)

    def __repr__(self) -> str:
        return (
            f"<Reservation(reservation_id={self.reservation_id}, "
            f"date={self.reservation_date}, time={self.reservation_time}, "
            f"people={self.people}, status='{self.status}')>"
        )
