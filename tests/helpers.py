"""Shared test data"""

from datetime import date, datetime, timedelta

from app.config import settings
from app.services.validation import restaurant_today


# Fixed clock for service-level tests: Wednesday 2 January 2030, 09:00
NOW = datetime(2030, 1, 2, 9, 0)
OPEN_DAY = "2030-01-03"  # Thursday
CLOSED_DAY = "2030-01-08"  # Tuesday


def future_open_date(days_ahead: int = 1) -> date:
    """A date at least ``days_ahead`` days out that the restaurant is open"""
    candidate = restaurant_today() + timedelta(days=days_ahead)
    while candidate.weekday() == settings.closed_weekday:
        candidate += timedelta(days=1)
    return candidate


def reservation_payload(**overrides) -> dict:
    """Valid request body for POST /reservations"""
    payload = {
        "first_name": "Rick",
        "last_name": "Sanchez",
        "mobile_number": "202-555-0164",
        "reservation_date": future_open_date().isoformat(),
        "reservation_time": "18:00",
        "people": 4,
    }
    payload.update(overrides)
    return payload


def fields_on(day: str, **overrides) -> dict:
    """Valid reservation fields for a fixed day, used with the NOW clock"""
    fields = reservation_payload(reservation_date=day)
    fields.update(overrides)
    return fields
