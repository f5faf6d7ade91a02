"""
Field and business-hours validation for reservations and tables.

Pure functions: nothing here reads or writes the database. Rules are applied in
a fixed order and the first failure is raised.
"""

import calendar
import re
from dataclasses import dataclass, asdict
from datetime import date, datetime, time
from typing import Any, Dict, Mapping, Optional
from zoneinfo import ZoneInfo

from app.config import Settings, settings as default_settings
from app.errors import (
    ClosedDay,
    InvalidCapacity,
    InvalidFormat,
    InvalidPartySize,
    InvalidStatus,
    MissingField,
    NameTooShort,
    OutsideHours,
    PastDate,
    ValueTooLong,
)
from app.models.reservation import ReservationStatus


DATE_PATTERN = re.compile(r"^[0-9]{4}-(0[1-9]|1[0-2])-(0[1-9]|[1-2][0-9]|3[0-1])$")
TIME_PATTERN = re.compile(r"^(2[0-3]|[01][0-9]):[0-5][0-9]$")
NON_DIGITS = re.compile(r"\D")

REQUIRED_RESERVATION_FIELDS = (
    "first_name",
    "last_name",
    "mobile_number",
    "reservation_date",
    "reservation_time",
    "people",
)
REQUIRED_TABLE_FIELDS = ("table_name", "capacity")

# Width of every text column
MAX_TEXT_LENGTH = 255
TEXT_RESERVATION_FIELDS = ("first_name", "last_name", "mobile_number")


@dataclass(frozen=True)
class ReservationFields:
    """Reservation columns after validation"""
    first_name: str
    last_name: str
    mobile_number: str
    mobile_digits: str
    reservation_date: date
    reservation_time: time
    people: int

    def as_columns(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TableFields:
    """Table columns after validation"""
    table_name: str
    capacity: int

    def as_columns(self) -> Dict[str, Any]:
        return asdict(self)


def normalize_phone(value: Optional[str]) -> str:
    """Strip every non-digit character: '(123) 456-7890' -> '1234567890'"""
    return NON_DIGITS.sub("", value or "")


def restaurant_now(config: Optional[Settings] = None) -> datetime:
    """Current wall-clock time at the restaurant, as a naive datetime"""
    config = config or default_settings
    return datetime.now(ZoneInfo(config.restaurant_timezone)).replace(tzinfo=None)


def restaurant_today(config: Optional[Settings] = None) -> date:
    return restaurant_now(config).date()


def parse_date(value: Any, field: str = "reservation_date") -> date:
    """Parse a strict YYYY-MM-DD string into a date"""
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise InvalidFormat(field, value, "YYYY-MM-DD")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        # Passes the pattern but is not a calendar date, e.g. 2025-02-30
        raise InvalidFormat(field, value, "YYYY-MM-DD")


def parse_time(value: Any, field: str = "reservation_time") -> time:
    """Parse a strict 24h HH:MM string into a time"""
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise InvalidFormat(field, value, "HH:MM")
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _is_whole_number(value: Any) -> bool:
    # bool is an int subclass; True must not count as a party of one
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return value.is_integer()
    return isinstance(value, int)


def _display_time(value: time) -> str:
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{value.hour % 12 or 12}:{value.minute:02d} {suffix}"


def check_required(fields: Mapping[str, Any], required) -> None:
    for name in required:
        if _is_blank(fields.get(name)):
            raise MissingField(name)


def check_length(fields: Mapping[str, Any], names) -> None:
    for name in names:
        if len(str(fields[name]).strip()) > MAX_TEXT_LENGTH:
            raise ValueTooLong(name, MAX_TEXT_LENGTH)


def check_party_size(value: Any) -> int:
    """Whole number of at least 1; integral floats such as 4.0 count"""
    if not _is_whole_number(value) or value < 1:
        raise InvalidPartySize(value)
    return int(value)


def check_future(when: datetime, now: datetime) -> None:
    if when <= now:
        raise PastDate()


def check_open_day(reservation_date: date, config: Settings) -> None:
    if reservation_date.weekday() == config.closed_weekday:
        raise ClosedDay(config.restaurant_name, calendar.day_name[config.closed_weekday])


def check_operating_hours(reservation_time: time, config: Settings) -> None:
    """Both ends are bookable: opening_time <= time <= closing_time"""
    opening = parse_time(config.opening_time, "opening_time")
    closing = parse_time(config.closing_time, "closing_time")

    if reservation_time < opening:
        raise OutsideHours(f"{config.restaurant_name} opens at {_display_time(opening)}.")
    if reservation_time > closing:
        raise OutsideHours(
            f"{config.restaurant_name} stops accepting reservations at {_display_time(closing)}."
        )


def validate_reservation(
    fields: Mapping[str, Any],
    now: Optional[datetime] = None,
    config: Optional[Settings] = None,
    check_status: bool = True,
) -> ReservationFields:
    """
    Validate a candidate reservation.

    Args:
        fields: Raw request fields
        now: Reference moment for the future-date rule (defaults to restaurant time)
        config: Settings holding opening hours and the closed weekday
        check_status: Reject a supplied status other than "booked" (creation only)

    Returns:
        The normalized column values

    Raises:
        ValidationError subclass for the first violated rule
    """
    config = config or default_settings
    now = now or restaurant_now(config)

    check_required(fields, REQUIRED_RESERVATION_FIELDS)
    check_length(fields, TEXT_RESERVATION_FIELDS)
    reservation_date = parse_date(fields["reservation_date"])
    reservation_time = parse_time(fields["reservation_time"])
    people = check_party_size(fields["people"])

    check_future(datetime.combine(reservation_date, reservation_time), now)
    check_open_day(reservation_date, config)
    check_operating_hours(reservation_time, config)

    status = fields.get("status")
    if check_status and status is not None and status != ReservationStatus.BOOKED.value:
        raise InvalidStatus(status, [ReservationStatus.BOOKED.value])

    mobile_number = str(fields["mobile_number"]).strip()
    return ReservationFields(
        first_name=str(fields["first_name"]).strip(),
        last_name=str(fields["last_name"]).strip(),
        mobile_number=mobile_number,
        mobile_digits=normalize_phone(mobile_number),
        reservation_date=reservation_date,
        reservation_time=reservation_time,
        people=people,
    )


def validate_table(fields: Mapping[str, Any]) -> TableFields:
    """Validate a candidate table: name of 2+ characters, capacity of 1+"""
    check_required(fields, REQUIRED_TABLE_FIELDS)

    table_name = str(fields["table_name"]).strip()
    if len(table_name) < 2:
        raise NameTooShort(table_name)
    if len(table_name) > MAX_TEXT_LENGTH:
        raise ValueTooLong("table_name", MAX_TEXT_LENGTH)

    capacity = fields["capacity"]
    if not _is_whole_number(capacity) or capacity < 1:
        raise InvalidCapacity(capacity)

    return TableFields(table_name=table_name, capacity=int(capacity))
