"""Error taxonomy for reservation and table operations

Every error carries an HTTP status and a machine-checkable ``code``. Handlers
in ``app.main`` render them as ``{"detail": ..., "code": ...}``.
"""

from typing import Any, Optional


class ReservationSystemError(Exception):
    """Base class for business-rule failures"""
    status_code = 400
    code = "error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        body: dict = {"detail": self.message, "code": self.code}
        if self.field:
            body["field"] = self.field
        return body


# Validation (400)

class ValidationError(ReservationSystemError):
    code = "validation_error"


class MissingField(ValidationError):
    code = "missing_field"

    def __init__(self, field: str):
        super().__init__(f"A '{field}' property is required", field=field)


class InvalidFormat(ValidationError):
    code = "invalid_format"

    def __init__(self, field: str, value: Any, expected: str):
        super().__init__(f"'{value}' is invalid '{field}' format. Use {expected}", field=field)


class InvalidPartySize(ValidationError):
    code = "invalid_party_size"

    def __init__(self, value: Any):
        super().__init__(f"'people' must be a whole number of at least 1, got '{value}'", field="people")


class PastDate(ValidationError):
    code = "past_date"

    def __init__(self):
        super().__init__("Reservation must be for a future date or time.", field="reservation_date")


class ClosedDay(ValidationError):
    code = "closed_day"

    def __init__(self, restaurant: str, weekday: str):
        super().__init__(f"{restaurant} is closed on {weekday}s. Sorry!", field="reservation_date")


class OutsideHours(ValidationError):
    code = "outside_hours"

    def __init__(self, message: str):
        super().__init__(message, field="reservation_time")


class InvalidStatus(ValidationError):
    code = "invalid_status"

    def __init__(self, value: Any, allowed):
        super().__init__(
            f"'{value}' is not a valid status. Use one of: {', '.join(allowed)}",
            field="status",
        )


class ValueTooLong(ValidationError):
    code = "too_long"

    def __init__(self, field: str, limit: int):
        super().__init__(f"'{field}' must be at most {limit} characters long", field=field)


class NameTooShort(ValidationError):
    code = "name_too_short"

    def __init__(self, value: str):
        super().__init__(f"'table_name' must be at least 2 characters long, got '{value}'", field="table_name")


class InvalidCapacity(ValidationError):
    code = "invalid_capacity"

    def __init__(self, value: Any):
        super().__init__(f"'capacity' must be a whole number of at least 1, got '{value}'", field="capacity")


# Lookup (404)

class NotFoundError(ReservationSystemError):
    status_code = 404
    code = "not_found"

    def __init__(self, resource: str, identifier: Any):
        super().__init__(f"{resource} {identifier} not found")
        self.resource = resource
        self.identifier = identifier


# Conflicts with current state (400)

class ConflictError(ReservationSystemError):
    code = "conflict"


class AlreadySeated(ConflictError):
    code = "already_seated"

    def __init__(self, reservation_id: int):
        super().__init__(f"Reservation {reservation_id} is already seated")


class TableOccupied(ConflictError):
    code = "table_occupied"

    def __init__(self, table_name: str):
        super().__init__(f"Table {table_name} is occupied")


class TableNotOccupied(ConflictError):
    code = "table_not_occupied"

    def __init__(self, table_name: str):
        super().__init__(f"Table {table_name} is not occupied")


class InsufficientCapacity(ConflictError):
    code = "insufficient_capacity"

    def __init__(self, table_name: str, capacity: int, people: int):
        super().__init__(
            f"Table {table_name} does not have sufficient capacity: seats {capacity}, party of {people}"
        )


class ReservationFinalized(ConflictError):
    code = "reservation_finalized"

    def __init__(self, reservation_id: int):
        super().__init__(f"Reservation {reservation_id} is finished and cannot be changed")


class InvalidTransition(ConflictError):
    code = "invalid_transition"

    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot change reservation status from '{current}' to '{target}'", field="status")
