"""Tests for the reservation endpoints"""

from datetime import date

import pytest
from httpx import AsyncClient

from app.models.reservation import ReservationStatus
from helpers import future_open_date, reservation_payload


@pytest.mark.asyncio
async def test_create_reservation(client: AsyncClient):
    """Test creating a reservation"""
    payload = reservation_payload()

    response = await client.post("/reservations", json=payload)

    assert response.status_code == 201
    data = response.json()
    assert data["reservation_id"] > 0
    assert data["status"] == "booked"
    assert data["reservation_date"] == payload["reservation_date"]
    assert data["reservation_time"] == "18:00"
    assert data["people"] == 4
    assert "mobile_digits" not in data


@pytest.mark.asyncio
async def test_create_reservation_missing_field(client: AsyncClient):
    """Test that a missing field is a 400 naming the field"""
    payload = reservation_payload()
    del payload["mobile_number"]

    response = await client.post("/reservations", json=payload)

    assert response.status_code == 400
    assert response.json()["code"] == "missing_field"
    assert response.json()["field"] == "mobile_number"


@pytest.mark.asyncio
@pytest.mark.parametrize("overrides,code", [
    ({"reservation_date": "01/01/2031"}, "invalid_format"),
    ({"reservation_time": "7pm"}, "invalid_format"),
    ({"people": "2"}, "invalid_party_size"),
    ({"people": 0}, "invalid_party_size"),
    ({"reservation_date": "2001-01-01"}, "past_date"),
    ({"reservation_time": "09:00"}, "outside_hours"),
    ({"reservation_time": "22:15"}, "outside_hours"),
    ({"status": "seated"}, "invalid_status"),
])
async def test_create_reservation_rejected(client: AsyncClient, overrides, code):
    """Test that each validation rule surfaces its own code"""
    response = await client.post("/reservations", json=reservation_payload(**overrides))

    assert response.status_code == 400
    assert response.json()["code"] == code


@pytest.mark.asyncio
async def test_create_reservation_on_closed_day(client: AsyncClient):
    """Test that Tuesdays are refused"""
    tuesday = future_open_date()
    while tuesday.weekday() != 1:
        tuesday = date.fromordinal(tuesday.toordinal() + 1)

    response = await client.post("/reservations", json=reservation_payload(reservation_date=tuesday.isoformat()))

    assert response.status_code == 400
    assert response.json()["code"] == "closed_day"
    assert "closed on Tuesdays" in response.json()["detail"]


@pytest.mark.asyncio
async def test_create_reservation_malformed_body(client: AsyncClient):
    """Test that a body of the wrong shape is a 400"""
    response = await client.post("/reservations", json=reservation_payload(first_name=["Rick"]))

    assert response.status_code == 400
    assert response.json()["code"] == "malformed_request"


@pytest.mark.asyncio
async def test_get_reservation(client: AsyncClient, make_reservation):
    """Test reading a reservation by id"""
    reservation = await make_reservation()

    response = await client.get(f"/reservations/{reservation.reservation_id}")

    assert response.status_code == 200
    assert response.json()["first_name"] == "Morty"
    assert response.json()["reservation_time"] == "18:00"


@pytest.mark.asyncio
async def test_get_reservation_not_found(client: AsyncClient):
    """Test that unknown ids are 404"""
    response = await client.get("/reservations/999")

    assert response.status_code == 404
    assert response.json()["detail"] == "Reservation 999 not found"


@pytest.mark.asyncio
async def test_list_reservations_for_date(client: AsyncClient, make_reservation):
    """Test listing a day's active reservations"""
    await make_reservation(first_name="Beth")
    await make_reservation(first_name="Jerry", status=ReservationStatus.CANCELLED.value)
    await make_reservation(first_name="Summer", reservation_date=date(2030, 1, 4))

    response = await client.get("/reservations", params={"date": "2030-01-03"})

    assert response.status_code == 200
    assert [r["first_name"] for r in response.json()] == ["Beth"]


@pytest.mark.asyncio
async def test_list_reservations_including_inactive(client: AsyncClient, make_reservation):
    """Test that include_inactive brings back finished and cancelled"""
    await make_reservation(first_name="Beth")
    await make_reservation(first_name="Jerry", status=ReservationStatus.CANCELLED.value)

    response = await client.get("/reservations", params={"date": "2030-01-03", "include_inactive": "true"})

    assert response.status_code == 200
    assert len(response.json()) == 2


@pytest.mark.asyncio
async def test_list_reservations_bad_date(client: AsyncClient):
    """Test that a malformed date query is a 400"""
    response = await client.get("/reservations", params={"date": "January 3rd"})

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_format"
    assert response.json()["field"] == "date"


@pytest.mark.asyncio
async def test_search_reservations_by_phone(client: AsyncClient, make_reservation):
    """Test that mobile_number switches the listing to phone search"""
    await make_reservation(mobile_number="123-456-7890", status=ReservationStatus.FINISHED.value)
    await make_reservation(mobile_number="800-555-1212")

    response = await client.get(
        "/reservations",
        params={"mobile_number": "(123) 456-7890", "date": "2030-02-01"},
    )

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["mobile_number"] == "123-456-7890"


@pytest.mark.asyncio
async def test_update_reservation(client: AsyncClient, make_reservation):
    """Test editing a reservation"""
    reservation = await make_reservation()
    payload = reservation_payload(first_name="Birdperson", people=2, reservation_time="12:45")

    response = await client.put(f"/reservations/{reservation.reservation_id}", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["first_name"] == "Birdperson"
    assert data["reservation_time"] == "12:45"
    assert data["reservation_date"] == payload["reservation_date"]
    assert data["status"] == "booked"


@pytest.mark.asyncio
async def test_update_reservation_validation(client: AsyncClient, make_reservation):
    """Test that edits are validated"""
    reservation = await make_reservation()

    response = await client.put(
        f"/reservations/{reservation.reservation_id}",
        json=reservation_payload(people=-1),
    )

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_party_size"


@pytest.mark.asyncio
async def test_update_reservation_not_found(client: AsyncClient):
    """Test that editing an unknown id is 404"""
    response = await client.put("/reservations/999", json=reservation_payload())

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_cancel_reservation(client: AsyncClient, make_reservation):
    """Test cancelling a booked reservation"""
    reservation = await make_reservation()

    response = await client.put(
        f"/reservations/{reservation.reservation_id}/status",
        json={"status": "cancelled"},
    )

    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"


@pytest.mark.asyncio
async def test_update_status_unknown(client: AsyncClient, make_reservation):
    """Test that unknown statuses are rejected"""
    reservation = await make_reservation()

    response = await client.put(
        f"/reservations/{reservation.reservation_id}/status",
        json={"status": "unknown"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_status"


@pytest.mark.asyncio
async def test_update_status_finished(client: AsyncClient, make_reservation):
    """Test that a finished reservation cannot change status"""
    reservation = await make_reservation(status=ReservationStatus.FINISHED.value)

    response = await client.put(
        f"/reservations/{reservation.reservation_id}/status",
        json={"status": "cancelled"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "reservation_finalized"


@pytest.mark.asyncio
async def test_update_status_not_found(client: AsyncClient):
    """Test that changing status of an unknown id is 404"""
    response = await client.put("/reservations/999/status", json={"status": "cancelled"})

    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("reservation_id", ["2147483648", "99999999999999999999"])
async def test_reservation_id_beyond_integer_range_not_found(client: AsyncClient, reservation_id):
    """Test that ids no INTEGER key can hold are 404, not a database error"""
    get_response = await client.get(f"/reservations/{reservation_id}")
    put_response = await client.put(f"/reservations/{reservation_id}", json=reservation_payload())
    status_response = await client.put(f"/reservations/{reservation_id}/status", json={"status": "cancelled"})

    assert get_response.status_code == 404
    assert put_response.status_code == 404
    assert status_response.status_code == 404


@pytest.mark.asyncio
async def test_create_reservation_overlong_phone(client: AsyncClient):
    """Test that a phone number wider than its column is a named 400"""
    response = await client.post("/reservations", json=reservation_payload(mobile_number="5" * 256))

    assert response.status_code == 400
    assert response.json()["code"] == "too_long"
    assert response.json()["field"] == "mobile_number"


@pytest.mark.asyncio
async def test_create_reservation_integral_float_people(client: AsyncClient):
    """Test that people given as 4.0 is accepted and stored as 4"""
    response = await client.post("/reservations", json=reservation_payload(people=4.0))

    assert response.status_code == 201
    assert response.json()["people"] == 4
