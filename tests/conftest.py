"""Pytest configuration and shared fixtures."""
import json
from collections.abc import Callable

import httpx
import pytest

from rentalbot.client import RentalApiClient

BASE_URL = "http://rental.test"


def make_car(index: int = 1, available: bool = True, created_at: str | None = None, **overrides) -> dict:
    """Build a car record in the platform's wire format."""
    car = {
        "_id": f"car-{index}",
        "brand": f"Brand{index}",
        "model": f"Model{index}",
        "seating_capacity": 5,
        "transmission": "Automatic",
        "isAvaliable": available,
        "pricePerDay": 1500 + index,
        "createdAt": created_at or f"2025-01-{index:02d}T10:00:00.000Z",
    }
    car.update(overrides)
    return car


def make_booking(index: int = 1, **overrides) -> dict:
    booking = {
        "_id": f"booking-{index}",
        "car": {"brand": "BMW", "model": f"X{index}"},
        "pickupDate": "2025-03-05T00:00:00.000Z",
        "returnDate": "2025-03-12T00:00:00.000Z",
        "status": "pending",
        "price": 12500,
    }
    booking.update(overrides)
    return booking


@pytest.fixture
def api_client():
    """Return a factory building a RentalApiClient over a fake transport.

    The handler receives each ``httpx.Request`` and returns an ``httpx.Response``.
    """
    def _make(handler: Callable[[httpx.Request], httpx.Response], token: str | None = None) -> RentalApiClient:
        return RentalApiClient(BASE_URL, token=token, transport=httpx.MockTransport(handler))

    return _make


def json_response(status_code: int, body: object) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(body), headers={"content-type": "application/json"})
