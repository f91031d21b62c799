"""Text formatting for quick-action results.

Pure functions: each takes records already fetched and validated by the
client, applies its cap, and returns one multi-line message.
"""

from collections.abc import Sequence
from datetime import date

from ..client.models import BookingSummary, CarSummary
from .config import CURRENCY_SYMBOL, MAX_BOOKINGS, MAX_CARS, MAX_PRICING, PRICE_FRACTION_DIGITS

NO_CARS = "No cars are currently available."
NO_AVAILABLE_CARS = "Sorry, no cars are currently available for rent."
NO_BOOKINGS = "You don't have any bookings yet.\n\nBrowse our cars and make your first booking!"
NO_PRICING = "No pricing information available at the moment."

HELP_TEXT = (
    "📍 Contact Us\n\n"
    "Address:\n234 Luxury Drive\nIndia, DL 94107\n\n"
    "📞 Phone: +1 234 567890\n\n"
    "📧 Email: info@example.com\n\n"
    "We're here to help! Feel free to reach out anytime."
)


def format_date(value: date) -> str:
    """Render a date as e.g. ``Jan 5, 2025``."""
    return f"{value:%b} {value.day}, {value.year}"


def format_price(amount: float) -> str:
    """Render an amount with thousands separators and the currency symbol.

    Up to three fraction digits are kept; trailing zeros are dropped.
    """
    text = f"{amount:,.{PRICE_FRACTION_DIGITS}f}".rstrip("0").rstrip(".")
    return f"{CURRENCY_SYMBOL}{text}"


def _plural(count: int, noun: str) -> str:
    return noun if count == 1 else f"{noun}s"


def _numbered(header: str, blocks: list[list[str]]) -> str:
    rendered = [
        "\n".join([f"{index}. {lines[0]}", *(f"   • {line}" for line in lines[1:])])
        for index, lines in enumerate(blocks, 1)
    ]
    return "\n\n".join([header, *rendered])


def format_cars(cars: Sequence[CarSummary]) -> str:
    """Full listing: brand, model, seating and transmission."""
    shown = list(cars[:MAX_CARS])
    if not shown:
        return NO_CARS

    header = f"Here are {len(shown)} available {_plural(len(shown), 'car')}:"
    return _numbered(header, [
        [
            f"{car.brand} {car.model}",
            f"Seating: {car.seating_capacity} people",
            f"Transmission: {car.transmission}",
        ]
        for car in shown
    ])


def format_available_cars(cars: Sequence[CarSummary]) -> str:
    """Availability listing; expects cars already filtered to available ones."""
    shown = list(cars[:MAX_CARS])
    if not shown:
        return NO_AVAILABLE_CARS

    header = f"Great news! We have {len(shown)} available {_plural(len(shown), 'car')} right now:"
    return _numbered(header, [
        [f"{car.brand} {car.model}", "Available: Yes ✓"]
        for car in shown
    ])


def format_bookings(bookings: Sequence[BookingSummary]) -> str:
    shown = list(bookings[:MAX_BOOKINGS])
    if not shown:
        return NO_BOOKINGS

    header = f"You have {len(shown)} {_plural(len(shown), 'booking')}:"
    return _numbered(header, [
        [
            f"{booking.car.brand} {booking.car.model}",
            f"Pickup: {format_date(booking.pickup_date)}",
            f"Return: {format_date(booking.return_date)}",
            f"Status: {booking.status}",
            f"Total: {format_price(booking.price)}",
        ]
        for booking in shown
    ])


def format_pricing(cars: Sequence[CarSummary]) -> str:
    """Daily rates; expects cars already ordered newest first."""
    shown = list(cars[:MAX_PRICING])
    if not shown:
        return NO_PRICING

    return _numbered("Here are our latest rental prices:", [
        [f"{car.brand} {car.model}", f"{format_price(car.price_per_day)}/day"]
        for car in shown
    ])


def format_help() -> str:
    return HELP_TEXT
