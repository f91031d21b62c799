"""Read-only projections of rental platform records.

Field aliases match the platform's JSON (including its ``isAvaliable``
spelling). Unknown fields are ignored.
"""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


def _assume_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


# Naive timestamps from the platform are UTC
UtcDatetime = Annotated[datetime, AfterValidator(_assume_utc)]


class _PlatformRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class CarSummary(_PlatformRecord):
    """A car listing as returned by ``GET /api/user/cars``."""

    brand: str
    model: str
    seating_capacity: int
    transmission: str
    # Only an explicit true marks a car as rentable
    is_available: bool = Field(default=False, alias="isAvaliable")
    price_per_day: float = Field(alias="pricePerDay")
    created_at: UtcDatetime | None = Field(default=None, alias="createdAt")


class BookedCar(_PlatformRecord):
    brand: str
    model: str


class BookingSummary(_PlatformRecord):
    """A booking as returned by ``GET /api/bookings/user``."""

    car: BookedCar
    pickup_date: UtcDatetime = Field(alias="pickupDate")
    return_date: UtcDatetime = Field(alias="returnDate")
    status: str
    price: float


class ChatbotReply(_PlatformRecord):
    """Body of ``POST /api/chatbot/message``.

    On success ``response`` holds the assistant text; otherwise ``message``
    and the optional ``fallback`` explain the failure.
    """

    success: bool
    response: str | None = None
    message: str | None = None
    fallback: str | None = None
    usage: dict[str, int] | None = None

    def display_text(self) -> str:
        """Text to show the user for this reply."""
        if self.success:
            return self.response or ""
        return f"{self.message or ''}\n\n{self.fallback or ''}"


class ChatbotHealth(_PlatformRecord):
    """Body of ``GET /api/chatbot/health``."""

    success: bool
    message: str
    model: str | None = None
    error: str | None = None
