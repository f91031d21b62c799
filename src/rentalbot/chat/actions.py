"""Quick-action resolution.

Maps each quick action to the work needed to answer it: a backend fetch with
a loading placeholder, or a static reply. Fetches never raise; every failure
degrades to a fixed, category-specific apology.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from ..client.errors import AuthenticationRequiredError, RentalApiError, UnsuccessfulResponseError
from ..client.models import BookingSummary, CarSummary
from .config import FALLBACK_REPLY_DELAY, HELP_REPLY_DELAY, MAX_PRICING
from .formatters import (
    format_available_cars,
    format_bookings,
    format_cars,
    format_help,
    format_pricing,
)
from .models import ActionId, QuickAction

logger = logging.getLogger(__name__)

BROWSE_LOADING = "Let me fetch all available cars for you..."
AVAILABILITY_LOADING = "Checking available cars for you..."
BOOKINGS_LOADING = "Fetching your bookings..."
PRICING_LOADING = "Fetching rental pricing..."

CARS_UNAVAILABLE = "Sorry, I couldn't fetch the car details at the moment."
CARS_FAILED = "Sorry, something went wrong while fetching car details."
BOOKINGS_UNAVAILABLE = "Sorry, I couldn't fetch your bookings at the moment."
BOOKINGS_FAILED = "Sorry, something went wrong while fetching your bookings."
LOGIN_REQUIRED = "🔒 Please login to view your bookings.\n\nYou need to be logged in to see your booking history."
PRICING_UNAVAILABLE = "Sorry, I couldn't fetch the pricing details at the moment."
PRICING_FAILED = "Sorry, something went wrong while fetching pricing details."


class RentalDataSource(Protocol):
    """The slice of ``RentalApiClient`` the resolver needs."""

    async def list_cars(self) -> list[CarSummary]: ...

    async def list_user_bookings(self) -> list[BookingSummary]: ...


@dataclass(frozen=True)
class FetchAction:
    """Show ``loading_text`` while ``run`` fetches and formats the answer."""

    loading_text: str
    run: Callable[[], Awaitable[str]]


@dataclass(frozen=True)
class StaticReply:
    """Answer with fixed text after a cosmetic delay."""

    text: str
    delay: float = 0.0


ResolvedAction = FetchAction | StaticReply

_OLDEST = datetime.min.replace(tzinfo=UTC)


class ActionResolver:
    """Turns quick actions into fetch operations or static replies."""

    def __init__(
        self,
        source: RentalDataSource,
        help_delay: float = HELP_REPLY_DELAY,
        fallback_delay: float = FALLBACK_REPLY_DELAY,
    ) -> None:
        self._source = source
        self._help_delay = help_delay
        self._fallback_delay = fallback_delay

    def resolve(self, action: QuickAction) -> ResolvedAction:
        fetches = {
            ActionId.BROWSE_CARS: FetchAction(BROWSE_LOADING, self.browse_cars),
            ActionId.CHECK_AVAILABILITY: FetchAction(AVAILABILITY_LOADING, self.check_availability),
            ActionId.MY_BOOKINGS: FetchAction(BOOKINGS_LOADING, self.my_bookings),
            ActionId.PRICING: FetchAction(PRICING_LOADING, self.pricing),
        }
        if action.action_id in fetches:
            return fetches[action.action_id]
        if action.action_id is ActionId.HELP:
            return StaticReply(format_help(), self._help_delay)
        return StaticReply(f"Great! Let me help you with {action.label.lower()}...", self._fallback_delay)

    async def browse_cars(self) -> str:
        try:
            cars = await self._source.list_cars()
        except UnsuccessfulResponseError as e:
            logger.error("Platform declined the request: %s", e)
            return CARS_UNAVAILABLE
        except RentalApiError:
            logger.exception("Fetching cars failed")
            return CARS_FAILED
        return format_cars(cars)

    async def check_availability(self) -> str:
        try:
            cars = await self._source.list_cars()
        except UnsuccessfulResponseError as e:
            logger.error("Platform declined the request: %s", e)
            return CARS_UNAVAILABLE
        except RentalApiError:
            logger.exception("Fetching available cars failed")
            return CARS_FAILED
        return format_available_cars([car for car in cars if car.is_available])

    async def my_bookings(self) -> str:
        try:
            bookings = await self._source.list_user_bookings()
        except AuthenticationRequiredError:
            logger.info("Bookings requested without a logged-in user")
            return LOGIN_REQUIRED
        except UnsuccessfulResponseError as e:
            logger.error("Platform declined the request: %s", e)
            return BOOKINGS_UNAVAILABLE
        except RentalApiError:
            logger.exception("Fetching bookings failed")
            return BOOKINGS_FAILED
        return format_bookings(bookings)

    async def pricing(self) -> str:
        try:
            cars = await self._source.list_cars()
        except UnsuccessfulResponseError as e:
            logger.error("Platform declined the request: %s", e)
            return PRICING_UNAVAILABLE
        except RentalApiError:
            logger.exception("Fetching pricing failed")
            return PRICING_FAILED
        latest = sorted(cars, key=lambda car: car.created_at or _OLDEST, reverse=True)
        return format_pricing(latest[:MAX_PRICING])
