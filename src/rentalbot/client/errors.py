"""Errors raised by the rental platform client."""

from typing import Any


class RentalApiError(Exception):
    """Base class for every failure talking to the rental platform."""


class ApiTransportError(RentalApiError):
    """The request never produced an HTTP response (refused, reset, timed out)."""


class ApiStatusError(RentalApiError):
    """The platform answered with a non-2xx status."""

    def __init__(self, status_code: int, payload: Any = None) -> None:
        super().__init__(f"Rental API returned HTTP {status_code}")
        self.status_code = status_code
        self.payload = payload


class AuthenticationRequiredError(ApiStatusError):
    """HTTP 401: the endpoint needs a logged-in user."""

    def __init__(self, payload: Any = None) -> None:
        super().__init__(401, payload)


class ApiResponseError(RentalApiError):
    """A 2xx response whose body is not the documented shape."""


class UnsuccessfulResponseError(ApiResponseError):
    """A well-formed response carrying ``success: false``."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Rental API reported an unsuccessful request")
        self.message = message
