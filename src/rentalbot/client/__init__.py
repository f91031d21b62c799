"""HTTP client for the rental platform and its chatbot backend."""

from .api import RentalApiClient
from .errors import (
    ApiResponseError,
    ApiStatusError,
    ApiTransportError,
    AuthenticationRequiredError,
    RentalApiError,
    UnsuccessfulResponseError,
)
from .models import BookedCar, BookingSummary, CarSummary, ChatbotHealth, ChatbotReply

__all__ = [
    "RentalApiClient",
    "RentalApiError",
    "ApiTransportError",
    "ApiStatusError",
    "AuthenticationRequiredError",
    "ApiResponseError",
    "UnsuccessfulResponseError",
    "BookedCar",
    "BookingSummary",
    "CarSummary",
    "ChatbotHealth",
    "ChatbotReply",
]
