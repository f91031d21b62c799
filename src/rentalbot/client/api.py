import logging
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from ..llm.models import ChatMessage
from .errors import (
    ApiResponseError,
    ApiStatusError,
    ApiTransportError,
    AuthenticationRequiredError,
    UnsuccessfulResponseError,
)
from .models import BookingSummary, CarSummary, ChatbotHealth, ChatbotReply

logger = logging.getLogger(__name__)

_CARS = TypeAdapter(list[CarSummary])
_BOOKINGS = TypeAdapter(list[BookingSummary])


class RentalApiClient:
    """Async client for the rental platform's REST API.

    Hidden design decisions:
    - HTTP library and connection pooling (httpx)
    - How the session token is sent
    - Translation of transport failures and status codes into
      ``rentalbot.client.errors``
    - Validation of response bodies into typed records

    Usage:
        async with RentalApiClient("http://localhost:3000", token=token) as api:
            cars = await api.list_cars()
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = token
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as exc:
            raise ApiTransportError(f"{method} {path} failed: {exc}") from exc

        payload = _json_or_none(response)
        if response.status_code == 401:
            raise AuthenticationRequiredError(payload)
        if response.is_error:
            raise ApiStatusError(response.status_code, payload)
        if payload is None:
            raise ApiResponseError(f"{method} {path} returned a non-JSON body")
        return payload

    async def _get_records(self, path: str, key: str, adapter: TypeAdapter) -> list:
        payload = await self._request("GET", path)
        if not isinstance(payload, dict):
            raise ApiResponseError(f"GET {path} returned {type(payload).__name__}, expected an object")
        if not payload.get("success"):
            raise UnsuccessfulResponseError(payload.get("message"))
        try:
            return adapter.validate_python(payload.get(key))
        except ValidationError as exc:
            raise ApiResponseError(f"GET {path} returned malformed {key}: {exc}") from exc

    async def list_cars(self) -> list[CarSummary]:
        """Fetch every listed car.

        Raises:
            ApiTransportError: The platform could not be reached
            ApiStatusError: Non-2xx status
            UnsuccessfulResponseError: The platform answered ``success: false``
            ApiResponseError: The body did not match the documented shape
        """
        return await self._get_records("/api/user/cars", "cars", _CARS)

    async def list_user_bookings(self) -> list[BookingSummary]:
        """Fetch the current user's bookings.

        Raises:
            AuthenticationRequiredError: No logged-in user (HTTP 401)
            ApiTransportError, ApiStatusError, UnsuccessfulResponseError,
            ApiResponseError: As for ``list_cars``
        """
        return await self._get_records("/api/bookings/user", "bookings", _BOOKINGS)

    async def send_chat_message(self, message: str, history: Sequence[ChatMessage] = ()) -> ChatbotReply:
        """Forward free text to the chatbot backend.

        A 2xx body with ``success: false`` is returned as-is; non-2xx statuses
        raise ``ApiStatusError`` regardless of the body.
        """
        body = {
            "message": message,
            "conversationHistory": [msg.model_dump() for msg in history],
        }
        payload = await self._request("POST", "/api/chatbot/message", json=body)
        try:
            return ChatbotReply.model_validate(payload)
        except ValidationError as exc:
            raise ApiResponseError(f"Malformed chatbot reply: {exc}") from exc

    async def chatbot_health(self) -> ChatbotHealth:
        """Probe the chatbot backend.

        Raises:
            ApiStatusError: The backend reported itself unavailable; the
                parsed body is in ``payload``
        """
        payload = await self._request("GET", "/api/chatbot/health")
        try:
            return ChatbotHealth.model_validate(payload)
        except ValidationError as exc:
            raise ApiResponseError(f"Malformed health response: {exc}") from exc

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> "RentalApiClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        logger.debug("Non-JSON response body from %s", response.request.url)
        return None
