"""Tests for the rental platform HTTP client."""
import json
from datetime import UTC, datetime

import httpx
import pytest

from conftest import make_booking, make_car, json_response
from rentalbot.chat import ActionResolver
from rentalbot.chat.formatters import NO_AVAILABLE_CARS
from rentalbot.client import (
    ApiResponseError,
    ApiStatusError,
    ApiTransportError,
    AuthenticationRequiredError,
    UnsuccessfulResponseError,
)
from rentalbot.llm.models import ChatMessage


class TestListCars:
    """GET /api/user/cars."""

    @pytest.mark.asyncio
    async def test_parses_wire_fields(self, api_client):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return json_response(200, {"success": True, "cars": [make_car(1, available=False), make_car(2)]})

        async with api_client(handler) as api:
            cars = await api.list_cars()

        assert requests[0].method == "GET"
        assert requests[0].url.path == "/api/user/cars"
        assert [car.brand for car in cars] == ["Brand1", "Brand2"]
        assert cars[0].is_available is False
        assert cars[1].is_available is True
        assert cars[0].price_per_day == 1501
        assert cars[0].created_at == datetime(2025, 1, 1, 10, 0, tzinfo=UTC)

    @pytest.mark.asyncio
    async def test_missing_optional_fields(self, api_client):
        car = make_car(1)
        del car["isAvaliable"]
        del car["createdAt"]

        async with api_client(lambda request: json_response(200, {"success": True, "cars": [car]})) as api:
            cars = await api.list_cars()

        assert cars[0].is_available is False
        assert cars[0].created_at is None

    @pytest.mark.asyncio
    async def test_car_without_flag_not_listed_as_available(self, api_client):
        car = make_car(1)
        del car["isAvaliable"]

        async with api_client(lambda request: json_response(200, {"success": True, "cars": [car]})) as api:
            text = await ActionResolver(api, help_delay=0, fallback_delay=0).check_availability()

        assert text == NO_AVAILABLE_CARS

    @pytest.mark.asyncio
    async def test_naive_timestamp_assumed_utc(self, api_client):
        car = make_car(1, createdAt="2025-02-01T08:30:00")

        async with api_client(lambda request: json_response(200, {"success": True, "cars": [car]})) as api:
            cars = await api.list_cars()

        assert cars[0].created_at.tzinfo is not None
        assert cars[0].created_at == datetime(2025, 2, 1, 8, 30, tzinfo=UTC)

    @pytest.mark.asyncio
    async def test_unsuccessful_response(self, api_client):
        body = {"success": False, "message": "Database offline"}

        async with api_client(lambda request: json_response(200, body)) as api:
            with pytest.raises(UnsuccessfulResponseError) as exc_info:
                await api.list_cars()

        assert exc_info.value.message == "Database offline"

    @pytest.mark.asyncio
    async def test_malformed_record(self, api_client):
        car = make_car(1)
        del car["brand"]

        async with api_client(lambda request: json_response(200, {"success": True, "cars": [car]})) as api:
            with pytest.raises(ApiResponseError):
                await api.list_cars()

    @pytest.mark.asyncio
    async def test_missing_list(self, api_client):
        async with api_client(lambda request: json_response(200, {"success": True})) as api:
            with pytest.raises(ApiResponseError):
                await api.list_cars()

    @pytest.mark.asyncio
    async def test_non_json_body(self, api_client):
        async with api_client(lambda request: httpx.Response(200, text="<html>oops</html>")) as api:
            with pytest.raises(ApiResponseError):
                await api.list_cars()

    @pytest.mark.asyncio
    async def test_server_error(self, api_client):
        async with api_client(lambda request: json_response(500, {"success": False})) as api:
            with pytest.raises(ApiStatusError) as exc_info:
                await api.list_cars()

        assert exc_info.value.status_code == 500
        assert exc_info.value.payload == {"success": False}

    @pytest.mark.asyncio
    async def test_transport_error(self, api_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        async with api_client(handler) as api:
            with pytest.raises(ApiTransportError):
                await api.list_cars()


class TestListUserBookings:
    """GET /api/bookings/user."""

    @pytest.mark.asyncio
    async def test_sends_token(self, api_client):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return json_response(200, {"success": True, "bookings": [make_booking(1)]})

        async with api_client(handler, token="session-token") as api:
            bookings = await api.list_user_bookings()

        assert requests[0].url.path == "/api/bookings/user"
        assert requests[0].headers["Authorization"] == "session-token"
        assert bookings[0].car.model == "X1"
        assert bookings[0].pickup_date == datetime(2025, 3, 5, tzinfo=UTC)
        assert bookings[0].price == 12500

    @pytest.mark.asyncio
    async def test_no_token_header_without_token(self, api_client):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return json_response(200, {"success": True, "bookings": []})

        async with api_client(handler) as api:
            assert await api.list_user_bookings() == []

        assert "Authorization" not in requests[0].headers

    @pytest.mark.asyncio
    async def test_unauthorized(self, api_client):
        body = {"success": False, "message": "Not authorized"}

        async with api_client(lambda request: json_response(401, body)) as api:
            with pytest.raises(AuthenticationRequiredError) as exc_info:
                await api.list_user_bookings()

        assert exc_info.value.status_code == 401
        assert isinstance(exc_info.value, ApiStatusError)


class TestChatbotEndpoints:
    """POST /api/chatbot/message and GET /api/chatbot/health."""

    @pytest.mark.asyncio
    async def test_send_chat_message_body(self, api_client):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return json_response(200, {"success": True, "response": "We have SUVs."})

        history = [
            ChatMessage(role="assistant", content="Hi!"),
            ChatMessage(role="user", content="Hello"),
        ]
        async with api_client(handler) as api:
            reply = await api.send_chat_message("Any SUVs?", history)

        body = json.loads(requests[0].content)
        assert requests[0].method == "POST"
        assert requests[0].url.path == "/api/chatbot/message"
        assert body == {
            "message": "Any SUVs?",
            "conversationHistory": [
                {"role": "assistant", "content": "Hi!"},
                {"role": "user", "content": "Hello"},
            ],
        }
        assert reply.success is True
        assert reply.display_text() == "We have SUVs."

    @pytest.mark.asyncio
    async def test_unsuccessful_reply_is_returned(self, api_client):
        body = {"success": False, "message": "Busy", "fallback": "Try the buttons."}

        async with api_client(lambda request: json_response(200, body)) as api:
            reply = await api.send_chat_message("hi")

        assert reply.success is False
        assert reply.display_text() == "Busy\n\nTry the buttons."

    @pytest.mark.asyncio
    async def test_rate_limited_status(self, api_client):
        body = {"success": False, "message": "Too many requests"}

        async with api_client(lambda request: json_response(429, body)) as api:
            with pytest.raises(ApiStatusError) as exc_info:
                await api.send_chat_message("hi")

        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_health(self, api_client):
        body = {"success": True, "message": "Chatbot service is running", "model": "llama-3.3-70b-versatile"}

        async with api_client(lambda request: json_response(200, body)) as api:
            status = await api.chatbot_health()

        assert status.message == "Chatbot service is running"
        assert status.model == "llama-3.3-70b-versatile"

    @pytest.mark.asyncio
    async def test_health_unavailable(self, api_client):
        body = {"success": False, "message": "Chatbot service unavailable", "error": "bad key"}

        async with api_client(lambda request: json_response(500, body)) as api:
            with pytest.raises(ApiStatusError) as exc_info:
                await api.chatbot_health()

        assert exc_info.value.payload["error"] == "bad key"
