"""Tests for OrderDataClient against a mock transport."""

import json

import httpx
import pytest

from booking_orders.client import (
    ApiResponse,
    OrderDataClient,
    PageInfo,
    PartialPaymentRequest,
    extract_list,
)
from booking_orders.config import ClientConfig
from booking_orders.errors import (
    AUTH_REQUIRED_MESSAGE,
    NETWORK_ERROR_MESSAGE,
    AuthenticationError,
    DomainError,
    HTTPError,
    NetworkError,
)

from .fixtures import list_body, make_booking, no_bookings_body

BASE_URL = "https://api.test/api/"


def client_for(handler, page_limit: int = 10) -> tuple[OrderDataClient, list]:
    """Client whose transport records requests and answers with handler(request)."""
    seen: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    http = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(record))
    return OrderDataClient(http, page_limit=page_limit), seen


def replying(body, status_code: int = 200):
    return lambda request: httpx.Response(status_code, json=body)


class TestExtractList:
    """Tests for pulling the booking list out of a reply."""

    def test_keys_in_order(self) -> None:
        assert extract_list({"bookings": [1], "data": [2]}) == [1]
        assert extract_list({"data": [2]}) == [2]
        assert extract_list({"orders": [3]}) == [3]
        assert extract_list({"items": [4]}) == [4]

    def test_empty_list_counts_as_present(self) -> None:
        assert extract_list({"bookings": [], "data": [2]}) == []

    def test_bare_list(self) -> None:
        assert extract_list([1, 2]) == [1, 2]

    def test_single_object_wrapped(self) -> None:
        assert extract_list({"data": {"id": 1}}) == [{"id": 1}]

    def test_falsy_is_empty(self) -> None:
        assert extract_list({"data": None}) == []
        assert extract_list(None) == []
        assert extract_list("") == []


class TestListByStatus:
    """Tests for the status listing endpoint."""

    @pytest.mark.asyncio
    async def test_request_and_envelope(self) -> None:
        bookings = [make_booking(booking_id=1), make_booking(booking_id=2)]
        client, seen = client_for(replying(list_body(bookings, total=12, pages=6)), page_limit=2)

        response = await client.list_by_status("accepted", page=3)

        assert response.success is True
        assert response.data == bookings
        assert response.pagination == PageInfo(page=3, limit=2, total=12, total_pages=6)
        (request,) = seen
        assert request.method == "GET"
        assert request.url.path == "/api/bookings/status"
        assert dict(request.url.params) == {"status": "accepted", "page": "3", "limit": "2"}

    @pytest.mark.asyncio
    async def test_pagination_fallback(self) -> None:
        client, _ = client_for(replying({"data": [{"id": 1}, {"id": 2}, {"id": 3}]}))
        response = await client.list_by_status("completed", limit=2)
        assert response.pagination == PageInfo(page=1, limit=2, total=3, total_pages=2)

    @pytest.mark.asyncio
    async def test_no_bookings_is_empty_success(self) -> None:
        client, _ = client_for(replying(no_bookings_body()))
        response = await client.list_by_status("cancelled")
        assert response.success is True
        assert response.data == []
        assert response.message == "No bookings found."

    @pytest.mark.asyncio
    async def test_status_false_is_failure(self) -> None:
        client, _ = client_for(replying({"status": False, "message": "Unknown status"}))
        response = await client.list_by_status("archived")
        assert response.success is False
        assert response.message == "Unknown status"


class TestDetailAndMutations:
    """Tests for detail and mutation endpoints."""

    @pytest.mark.asyncio
    async def test_get_detail_prefers_booking_key(self) -> None:
        booking = make_booking(booking_id=10)
        client, seen = client_for(replying({"status": True, "booking": booking}))

        response = await client.get_detail(10, 5)

        assert response == ApiResponse(
            success=True, message="Order details fetched successfully", data=booking
        )
        assert seen[0].url.path == "/api/bookings/10/5"

    @pytest.mark.asyncio
    async def test_get_detail_whole_body_fallback(self) -> None:
        client, _ = client_for(replying({"id": 10, "items": []}))
        response = await client.get_detail(10, 5)
        assert response.data == {"id": 10, "items": []}

    @pytest.mark.asyncio
    async def test_status_false_raises_domain_error(self) -> None:
        client, _ = client_for(replying({"status": False, "message": "Too late to cancel"}))
        with pytest.raises(DomainError) as exc_info:
            await client.cancel(5, "Changed plans")
        assert exc_info.value.message == "Too late to cancel"

    @pytest.mark.asyncio
    async def test_cancel_payload(self) -> None:
        client, seen = client_for(replying({"status": True, "message": "Cancelled"}))

        response = await client.cancel(5, "Changed plans")

        assert response.success is True
        assert response.message == "Cancelled"
        assert seen[0].method == "POST"
        assert seen[0].url.path == "/api/bookings/cancel"
        assert json.loads(seen[0].content) == {"booking_id": 5, "cancel_reason": "Changed plans"}

    @pytest.mark.asyncio
    async def test_reschedule_payload(self) -> None:
        client, seen = client_for(replying({"status": True}))
        await client.reschedule(5, "2024-06-02", "09:00", "10:00", "Travel")
        assert json.loads(seen[0].content) == {
            "booking_id": 5,
            "booking_date": "2024-06-02",
            "booking_time_from": "09:00",
            "booking_time_to": "10:00",
            "reschedule_reason": "Travel",
        }

    @pytest.mark.asyncio
    async def test_feedback_and_issue_share_endpoint(self) -> None:
        client, seen = client_for(replying({"status": True}))
        await client.submit_feedback(5, 4, "Great")
        await client.report_issue(5, "Late arrival")
        assert [r.url.path for r in seen] == ["/api/booking-experience"] * 2
        assert json.loads(seen[0].content) == {"booking_id": 5, "rating": 4, "comment": "Great"}
        assert json.loads(seen[1].content) == {"booking_id": 5, "issue": "Late arrival"}

    @pytest.mark.asyncio
    async def test_partial_payment_payload(self) -> None:
        client, seen = client_for(replying({"status": True, "data": {"paid": True}}))

        response = await client.process_partial_payment(
            PartialPaymentRequest(item_id=5, razorpay_order_id="pay_123", remaining_convenience_charge="19")
        )

        assert response.data == {"paid": True}
        assert seen[0].url.path == "/api/bookings/payment"
        assert json.loads(seen[0].content) == {
            "id": 5,
            "razorpay_order_id": "pay_123",
            "payment_status": "Online",
            "remaining_convenience_charge": "19",
        }

    def test_partial_payment_omits_empty_charge(self) -> None:
        payload = PartialPaymentRequest(item_id=5, razorpay_order_id="pay_123").payload()
        assert "remaining_convenience_charge" not in payload

    @pytest.mark.asyncio
    async def test_latest_bookings(self) -> None:
        client, seen = client_for(replying({"status": True, "data": {"id": 1}}))
        assert (await client.latest_completed()).data == {"id": 1}
        assert (await client.latest_failed()).data == {"id": 1}
        assert [r.url.path for r in seen] == [
            "/api/booking/latest-completed",
            "/api/booking/latest-failed",
        ]

    @pytest.mark.asyncio
    async def test_empty_body(self) -> None:
        client, _ = client_for(lambda request: httpx.Response(200))
        response = await client.get_payment_details(100)
        assert response.success is True
        assert response.data == {}


class TestErrorTranslation:
    """Tests for transport failure translation."""

    @pytest.mark.asyncio
    async def test_401(self) -> None:
        client, _ = client_for(replying({"message": "token expired"}, status_code=401))
        with pytest.raises(AuthenticationError) as exc_info:
            await client.list_by_status("accepted")
        assert exc_info.value.message == AUTH_REQUIRED_MESSAGE

    @pytest.mark.asyncio
    async def test_http_error_uses_body_message(self) -> None:
        client, _ = client_for(replying({"message": "Booking not cancellable"}, status_code=422))
        with pytest.raises(HTTPError) as exc_info:
            await client.cancel(5, "x")
        assert exc_info.value.status_code == 422
        assert exc_info.value.message == "Booking not cancellable"

    @pytest.mark.asyncio
    async def test_http_error_status_text(self) -> None:
        client, _ = client_for(lambda request: httpx.Response(503, text="upstream down"))
        with pytest.raises(HTTPError) as exc_info:
            await client.get_detail(1, 2)
        assert exc_info.value.message == "Server error. Please try again later."

    @pytest.mark.asyncio
    async def test_no_response(self) -> None:
        def fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        client, _ = client_for(fail)
        with pytest.raises(NetworkError) as exc_info:
            await client.list_by_status("accepted")
        assert exc_info.value.message == NETWORK_ERROR_MESSAGE


class TestConnect:
    @pytest.mark.asyncio
    async def test_connect_applies_config(self) -> None:
        config = ClientConfig(base_url="https://orders.test", api_token="secret", page_limit=5)
        client = OrderDataClient.connect(config)
        try:
            assert str(client._http.base_url) == "https://orders.test/api/"
            assert client._http.headers["api-token"] == "secret"
            assert client.page_limit == 5
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_no_token_no_header(self) -> None:
        async with OrderDataClient.connect(ClientConfig()) as client:
            assert "api-token" not in client._http.headers
