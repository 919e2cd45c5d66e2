"""HTTP client for the bookings API.

One method per endpoint. Every method returns an ApiResponse envelope or
raises a ClientError subclass; raw httpx exceptions never escape.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import httpx
import structlog

from .config import ClientConfig
from .errors import AuthenticationError, DomainError, HTTPError, NetworkError

logger = structlog.get_logger()

NO_BOOKINGS_MESSAGE = "No bookings found."
LIST_KEYS = ("bookings", "data", "orders", "items")

PATH_ORDERS_BY_STATUS = "bookings/status"
PATH_CANCEL = "bookings/cancel"
PATH_RESCHEDULE = "bookings/reschedule"
PATH_PAYMENT = "bookings/payment"
PATH_EXPERIENCE = "booking-experience"
PATH_LATEST_COMPLETED = "booking/latest-completed"
PATH_LATEST_FAILED = "booking/latest-failed"

PAYMENT_STATUS_ONLINE = "Online"


@dataclass(frozen=True)
class PageInfo:
    page: int
    limit: int
    total: int
    total_pages: int


@dataclass(frozen=True)
class ApiResponse:
    """Uniform result of a bookings API call."""

    success: bool
    message: str
    data: Any
    pagination: Optional[PageInfo] = None


@dataclass(frozen=True)
class PartialPaymentRequest:
    item_id: Any
    razorpay_order_id: str
    payment_status: str = PAYMENT_STATUS_ONLINE
    remaining_convenience_charge: Optional[str] = None

    def payload(self) -> dict[str, Any]:
        body = {
            "id": self.item_id,
            "razorpay_order_id": self.razorpay_order_id,
            "payment_status": self.payment_status,
        }
        if self.remaining_convenience_charge:
            body["remaining_convenience_charge"] = self.remaining_convenience_charge
        return body


def _present(value: Any) -> bool:
    """Presence test where an empty list or dict still counts as a value."""
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def extract_list(body: Any) -> list:
    """Pull the booking list out of whichever key the endpoint used."""
    data: Any = None
    if isinstance(body, list):
        data = body
    elif isinstance(body, Mapping):
        for key in LIST_KEYS:
            if _present(body.get(key)):
                data = body[key]
                break

    if isinstance(data, list):
        return data
    if data:
        logger.warning("orders_data_not_a_list", data_type=type(data).__name__)
        return [data]
    return []


def _is_failure(body: Any) -> bool:
    return isinstance(body, Mapping) and body.get("status") is False


def _message(body: Any, default: str) -> str:
    if isinstance(body, Mapping) and body.get("message"):
        return str(body["message"])
    return default


def _envelope(body: Any, success_message: str, failure_message: str, *data_keys: str) -> ApiResponse:
    """Wrap a detail or mutation reply; a ``status: false`` body raises DomainError."""
    if _is_failure(body):
        raise DomainError(_message(body, failure_message))
    data = body
    if isinstance(body, Mapping):
        for key in data_keys:
            if _present(body.get(key)):
                data = body[key]
                break
    return ApiResponse(success=True, message=_message(body, success_message), data=data)


def _body(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return {}


class OrderDataClient:
    """Client for the bookings endpoints."""

    def __init__(self, http: httpx.AsyncClient, page_limit: int = 10):
        self._http = http
        self.page_limit = page_limit

    @classmethod
    def connect(cls, config: ClientConfig) -> OrderDataClient:
        """Create a client for the API described by config."""
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if config.api_token:
            headers["api-token"] = config.api_token
        http = httpx.AsyncClient(
            base_url=config.api_url,
            timeout=config.timeout_seconds,
            headers=headers,
        )
        return cls(http, page_limit=config.page_limit)

    @classmethod
    def from_env(cls) -> OrderDataClient:
        """Connect using ORDERS_* environment variables."""
        return cls.connect(ClientConfig.from_env())

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> Any:
        logger.debug("orders_request", method=method, path=path)
        try:
            response = await self._http.request(method, path, params=params, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(
                "orders_request_failed",
                method=method,
                path=path,
                status_code=status_code,
            )
            if status_code == 401:
                raise AuthenticationError(e) from e
            raise HTTPError(status_code, _message(_body(e.response), "")) from e
        except httpx.TransportError as e:
            logger.warning("orders_request_failed", method=method, path=path, error=str(e))
            raise NetworkError(e) from e
        return _body(response)

    async def list_by_status(self, status: str, page: int = 1, limit: Optional[int] = None) -> ApiResponse:
        """List bookings in one status bucket.

        ``success`` is False when the server says so, except for the
        "No bookings found." reply, which is an empty success.
        """
        limit = limit or self.page_limit
        body = await self._request(
            "GET", PATH_ORDERS_BY_STATUS, params={"status": status, "page": page, "limit": limit}
        )
        orders = extract_list(body)
        no_bookings = _is_failure(body) and body.get("message") == NO_BOOKINGS_MESSAGE

        meta = body if isinstance(body, Mapping) else {}
        total = meta.get("total") or meta.get("count") or len(orders)
        total_pages = meta.get("pages") or meta.get("totalPages") or math.ceil(len(orders) / limit)

        return ApiResponse(
            success=not _is_failure(body) or no_bookings,
            message=_message(body, "Orders fetched successfully"),
            data=orders,
            pagination=PageInfo(page=page, limit=limit, total=total, total_pages=total_pages),
        )

    async def get_detail(self, order_id: Any, item_id: Any) -> ApiResponse:
        """Fetch one booking with the given item."""
        body = await self._request("GET", f"bookings/{order_id}/{item_id}")
        return _envelope(
            body,
            "Order details fetched successfully",
            "Failed to fetch order details",
            "booking",
            "data",
        )

    async def cancel(self, item_id: Any, reason: str) -> ApiResponse:
        body = await self._request(
            "POST", PATH_CANCEL, json={"booking_id": item_id, "cancel_reason": reason}
        )
        return _envelope(body, "Order cancelled successfully", "Failed to cancel order", "data")

    async def reschedule(
        self, item_id: Any, date: str, time_from: str, time_to: str, reason: str
    ) -> ApiResponse:
        body = await self._request(
            "POST",
            PATH_RESCHEDULE,
            json={
                "booking_id": item_id,
                "booking_date": date,
                "booking_time_from": time_from,
                "booking_time_to": time_to,
                "reschedule_reason": reason,
            },
        )
        return _envelope(body, "Order rescheduled successfully", "Failed to reschedule order", "data")

    async def get_payment_details(self, booking_id: Any) -> ApiResponse:
        body = await self._request("POST", PATH_PAYMENT, json={"booking_id": booking_id})
        return _envelope(
            body, "Payment details fetched successfully", "Failed to fetch payment details", "data"
        )

    async def process_partial_payment(self, request: PartialPaymentRequest) -> ApiResponse:
        """Record the gateway payment for the remaining amount of a partial booking."""
        body = await self._request("POST", PATH_PAYMENT, json=request.payload())
        return _envelope(
            body, "Partial payment processed successfully", "Failed to process partial payment", "data"
        )

    async def submit_feedback(self, item_id: Any, rating: int, comment: str) -> ApiResponse:
        body = await self._request(
            "POST", PATH_EXPERIENCE, json={"booking_id": item_id, "rating": rating, "comment": comment}
        )
        return _envelope(body, "Feedback submitted successfully", "Failed to submit feedback", "data")

    async def report_issue(self, item_id: Any, issue: str) -> ApiResponse:
        body = await self._request("POST", PATH_EXPERIENCE, json={"booking_id": item_id, "issue": issue})
        return _envelope(body, "Issue reported successfully", "Failed to report issue", "data")

    async def latest_completed(self) -> ApiResponse:
        body = await self._request("GET", PATH_LATEST_COMPLETED)
        return _envelope(
            body,
            "Latest completed booking fetched successfully",
            "Failed to fetch latest completed booking",
            "data",
        )

    async def latest_failed(self) -> ApiResponse:
        body = await self._request("GET", PATH_LATEST_FAILED)
        return _envelope(
            body,
            "Latest failed booking fetched successfully",
            "Failed to fetch latest failed booking",
            "data",
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()

    async def __aenter__(self) -> OrderDataClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
