"""Order operations exposed to the order screens.

Each operation dispatches actions into the Store around one or more
OrderDataClient calls. Service failures never escape: a ClientError is
turned into the ``error`` state field plus an error notification, and the
caller gets an OperationResult to branch on.

Example::

    store = Store()
    async with OrderDataClient.from_env() as client:
        ops = OrderOperations(store, client)
        result = await ops.fetch_orders("accepted")
        if not result.success:
            ...
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import structlog

from .actions import (
    ClearCurrentOrder,
    ResetError,
    SetCurrentOrder,
    SetError,
    SetLoading,
    SetOrderDetailLoading,
    SetOrders,
    SetOrdersLoading,
    SetPagination,
    SetRefreshing,
    ToggleAddressDetails,
    ToggleIssueField,
    UpdateOrderStatus,
)
from .client import NO_BOOKINGS_MESSAGE, ApiResponse, OrderDataClient, PartialPaymentRequest
from .config import DEFAULT_PAGE_LIMIT
from .errors import ClientError, DomainError
from .normalizer import normalize
from .notifications import LoggingNotifier, Notifier
from .status import OrderStatus, StatusBucket, bucket_key
from .store import RequestScope, Store
from .validation import require_id, require_rating, require_text

logger = structlog.get_logger()

STALE_RESPONSE_MESSAGE = "Request superseded"
REFRESH_SUCCESS_MESSAGE = "Orders refreshed successfully"
INVALID_DETAIL_MESSAGE = "Order details are unavailable"
BUCKETS = frozenset(b.value for b in StatusBucket)


@dataclass(frozen=True)
class OperationResult:
    """Outcome of an operation; ``data`` carries the payload when there is one."""

    success: bool
    message: str = ""
    data: Any = None


def _listed(response: ApiResponse) -> bool:
    """A list reply is usable when successful or when it only says nothing was found."""
    return response.success or response.message == NO_BOOKINGS_MESSAGE


def _charge_text(value: Any) -> Optional[str]:
    """Remaining convenience charge as sent to the API; zero or blank means none."""
    if value is None or value == "":
        return None
    try:
        if float(value) <= 0:
            return None
    except (TypeError, ValueError):
        return None
    return str(value)


class OrderOperations:
    """Fetch, refresh and mutate orders through a Store."""

    def __init__(
        self,
        store: Store,
        client: OrderDataClient,
        notifier: Optional[Notifier] = None,
        page_limit: int = DEFAULT_PAGE_LIMIT,
    ) -> None:
        self.store = store
        self._client = client
        self._notifier = notifier if notifier is not None else LoggingNotifier()
        self.page_limit = page_limit
        self._detail_seq = 0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _fail(self, operation: str, error: ClientError) -> OperationResult:
        message = error.message
        logger.warning("order_operation_failed", operation=operation, error=str(error))
        self.store.dispatch(SetError(message))
        self._notifier.show_error(message)
        return OperationResult(success=False, message=message)

    def _succeed(self, message: str, data: Any = None) -> OperationResult:
        self._notifier.show_success(message)
        return OperationResult(success=True, message=message, data=data)

    @staticmethod
    def _dropped(operation: str, scope: Optional[RequestScope]) -> bool:
        if scope is not None and scope.cancelled:
            logger.info("stale_response_dropped", operation=operation, scope=scope.name)
            return True
        return False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def fetch_orders(
        self,
        status: str,
        page: int = 1,
        append: bool = False,
        scope: Optional[RequestScope] = None,
    ) -> OperationResult:
        """Load one page of a status bucket.

        The first page replaces the bucket; ``append=True`` extends it and
        leaves ``orders_loading`` alone so the list stays on screen. A
        dropped or cancelled request still lowers ``orders_loading``.
        """
        if not append:
            self.store.dispatch(SetOrdersLoading(True))
        self.store.dispatch(ResetError())

        try:
            require_text(status, "status")
            response = await self._client.list_by_status(status, page, self.page_limit)
            if not _listed(response):
                raise DomainError(response.message or "Failed to fetch orders")
        except ClientError as e:
            if self._dropped("fetch_orders", scope):
                return self._stale_orders(append)
            return self._fail("fetch_orders", e)
        except asyncio.CancelledError:
            self._stale_orders(append)
            raise

        if self._dropped("fetch_orders", scope):
            return self._stale_orders(append)

        bookings = response.data if isinstance(response.data, list) else []
        records = normalize(bookings)
        key = bucket_key(status)
        self.store.dispatch(SetOrders(status=key, orders=records, append=append))
        if key in BUCKETS:
            self.store.dispatch(
                SetPagination(status=key, page=page, has_more=len(bookings) >= self.page_limit)
            )
        logger.info("orders_fetched", status=key, page=page, bookings=len(bookings), records=len(records))
        return OperationResult(success=True, message=response.message, data=records)

    def _stale_orders(self, append: bool) -> OperationResult:
        if not append:
            self.store.dispatch(SetOrdersLoading(False))
        return OperationResult(success=False, message=STALE_RESPONSE_MESSAGE)

    async def fetch_order_detail(
        self, order_id: Any, item_id: Any, scope: Optional[RequestScope] = None
    ) -> OperationResult:
        """Load one order for the detail screen.

        The previous detail is cleared before the request starts. Only the
        newest detail request may write ``current_order``; an older one
        that resolves late is dropped and leaves the loading flag to the
        newer request.
        """
        self.store.dispatch(ClearCurrentOrder())
        self._detail_seq += 1
        seq = self._detail_seq

        try:
            require_id(order_id, "order_id")
            require_id(item_id, "item_id")
            response = await self._client.get_detail(order_id, item_id)
            if not response.success:
                raise DomainError(response.message or "Failed to fetch order details")
            if not isinstance(response.data, Mapping):
                raise DomainError(INVALID_DETAIL_MESSAGE)
        except ClientError as e:
            if self._superseded(seq, scope):
                return OperationResult(success=False, message=STALE_RESPONSE_MESSAGE)
            return self._fail("fetch_order_detail", e)
        except asyncio.CancelledError:
            if seq == self._detail_seq:
                self.store.dispatch(SetOrderDetailLoading(False))
            raise

        if self._superseded(seq, scope):
            return OperationResult(success=False, message=STALE_RESPONSE_MESSAGE)

        order = response.data
        self.store.dispatch(SetCurrentOrder(order))
        return OperationResult(success=True, message=response.message, data=order)

    def _superseded(self, seq: int, scope: Optional[RequestScope]) -> bool:
        """True when this detail response must not be applied.

        A cancelled scope on the newest request also lowers the detail
        loading flag, since no newer request will.
        """
        if seq != self._detail_seq:
            logger.info("stale_response_dropped", operation="fetch_order_detail", seq=seq, latest=self._detail_seq)
            return True
        if self._dropped("fetch_order_detail", scope):
            self.store.dispatch(SetOrderDetailLoading(False))
            return True
        return False

    async def _refresh_bucket(self, bucket: StatusBucket, scope: Optional[RequestScope]) -> bool:
        try:
            response = await self._client.list_by_status(bucket.value, 1, self.page_limit)
            if not _listed(response):
                raise DomainError(response.message or "Failed to fetch orders")
        except ClientError as e:
            logger.warning("orders_refresh_failed", status=bucket.value, error=str(e))
            return False

        if self._dropped(f"refresh_orders:{bucket.value}", scope):
            return True

        bookings = response.data if isinstance(response.data, list) else []
        self.store.dispatch(
            SetOrders(status=bucket.value, orders=normalize(bookings), settle_refreshing=False)
        )
        self.store.dispatch(
            SetPagination(status=bucket.value, page=1, has_more=len(bookings) >= self.page_limit)
        )
        return True

    async def refresh_orders(self, scope: Optional[RequestScope] = None) -> OperationResult:
        """Reload the first page of all four buckets concurrently.

        A failing bucket keeps its previous contents and does not hold up
        the others. ``refreshing`` stays set until every bucket settled.
        Buckets that resolve after ``scope`` was cancelled are not applied.
        ``data`` lists the buckets that failed.
        """
        self.store.dispatch(SetRefreshing(True))
        buckets = list(StatusBucket)
        try:
            outcomes = await asyncio.gather(*(self._refresh_bucket(b, scope) for b in buckets))
        finally:
            self.store.dispatch(SetRefreshing(False))

        failed = [b.value for b, ok in zip(buckets, outcomes) if not ok]
        if self._dropped("refresh_orders", scope):
            return OperationResult(success=False, message=STALE_RESPONSE_MESSAGE, data=failed)
        logger.info("orders_refreshed", failed=failed)
        return self._succeed(REFRESH_SUCCESS_MESSAGE, data=failed)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def cancel_order(self, booking_id: Any, reason: str) -> OperationResult:
        """Cancel an item and mark it cancelled wherever the store holds it.

        The item stays in its current bucket until the next refresh.
        """
        self.store.dispatch(SetLoading(True))
        try:
            require_id(booking_id, "booking_id")
            require_text(reason, "reason")
            response = await self._client.cancel(booking_id, reason)
            if not response.success:
                raise DomainError(response.message or "Failed to cancel order")
            self.store.dispatch(
                UpdateOrderStatus(item_id=booking_id, new_status=OrderStatus.CANCELLED.value)
            )
            return self._succeed("Order cancelled successfully")
        except ClientError as e:
            return self._fail("cancel_order", e)
        finally:
            self.store.dispatch(SetLoading(False))

    async def reschedule_order(
        self, booking_id: Any, date: str, time_from: str, time_to: str, reason: str
    ) -> OperationResult:
        """Reschedule an item, then reload the open detail view if there is one."""
        self.store.dispatch(SetLoading(True))
        try:
            require_id(booking_id, "booking_id")
            require_text(date, "date")
            require_text(time_from, "time_from")
            require_text(time_to, "time_to")
            require_text(reason, "reason")
            response = await self._client.reschedule(booking_id, date, time_from, time_to, reason)
            if not response.success:
                raise DomainError(response.message or "Failed to reschedule order")
            result = self._succeed("Order rescheduled successfully")
            await self._reload_current_order()
            return result
        except ClientError as e:
            return self._fail("reschedule_order", e)
        finally:
            self.store.dispatch(SetLoading(False))

    async def _reload_current_order(self) -> None:
        current = self.store.state.current_order
        if not current:
            return
        items = current.get("items")
        if not isinstance(items, (list, tuple)) or not items or not isinstance(items[0], Mapping):
            return
        order_id = current.get("orderId") or current.get("id")
        await self.fetch_order_detail(order_id, items[0].get("id"))

    async def submit_feedback(self, booking_id: Any, rating: int, comment: str) -> OperationResult:
        self.store.dispatch(SetLoading(True))
        try:
            require_id(booking_id, "booking_id")
            require_rating(rating)
            response = await self._client.submit_feedback(booking_id, rating, comment or "")
            if not response.success:
                raise DomainError(response.message or "Failed to submit feedback")
            return self._succeed("Feedback submitted successfully")
        except ClientError as e:
            return self._fail("submit_feedback", e)
        finally:
            self.store.dispatch(SetLoading(False))

    async def report_issue(self, booking_id: Any, issue: str) -> OperationResult:
        self.store.dispatch(SetLoading(True))
        try:
            require_id(booking_id, "booking_id")
            require_text(issue, "issue")
            response = await self._client.report_issue(booking_id, issue)
            if not response.success:
                raise DomainError(response.message or "Failed to report issue")
            return self._succeed("Issue reported successfully")
        except ClientError as e:
            return self._fail("report_issue", e)
        finally:
            self.store.dispatch(SetLoading(False))

    async def process_partial_payment(
        self,
        order_id: Any,
        item_id: Any,
        payment_id: str,
        remaining_convenience_charge: Any = None,
    ) -> OperationResult:
        """Record a gateway payment for the unpaid part of a booking.

        On success the detail view for ``(order_id, item_id)`` is reloaded.
        """
        self.store.dispatch(SetLoading(True))
        try:
            require_id(order_id, "order_id")
            require_id(item_id, "item_id")
            require_text(payment_id, "payment_id")
            request = PartialPaymentRequest(
                item_id=item_id,
                razorpay_order_id=payment_id,
                remaining_convenience_charge=_charge_text(remaining_convenience_charge),
            )
            response = await self._client.process_partial_payment(request)
            if not response.success:
                raise DomainError(response.message or "Failed to process partial payment")
            result = self._succeed("Partial payment processed successfully", data=response.data)
            await self.fetch_order_detail(order_id, item_id)
            return result
        except ClientError as e:
            return self._fail("process_partial_payment", e)
        finally:
            self.store.dispatch(SetLoading(False))

    # ------------------------------------------------------------------
    # UI flags
    # ------------------------------------------------------------------

    def toggle_address_details(self) -> None:
        self.store.dispatch(ToggleAddressDetails())

    def toggle_issue_field(self) -> None:
        self.store.dispatch(ToggleIssueField())

    def clear_error(self) -> None:
        self.store.dispatch(ResetError())

    def clear_current_order(self) -> None:
        self.store.dispatch(ClearCurrentOrder())
