"""Order reducer: pure state transitions keyed by action class.

ReducerRouter replaces a manual if/elif chain over action types. Each
handler receives the current state and the action and returns the next
state without mutating either. Branches a handler does not touch keep
their object identity, so subscribers can compare by reference.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Generic, List, Mapping, Optional, TypeVar

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
from .normalizer import BareBooking, NormalizedOrder, WithItem
from .state import Collection, Cursor, OrderState, initial_state
from .status import StatusBucket

logger = structlog.get_logger()

S = TypeVar("S")


class ReducerRouter(Generic[S]):
    """Fluent reducer built from per-action handlers.

    Example::

        router = (
            ReducerRouter(OrderState)
            .on(SetLoading, apply_set_loading)
            .on(SetError, apply_set_error)
        )
        next_state = router.reduce(state, SetLoading(True))
    """

    def __init__(self, state_factory: Callable[[], S]) -> None:
        self._state_factory = state_factory
        self._handlers: List[tuple[type, Callable[[S, Any], S]]] = []

    def on(self, action_type: type, handler: Callable[[S, Any], S]) -> ReducerRouter[S]:
        """Register a handler for an action class.

        Returns:
            Self for chaining.
        """
        self._handlers.append((action_type, handler))
        return self

    def handles(self, action: object) -> bool:
        return any(isinstance(action, t) for t, _ in self._handlers)

    def reduce(self, state: Optional[S], action: object) -> S:
        """Apply one action; unknown actions return the state unchanged."""
        if state is None:
            state = self._state_factory()
        for action_type, handler in self._handlers:
            if isinstance(action, action_type):
                return handler(state, action)
        return state

    def replay(self, actions: list) -> S:
        """Fold a sequence of actions over fresh state."""
        state = self._state_factory()
        for action in actions:
            state = self.reduce(state, action)
        return state


# ============================================================================
# Flag handlers
# ============================================================================


def apply_set_loading(state: OrderState, action: SetLoading) -> OrderState:
    if action.value:
        return replace(state, loading=True, error=None)
    return replace(state, loading=False)


def apply_set_orders_loading(state: OrderState, action: SetOrdersLoading) -> OrderState:
    return replace(state, orders_loading=action.value)


def apply_set_order_detail_loading(state: OrderState, action: SetOrderDetailLoading) -> OrderState:
    return replace(state, order_detail_loading=action.value)


def apply_set_refreshing(state: OrderState, action: SetRefreshing) -> OrderState:
    return replace(state, refreshing=action.value)


def apply_set_error(state: OrderState, action: SetError) -> OrderState:
    return replace(
        state,
        error=action.message,
        loading=False,
        orders_loading=False,
        order_detail_loading=False,
        refreshing=False,
    )


def apply_reset_error(state: OrderState, _action: ResetError) -> OrderState:
    return replace(state, error=None)


def apply_toggle_address_details(state: OrderState, _action: ToggleAddressDetails) -> OrderState:
    return replace(state, show_address_details=not state.show_address_details)


def apply_toggle_issue_field(state: OrderState, _action: ToggleIssueField) -> OrderState:
    return replace(state, show_issue_field=not state.show_issue_field)


# ============================================================================
# Collection handlers
# ============================================================================


def _as_collection(value: Any) -> Collection:
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return ()


def apply_set_orders(state: OrderState, action: SetOrders) -> OrderState:
    try:
        bucket = StatusBucket(action.status).value
    except ValueError:
        logger.warning("unknown_order_bucket", status=action.status)
        return state

    incoming = _as_collection(action.orders)
    if action.append:
        incoming = _as_collection(getattr(state.orders, bucket)) + incoming

    changes: dict[str, Any] = {
        "orders": replace(state.orders, **{bucket: incoming}),
        "error": None,
        "loading": False,
        "orders_loading": False,
    }
    if action.settle_refreshing:
        changes["refreshing"] = False
    return replace(state, **changes)


def apply_set_pagination(state: OrderState, action: SetPagination) -> OrderState:
    bucket = StatusBucket(action.status).value
    cursor = Cursor(page=action.page, has_more=action.has_more)
    return replace(state, pagination=replace(state.pagination, **{bucket: cursor}))


def apply_set_current_order(state: OrderState, action: SetCurrentOrder) -> OrderState:
    return replace(
        state,
        current_order=action.order,
        order_detail_loading=False,
        loading=False,
        error=None,
    )


def apply_clear_current_order(state: OrderState, _action: ClearCurrentOrder) -> OrderState:
    return replace(state, current_order=None, order_detail_loading=True, error=None)


# ============================================================================
# Targeted status patch
# ============================================================================


def same_id(left: Any, right: Any) -> bool:
    """Compare ids that may arrive as int from the API and str from a route."""
    if left is None or right is None:
        return False
    return left == right or str(left) == str(right)


def _patch_items(items: Any, item_id: Any, new_status: str) -> Optional[list]:
    """Return a new items list with the matching item patched, or None if no match."""
    if not isinstance(items, (list, tuple)):
        return None
    patched, hit = [], False
    for item in items:
        if isinstance(item, Mapping) and same_id(item.get("id"), item_id):
            patched.append({**item, "status": new_status})
            hit = True
        else:
            patched.append(item)
    return patched if hit else None


def _patch_current_order(
    order: Optional[Mapping[str, Any]], item_id: Any, new_status: str
) -> Optional[Mapping[str, Any]]:
    if order is None:
        return None
    items = _patch_items(order.get("items"), item_id, new_status)
    if items is None:
        return order
    return {**order, "items": items}


def _record_matches_order(record: NormalizedOrder, order_id: Any) -> bool:
    if order_id is None:
        return True
    return same_id(record.order_id, order_id) or same_id(record.get("id"), order_id)


def _patch_record(record: NormalizedOrder, action: UpdateOrderStatus) -> NormalizedOrder:
    if isinstance(record, WithItem):
        if _record_matches_order(record, action.order_id) and same_id(record.item_id, action.item_id):
            return record.with_item_status(action.new_status)
        return record
    if isinstance(record, BareBooking):
        return record
    raise TypeError(f"unexpected order record type: {type(record).__name__}")


def _patch_collection(collection: Collection, action: UpdateOrderStatus) -> Collection:
    patched = tuple(_patch_record(r, action) for r in collection)
    if all(a is b for a, b in zip(patched, collection)):
        return collection
    return patched


def apply_update_order_status(state: OrderState, action: UpdateOrderStatus) -> OrderState:
    current = _patch_current_order(state.current_order, action.item_id, action.new_status)

    buckets = {
        name: _patch_collection(collection, action)
        for name, collection in state.orders.items()
    }
    changed = {
        name: collection
        for name, collection in buckets.items()
        if collection is not getattr(state.orders, name)
    }

    if current is state.current_order and not changed:
        return state

    orders = replace(state.orders, **changed) if changed else state.orders
    return replace(state, current_order=current, orders=orders)


# ============================================================================
# Router
# ============================================================================

# order_reducer is the single source of truth for action -> handler mapping.
order_reducer: ReducerRouter[OrderState] = (
    ReducerRouter(initial_state)
    .on(SetLoading, apply_set_loading)
    .on(SetOrdersLoading, apply_set_orders_loading)
    .on(SetOrderDetailLoading, apply_set_order_detail_loading)
    .on(SetRefreshing, apply_set_refreshing)
    .on(SetOrders, apply_set_orders)
    .on(SetPagination, apply_set_pagination)
    .on(SetCurrentOrder, apply_set_current_order)
    .on(ClearCurrentOrder, apply_clear_current_order)
    .on(SetError, apply_set_error)
    .on(ResetError, apply_reset_error)
    .on(ToggleAddressDetails, apply_toggle_address_details)
    .on(ToggleIssueField, apply_toggle_issue_field)
    .on(UpdateOrderStatus, apply_update_order_status)
)


def reduce(state: Optional[OrderState], action: object) -> OrderState:
    """Apply one action to the order state."""
    return order_reducer.reduce(state, action)
