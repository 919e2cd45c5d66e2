"""Order status values and the display state machine.

Provides typed status values instead of string literals. The transition
table drives bucket membership and which actions the UI may offer; the
store itself never enforces it.
"""

from enum import StrEnum


class OrderStatus(StrEnum):
    """Item status values reported by the bookings API."""

    INITIATED = "initiated"
    ACCEPTED = "accepted"
    RUNNING = "running"
    PAUSED = "paused"
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    PENDING = "pending"


class StatusBucket(StrEnum):
    """The four status-keyed collections held by the store."""

    ACCEPTED = "accepted"
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.INITIATED: frozenset({OrderStatus.ACCEPTED, OrderStatus.CANCELLED}),
    OrderStatus.ACCEPTED: frozenset({OrderStatus.RUNNING, OrderStatus.CANCELLED}),
    OrderStatus.RUNNING: frozenset(
        {OrderStatus.COMPLETED, OrderStatus.CANCELLED, OrderStatus.PAUSED}
    ),
    OrderStatus.PAUSED: frozenset({OrderStatus.RUNNING, OrderStatus.CANCELLED}),
    OrderStatus.UPCOMING: frozenset({OrderStatus.ACCEPTED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

CANCELLABLE = frozenset({OrderStatus.ACCEPTED, OrderStatus.RUNNING})
RESCHEDULABLE = frozenset({OrderStatus.ACCEPTED})

DISPLAY_LABELS = {
    OrderStatus.INITIATED: "Initiated",
    OrderStatus.ACCEPTED: "Accepted",
    OrderStatus.RUNNING: "In Progress",
    OrderStatus.PAUSED: "Paused",
    OrderStatus.UPCOMING: "Upcoming",
    OrderStatus.COMPLETED: "Completed",
    OrderStatus.CANCELLED: "Cancelled",
    OrderStatus.PENDING: "Pending",
}


def parse_status(value: object) -> OrderStatus | None:
    """Return the OrderStatus for a raw value, or None if unrecognised."""
    if value is None:
        return None
    try:
        return OrderStatus(str(value).lower())
    except ValueError:
        return None


def can_transition(current: object, target: object) -> bool:
    """Return True if target is a legal next status for current."""
    src, dst = parse_status(current), parse_status(target)
    if src is None or dst is None:
        return False
    return dst in TRANSITIONS.get(src, frozenset())


def is_terminal(status: object) -> bool:
    """Completed and cancelled items accept no further transitions."""
    return parse_status(status) in (OrderStatus.COMPLETED, OrderStatus.CANCELLED)


def can_cancel(status: object) -> bool:
    return parse_status(status) in CANCELLABLE


def can_reschedule(status: object) -> bool:
    return parse_status(status) in RESCHEDULABLE


def display_label(status: object) -> str:
    """Human-readable label; unknown statuses pass through unchanged."""
    parsed = parse_status(status)
    if parsed is None:
        return "" if status is None else str(status)
    return DISPLAY_LABELS[parsed]


def bucket_key(api_status: str) -> str:
    """Map an API status name to the store collection key it fills."""
    try:
        return StatusBucket(api_status).value
    except ValueError:
        return api_status.lower()
