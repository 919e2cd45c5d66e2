"""Order store state tree."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional

from .normalizer import NormalizedOrder
from .status import StatusBucket

Collection = tuple[NormalizedOrder, ...]


@dataclass(frozen=True)
class Cursor:
    page: int = 1
    has_more: bool = True


@dataclass(frozen=True)
class OrderCollections:
    """The four status-keyed collections of normalized orders."""

    accepted: Collection = ()
    upcoming: Collection = ()
    completed: Collection = ()
    cancelled: Collection = ()

    def get(self, status: str) -> Collection:
        return getattr(self, StatusBucket(status).value)

    def items(self) -> list[tuple[str, Collection]]:
        return [(f.name, getattr(self, f.name)) for f in fields(self)]


@dataclass(frozen=True)
class Pagination:
    accepted: Cursor = field(default_factory=Cursor)
    upcoming: Cursor = field(default_factory=Cursor)
    completed: Cursor = field(default_factory=Cursor)
    cancelled: Cursor = field(default_factory=Cursor)

    def get(self, status: str) -> Cursor:
        return getattr(self, StatusBucket(status).value)


@dataclass(frozen=True)
class OrderState:
    """Everything the order screens render from.

    ``current_order`` is None both before any detail load and while one is
    in flight; ``order_detail_loading`` tells the two apart.
    """

    orders: OrderCollections = field(default_factory=OrderCollections)
    current_order: Optional[Mapping[str, Any]] = None

    loading: bool = False
    orders_loading: bool = False
    order_detail_loading: bool = False
    refreshing: bool = False

    show_address_details: bool = False
    show_issue_field: bool = False

    error: Optional[str] = None

    pagination: Pagination = field(default_factory=Pagination)

    def is_loading_detail(self) -> bool:
        """True while a detail request is pending and nothing stale is shown."""
        return self.current_order is None and self.order_detail_loading


def initial_state() -> OrderState:
    return OrderState()
