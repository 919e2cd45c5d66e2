"""Flatten raw bookings into per-item order records.

A booking from the API carries an ``items`` list; the order screens work
on one item at a time. ``normalize`` turns every booking into one record
per item, keeping the booking id for booking-level API calls and the
untouched booking for fields the flattening does not surface.

Two record shapes exist and every consumer handles both explicitly:

- ``WithItem``: one booking paired with exactly one of its items.
- ``BareBooking``: a booking that arrived without items, passed through
  unchanged for backward compatibility.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping, Union

import structlog

from .wrappers import BookingW, ItemW

logger = structlog.get_logger()


@dataclass(frozen=True)
class WithItem:
    """A booking flattened onto one of its items."""

    booking: Mapping[str, Any]
    item: Mapping[str, Any]

    @property
    def order_id(self) -> Any:
        return self.booking.get("id")

    @property
    def booking_id(self) -> Any:
        return self.booking.get("id")

    @property
    def item_id(self) -> Any:
        return self.item.get("id")

    @property
    def status(self) -> Any:
        return self.item.get("status")

    @property
    def items(self) -> tuple[Mapping[str, Any], ...]:
        return (self.item,)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a field with item fields shadowing booking fields."""
        if key in self.item:
            return self.item[key]
        return self.booking.get(key, default)

    def item_w(self) -> ItemW:
        return ItemW(self.item)

    def booking_w(self) -> BookingW:
        return BookingW(self.booking)

    def with_item_status(self, status: str) -> WithItem:
        """Copy with only the item's status replaced."""
        return replace(self, item={**self.item, "status": status})

    def to_record(self) -> dict[str, Any]:
        """Flat mapping: booking fields, item fields, then back-references."""
        return {
            **self.booking,
            **self.item,
            "orderId": self.booking.get("id"),
            "bookingId": self.booking.get("id"),
            "originalBookingData": self.booking,
            "items": [self.item],
        }


@dataclass(frozen=True)
class BareBooking:
    """A booking without items, kept as-is."""

    booking: Mapping[str, Any]

    @property
    def order_id(self) -> Any:
        return self.booking.get("id")

    @property
    def booking_id(self) -> Any:
        return self.booking.get("id")

    @property
    def item_id(self) -> None:
        return None

    @property
    def status(self) -> Any:
        return self.booking.get("status")

    @property
    def items(self) -> tuple[Mapping[str, Any], ...]:
        return ()

    def get(self, key: str, default: Any = None) -> Any:
        return self.booking.get(key, default)

    def booking_w(self) -> BookingW:
        return BookingW(self.booking)

    def to_record(self) -> dict[str, Any]:
        return dict(self.booking)


NormalizedOrder = Union[WithItem, BareBooking]


def normalize_booking(booking: Mapping[str, Any]) -> list[NormalizedOrder]:
    """Flatten one booking: one WithItem per item, or a single BareBooking."""
    wrapped = BookingW(booking)
    if not wrapped.has_items():
        logger.debug("booking_without_items", booking_id=wrapped.id())
        return [BareBooking(booking)]

    records: list[NormalizedOrder] = []
    for item in wrapped.items():
        record = WithItem(booking=booking, item=item.raw)
        logger.debug(
            "order_item_normalized",
            booking_id=wrapped.id(),
            item_id=item.id(),
            order_number=item.order_number(),
            status=item.status(),
            service_name=item.service_name(),
            provider_name=item.provider_name(),
        )
        records.append(record)
    return records


def normalize(bookings: Iterable[Mapping[str, Any]] | None) -> list[NormalizedOrder]:
    """Flatten bookings into order records, preserving booking and item order.

    Entries that are not mappings are skipped.
    """
    if bookings is None:
        return []

    records: list[NormalizedOrder] = []
    for booking in bookings:
        if not isinstance(booking, Mapping):
            logger.warning("booking_skipped", reason="not a mapping", value_type=type(booking).__name__)
            continue
        records.extend(normalize_booking(booking))
    return records
