"""Wrapper classes for raw booking payloads.

Each wrapper takes a payload mapping in its constructor and provides
typed accessors as instance methods. Wrappers never copy or modify the
mapping they wrap.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, List, Mapping, Optional

INVOICE_PLACEHOLDER = "no-image.png"
DEFAULT_SERVICE_NAME = "Service"
DEFAULT_PROVIDER_NAME = "Provider"


def to_decimal(value: Any) -> Decimal:
    """Parse an API amount ("120.50", 120, None) into a Decimal, 0 on failure."""
    if value is None or value == "":
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")


def _first(mapping: Mapping[str, Any], *keys: str) -> Any:
    """Return the first truthy value among keys (API mixes snake and camel case)."""
    for key in keys:
        value = mapping.get(key)
        if value:
            return value
    return None


class ItemW:
    """Wrapper for one bookable service item."""

    def __init__(self, raw: Mapping[str, Any]) -> None:
        self.raw = raw

    def id(self) -> Any:
        return self.raw.get("id")

    def status(self) -> Optional[str]:
        return self.raw.get("status")

    def order_number(self) -> Any:
        return _first(self.raw, "order_id", "orderId")

    def total_amount(self) -> Decimal:
        return to_decimal(_first(self.raw, "total_amount", "totalAmount"))

    def is_partial(self) -> bool:
        value = _first(self.raw, "is_partial", "isPartial")
        try:
            return int(value) == 1
        except (TypeError, ValueError):
            return False

    def provider(self) -> Mapping[str, Any]:
        return self.raw.get("provider") or {}

    def provider_name(self) -> str:
        provider = self.provider()
        first = _first(provider, "first_name", "firstName") or ""
        last = _first(provider, "last_name", "lastName") or ""
        return f"{first} {last}".strip() or DEFAULT_PROVIDER_NAME

    def provider_phone(self) -> str:
        return self.provider().get("phone") or ""

    def provider_image(self) -> str:
        return self.provider().get("image") or ""

    def rate_card(self) -> Mapping[str, Any]:
        return _first(self.raw, "rateCard", "rate_card") or {}

    def service_name(self) -> str:
        """Subcategory name, then category name, then a generic label."""
        card = self.rate_card()
        for key in ("subcategory", "category"):
            name = (card.get(key) or {}).get("name")
            if name:
                return name
        return DEFAULT_SERVICE_NAME

    def service_image(self) -> str:
        card = self.rate_card()
        return (card.get("subcategory") or {}).get("image") or card.get("image") or ""

    def strike_price(self) -> Decimal:
        return to_decimal(_first(self.rate_card(), "strike_price", "strikePrice"))

    def address_line(self) -> str:
        """Comma-joined address, skipping empty parts."""
        address = self.raw.get("address") or {}
        parts = [
            _first(address, "flat_no", "flatNo"),
            _first(address, "building_name", "buildingName"),
            _first(address, "street_address", "streetAddress"),
            address.get("city"),
            address.get("state"),
            _first(address, "postal_code", "postalCode"),
        ]
        return ", ".join(str(p) for p in parts if p)

    def booking_date(self) -> Optional[str]:
        return _first(self.raw, "booking_date", "bookingDate")

    def time_window(self) -> tuple[Optional[str], Optional[str]]:
        return (
            _first(self.raw, "booking_time_from", "bookingTimeFrom"),
            _first(self.raw, "booking_time_to", "bookingTimeTo"),
        )

    def otp_pair(self) -> tuple[Optional[str], Optional[str]]:
        """(start, end) service OTPs as strings, None where absent."""
        start = self.raw.get("start_service_otp")
        end = self.raw.get("end_service_otp")
        return (
            None if start in (None, "") else str(start),
            None if end in (None, "") else str(end),
        )

    def cancellation(self) -> Optional[dict[str, Any]]:
        """Actor, reason and comment for a cancelled item, or None."""
        actor = _first(self.raw, "cancel_by", "cancelBy")
        reason = _first(self.raw, "cancel_reason", "cancelReason")
        comment = _first(self.raw, "cancel_comment", "cancelComment")
        if not (actor or reason or comment):
            return None
        return {"by": actor, "reason": reason, "comment": comment}

    def feedback(self) -> Optional[Mapping[str, Any]]:
        feedback = self.raw.get("feedback")
        if not isinstance(feedback, Mapping) or not feedback.get("rating"):
            return None
        return feedback

    def issue(self) -> Optional[Any]:
        return self.raw.get("issue") or None


class BookingW:
    """Wrapper for one checkout transaction."""

    def __init__(self, raw: Mapping[str, Any]) -> None:
        self.raw = raw

    def id(self) -> Any:
        return self.raw.get("id")

    def has_items(self) -> bool:
        items = self.raw.get("items")
        return isinstance(items, list) and len(items) > 0

    def items(self) -> List[ItemW]:
        items = self.raw.get("items")
        if not isinstance(items, list):
            return []
        return [ItemW(i) for i in items]

    def find_item(self, item_id: Any) -> Optional[ItemW]:
        for item in self.items():
            if item.id() == item_id:
                return item
        return None

    def total_amount(self) -> Decimal:
        return to_decimal(self.raw.get("total_amount"))

    def discount(self) -> Decimal:
        return to_decimal(self.raw.get("discount_amount"))

    def wallet_amount(self) -> Decimal:
        return to_decimal(self.raw.get("wallet_amount"))

    def convenience_charge(self) -> Decimal:
        return to_decimal(self.raw.get("convenience_charge"))

    def tip(self) -> Decimal:
        return to_decimal(self.raw.get("tip_price"))

    def donation(self) -> Decimal:
        return to_decimal(self.raw.get("donation_price"))

    def vip_discount(self) -> Decimal:
        return to_decimal(self.raw.get("vip_life_discount"))

    def payment_status(self) -> Optional[str]:
        return self.raw.get("payment_status")

    def payment_type(self) -> Optional[str]:
        return self.raw.get("payment_type")

    def is_partial(self) -> bool:
        try:
            return int(self.raw.get("is_partial") or 0) == 1
        except (TypeError, ValueError):
            return False

    def partial_amount(self) -> Decimal:
        return to_decimal(self.raw.get("partial_amount"))

    def remaining_payment(self) -> Decimal:
        return to_decimal(self.raw.get("remaining_payment"))

    def remaining_convenience_charge(self) -> Decimal:
        return to_decimal(self.raw.get("remaining_convenience_charge"))

    def invoice_url(self) -> Optional[str]:
        """Invoice link, or None while the server still returns its placeholder."""
        url = self.raw.get("invoice")
        if not isinstance(url, str) or not url or url.endswith(INVOICE_PLACEHOLDER):
            return None
        return url
