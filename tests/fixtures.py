"""Shared payload builders for booking order tests.

Payloads mirror what the bookings API returns: a booking carries its
financial fields and an ``items`` list; each item carries provider,
rate card, schedule and status.
"""

from typing import Any, Optional


# =============================================================================
# Raw payloads
# =============================================================================


def make_item(
    item_id: Any = 5,
    status: str = "accepted",
    order_number: str = "ORD-0005",
    **extra: Any,
) -> dict:
    """One bookable service item."""
    item = {
        "id": item_id,
        "order_id": order_number,
        "status": status,
        "total_amount": "499.00",
        "booking_date": "2024-06-01",
        "booking_time_from": "10:00",
        "booking_time_to": "11:00",
        "start_service_otp": 1234,
        "end_service_otp": 5678,
        "provider": {"first_name": "Asha", "last_name": "Rao", "phone": "9999900000"},
        "rateCard": {
            "strike_price": "599.00",
            "category": {"name": "Cleaning"},
            "subcategory": {"name": "Deep Cleaning", "image": "deep.png"},
        },
        "address": {"flat_no": "12B", "building_name": "Lake View", "city": "Pune"},
    }
    item.update(extra)
    return item


def make_booking(
    booking_id: Any = 100,
    items: Optional[list] = None,
    **extra: Any,
) -> dict:
    """One checkout transaction; ``items=None`` means a single default item."""
    booking = {
        "id": booking_id,
        "total_amount": "499.00",
        "discount_amount": "50.00",
        "wallet_amount": "0",
        "convenience_charge": "29.00",
        "tip_price": "20",
        "donation_price": "0",
        "vip_life_discount": "10.50",
        "payment_status": "Paid",
        "payment_type": "Online",
        "is_partial": 0,
        "invoice": "https://cdn.example.test/invoices/100.pdf",
        "items": [make_item()] if items is None else items,
    }
    booking.update(extra)
    return booking


def list_body(bookings: list, **extra: Any) -> dict:
    """A bookings/status reply."""
    body = {"status": True, "message": "Bookings fetched", "bookings": bookings}
    body.update(extra)
    return body


def no_bookings_body() -> dict:
    return {"status": False, "message": "No bookings found.", "data": None}
