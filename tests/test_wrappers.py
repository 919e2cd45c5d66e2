"""Tests for booking and item wrappers."""

from decimal import Decimal

from booking_orders.wrappers import BookingW, ItemW, to_decimal

from .fixtures import make_booking, make_item


class TestToDecimal:
    def test_parses_strings_and_numbers(self) -> None:
        assert to_decimal("120.50") == Decimal("120.50")
        assert to_decimal(7) == Decimal("7")

    def test_bad_values_are_zero(self) -> None:
        assert to_decimal(None) == Decimal("0")
        assert to_decimal("") == Decimal("0")
        assert to_decimal("n/a") == Decimal("0")


class TestItemW:
    """Tests for ItemW accessors."""

    def test_basic_fields(self) -> None:
        item = ItemW(make_item(item_id=9, status="running"))
        assert item.id() == 9
        assert item.status() == "running"
        assert item.order_number() == "ORD-0005"
        assert item.total_amount() == Decimal("499.00")

    def test_provider(self) -> None:
        item = ItemW(make_item())
        assert item.provider_name() == "Asha Rao"
        assert item.provider_phone() == "9999900000"

    def test_provider_missing(self) -> None:
        item = ItemW(make_item(provider=None))
        assert item.provider_name() == "Provider"
        assert item.provider_phone() == ""

    def test_service_name_fallbacks(self) -> None:
        assert ItemW(make_item()).service_name() == "Deep Cleaning"
        assert ItemW(make_item(rateCard={"category": {"name": "Plumbing"}})).service_name() == "Plumbing"
        assert ItemW(make_item(rateCard=None)).service_name() == "Service"

    def test_rate_card_snake_case(self) -> None:
        item = ItemW(make_item(rateCard=None, rate_card={"strike_price": "10"}))
        assert item.strike_price() == Decimal("10")

    def test_schedule(self) -> None:
        item = ItemW(make_item())
        assert item.booking_date() == "2024-06-01"
        assert item.time_window() == ("10:00", "11:00")
        assert item.address_line() == "12B, Lake View, Pune"

    def test_otp_pair_as_strings(self) -> None:
        assert ItemW(make_item()).otp_pair() == ("1234", "5678")
        assert ItemW(make_item(start_service_otp=None, end_service_otp="")).otp_pair() == (None, None)

    def test_cancellation(self) -> None:
        assert ItemW(make_item()).cancellation() is None
        item = ItemW(make_item(cancel_by="customer", cancel_reason="Changed plans"))
        assert item.cancellation() == {"by": "customer", "reason": "Changed plans", "comment": None}

    def test_feedback_requires_rating(self) -> None:
        assert ItemW(make_item(feedback={"comment": "ok"})).feedback() is None
        assert ItemW(make_item(feedback={"rating": 4})).feedback() == {"rating": 4}

    def test_feedback_not_a_mapping(self) -> None:
        assert ItemW(make_item(feedback="great")).feedback() is None
        assert ItemW(make_item(feedback=[{"rating": 5}])).feedback() is None

    def test_does_not_copy(self) -> None:
        raw = make_item()
        assert ItemW(raw).raw is raw


class TestBookingW:
    """Tests for BookingW accessors."""

    def test_items(self) -> None:
        booking = BookingW(make_booking(items=[make_item(item_id=1), make_item(item_id=2)]))
        assert booking.has_items()
        assert [i.id() for i in booking.items()] == [1, 2]
        assert booking.find_item(2).id() == 2
        assert booking.find_item(3) is None

    def test_no_items(self) -> None:
        assert not BookingW(make_booking(items=[])).has_items()
        assert BookingW({"id": 1, "items": "bogus"}).items() == []

    def test_financials(self) -> None:
        booking = BookingW(make_booking())
        assert booking.discount() == Decimal("50.00")
        assert booking.convenience_charge() == Decimal("29.00")
        assert booking.tip() == Decimal("20")
        assert booking.vip_discount() == Decimal("10.50")
        assert booking.wallet_amount() == Decimal("0")

    def test_partial_payment(self) -> None:
        booking = BookingW(
            make_booking(is_partial=1, partial_amount="200", remaining_payment="299")
        )
        assert booking.is_partial()
        assert booking.partial_amount() == Decimal("200")
        assert booking.remaining_payment() == Decimal("299")
        assert not BookingW(make_booking()).is_partial()

    def test_invoice_placeholder_is_absent(self) -> None:
        assert BookingW(make_booking()).invoice_url().endswith("100.pdf")
        assert BookingW(make_booking(invoice="https://cdn.test/no-image.png")).invoice_url() is None
        assert BookingW(make_booking(invoice=None)).invoice_url() is None

    def test_invoice_not_a_string(self) -> None:
        assert BookingW(make_booking(invoice=42)).invoice_url() is None
        assert BookingW(make_booking(invoice={"url": "x.pdf"})).invoice_url() is None
