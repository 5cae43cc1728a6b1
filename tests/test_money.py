"""Money helper tests."""

from decimal import Decimal

from sales_analytics.common.money import from_cents, to_cents, to_decimal


class TestToCents:

    def test_string_amount(self):
        assert to_cents("19.99") == 1999

    def test_rounds_half_up(self):
        assert to_cents("0.005") == 1
        assert to_cents("2.675") == 268

    def test_float_uses_shortest_repr(self):
        assert to_decimal(1.1) == Decimal("1.1")
        assert to_cents(0.1 + 0.2) == 30


class TestFromCents:

    def test_integer_cents(self):
        assert from_cents(1999) == Decimal("19.99")
        assert from_cents(0) == Decimal("0.00")

    def test_float_cents_rounded_half_up(self):
        assert from_cents(12.5) == Decimal("0.13")
        assert from_cents(11999.4) == Decimal("119.99")

    def test_negative_cents(self):
        assert from_cents(-150) == Decimal("-1.50")
