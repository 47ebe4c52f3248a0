"""Tests for money arithmetic."""

from decimal import Decimal

from ordering.utils.money import line_total, to_money


class TestToMoney:
    def test_quantizes_to_cents(self):
        assert to_money("19.9") == Decimal("19.90")

    def test_rounds_half_up(self):
        assert to_money("0.125") == Decimal("0.13")
        assert to_money("0.124") == Decimal("0.12")

    def test_accepts_ints(self):
        assert to_money(3) == Decimal("3.00")


class TestLineTotal:
    def test_price_times_quantity(self):
        assert line_total(Decimal("19.99"), 2) == Decimal("39.98")

    def test_percentage_discount(self):
        assert line_total(Decimal("899.00"), 1, Decimal("10")) == Decimal("809.10")

    def test_full_discount(self):
        assert line_total(Decimal("5.00"), 3, Decimal("100")) == Decimal("0.00")

    def test_discounted_total_is_rounded(self):
        # 3 * 3.33 * 0.85 = 8.4915
        assert line_total(Decimal("3.33"), 3, Decimal("15")) == Decimal("8.49")
