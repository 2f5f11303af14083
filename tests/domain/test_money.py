"""Tests for fixed-point money helpers."""

from decimal import Decimal

import pytest
from canteen.shared.money import format_amount, to_cents, to_decimal


class TestToCents:
    def test_from_string(self):
        assert to_cents("7.99") == 799

    def test_from_decimal(self):
        assert to_cents(Decimal("3.99")) == 399

    def test_from_int(self):
        assert to_cents(12) == 1200

    def test_rounds_half_up(self):
        assert to_cents("0.005") == 1

    def test_rejects_float(self):
        with pytest.raises(TypeError):
            to_cents(7.99)


class TestFormatting:
    def test_to_decimal(self):
        assert to_decimal(1997) == Decimal("19.97")

    def test_format_amount(self):
        assert format_amount(1997) == "19.97"

    def test_format_zero(self):
        assert format_amount(0) == "0.00"
