"""Unit tests for the numeric helpers."""

from decimal import Decimal

import pytest

from pricetable.domain.exceptions import ValidationError
from pricetable.domain.model.value_objects import (
    compute_unit_price,
    format_amount,
    format_unit_price,
    generate_id,
    positive_decimal,
)


# ── positive_decimal ─────────────────────────────────────────────────────────


class TestPositiveDecimal:

    def test_from_string(self):
        assert positive_decimal("298", "price") == Decimal("298")

    def test_from_float_keeps_short_repr(self):
        assert positive_decimal(0.1, "quantity") == Decimal("0.1")

    def test_strips_whitespace(self):
        assert positive_decimal(" 12.5 ", "price") == Decimal("12.5")

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            positive_decimal("0", "price")

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            positive_decimal(-3, "quantity")

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError, match="Invalid price"):
            positive_decimal("abc", "price")

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="Invalid price"):
            positive_decimal("NaN", "price")

    def test_bool_rejected(self):
        with pytest.raises(ValidationError):
            positive_decimal(True, "price")


# ── compute_unit_price ───────────────────────────────────────────────────────


class TestComputeUnitPrice:

    def test_exact_division(self):
        assert compute_unit_price(Decimal("300"), Decimal("10")) == Decimal("30")

    def test_rounds_to_four_places(self):
        assert compute_unit_price(Decimal("100"), Decimal("3")) == Decimal("33.3333")

    def test_rounds_half_up(self):
        # 2 / 3 = 0.66666... -> 0.6667
        assert compute_unit_price(Decimal("2"), Decimal("3")) == Decimal("0.6667")
        # 0.00005 sits exactly on the half and goes up
        assert compute_unit_price(Decimal("0.0001"), Decimal("2")) == Decimal("0.0001")

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError):
            compute_unit_price(Decimal("1"), Decimal("0"))


# ── Display ──────────────────────────────────────────────────────────────────


class TestFormatting:

    def test_unit_price_with_unit(self):
        assert format_unit_price(Decimal("59.6"), "kg") == "59.6000/kg"

    def test_unit_price_without_unit(self):
        assert format_unit_price(Decimal("30")) == "30.0000"

    def test_whole_amount(self):
        assert format_amount(Decimal("1298")) == "1,298"

    def test_fractional_amount(self):
        assert format_amount(Decimal("3.5")) == "3.50"


def test_generated_ids_are_unique():
    ids = {generate_id() for _ in range(1000)}
    assert len(ids) == 1000
