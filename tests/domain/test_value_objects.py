"""Unit tests for the Money value object."""

from decimal import Decimal

import pytest

from pim.domain.exceptions import ValidationError
from pim.domain.model.value_objects import Money


class TestMoney:

    def test_of_keeps_scale(self):
        assert Money.of("10.00", "EUR").amount == Decimal("10.00")

    def test_renders_amount_then_unit(self):
        assert str(Money.of("10.00", "EUR")) == "10.00EUR"

    def test_missing_amount_renders_unit_only(self):
        assert str(Money(None, "EUR")) == "EUR"

    def test_missing_unit_renders_amount_only(self):
        assert str(Money(Decimal("5.5"), None)) == "5.5"

    def test_empty_unit_treated_as_missing(self):
        assert Money.of("5.00", "").unit is None

    def test_empty_money_renders_empty(self):
        assert str(Money()) == ""

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(1.5, "EUR")  # type: ignore[arg-type]

    def test_garbage_amount_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_equality_by_value(self):
        assert Money.of("1.00", "EUR") == Money(Decimal("1.00"), "EUR")
