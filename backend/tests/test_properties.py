"""
Property-based tests with Hypothesis for order totals and money handling.
"""

from dataclasses import dataclass
from decimal import Decimal

import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from shared.config.constants import Limits
from shared.utils.exceptions import InvalidOrderError, ValidationError
from shared.utils.schemas import ProductOutput
from shared.utils.validators import validate_order_lines, validate_price


@dataclass
class Line:
    product_id: int
    quantity: int
    subtotal: Decimal


cents = st.integers(min_value=0, max_value=1_000_000_00)
lines = st.lists(
    st.builds(
        Line,
        product_id=st.integers(min_value=1, max_value=10_000),
        quantity=st.integers(min_value=1, max_value=Limits.MAX_LINE_QUANTITY),
        subtotal=cents.map(lambda c: Decimal(c) / 100),
    ),
    min_size=1,
    max_size=20,
)


class TestOrderTotalProperties:
    """Property-based tests for validate_order_lines."""

    @given(order_lines=lines)
    @settings(max_examples=100)
    def test_exact_sum_always_accepted(self, order_lines):
        """Property: the exact sum of the subtotals is a valid total."""
        total = sum((line.subtotal for line in order_lines), Decimal("0"))
        assert validate_order_lines(order_lines, total) == total

    @given(order_lines=lines, delta_cents=st.integers(min_value=-10_000, max_value=10_000))
    @settings(max_examples=100)
    def test_any_other_total_rejected(self, order_lines, delta_cents):
        """Property: a total off by any number of cents is rejected."""
        assume(delta_cents != 0)
        total = sum((line.subtotal for line in order_lines), Decimal("0")) + Decimal(delta_cents) / 100
        assume(total >= 0)

        with pytest.raises(InvalidOrderError):
            validate_order_lines(order_lines, total)

    @given(order_lines=lines)
    @settings(max_examples=50)
    def test_total_independent_of_line_order(self, order_lines):
        total = sum((line.subtotal for line in order_lines), Decimal("0"))
        assert validate_order_lines(list(reversed(order_lines)), total) == total

    @given(order_lines=lines, position=st.integers(min_value=0, max_value=19))
    @settings(max_examples=50)
    def test_non_positive_quantity_rejected(self, order_lines, position):
        assume(position < len(order_lines))
        order_lines[position].quantity = 0
        total = sum((line.subtotal for line in order_lines), Decimal("0"))

        with pytest.raises(InvalidOrderError):
            validate_order_lines(order_lines, total)


class TestMoneyProperties:
    """Property-based tests for prices."""

    @given(amount=cents)
    @settings(max_examples=100)
    def test_two_decimal_amounts_accepted(self, amount):
        price = Decimal(amount) / 100
        assert validate_price(price) == price

    @given(amount=st.integers(min_value=1, max_value=1_000_000_000))
    @settings(max_examples=50)
    def test_negative_amounts_rejected(self, amount):
        with pytest.raises(ValidationError):
            validate_price(Decimal(-amount) / 100)

    @given(amount=cents)
    @settings(max_examples=50)
    def test_serialized_with_two_decimals(self, amount):
        """Property: prices are rendered as strings with exactly two decimals."""
        output = ProductOutput(
            id=1,
            restaurant_id=1,
            category_id=1,
            category_name="Pizzas",
            name="Margherita",
            price=Decimal(amount) / 100,
            is_active=True,
            quantity=0,
        )
        rendered = output.model_dump(mode="json")["price"]
        whole, _, fraction = rendered.partition(".")
        assert len(fraction) == 2
        assert Decimal(rendered) == Decimal(amount) / 100
