"""Unit tests for line item validation and its line-total policies."""

import pytest

from sales_orders.application.dto import LineItemSpec
from sales_orders.domain.exceptions import ValidationError
from sales_orders.domain.model.value_objects import Money, Quantity
from sales_orders.domain.service.line_item_validator import LineItemPolicy, LineItemValidator


def _spec(product="5", qty=2, price="10", total="20") -> LineItemSpec:
    return LineItemSpec(product_id=product, quantity=qty, unit_price=price, line_total=total)


class TestHappyPath:

    def test_builds_domain_items(self):
        items = LineItemValidator().validate([_spec(), _spec("7", 1, "5", "5")])
        assert [i.product_id for i in items] == ["5", "7"]
        assert items[0].quantity == Quantity(2)
        assert items[0].unit_price == Money.of("10")
        assert items[1].line_total == Money.of("5")
        assert all(i.id is None for i in items)

    def test_numeric_product_id_becomes_text(self):
        items = LineItemValidator().validate([_spec(product=5)])
        assert items[0].product_id == "5"

    def test_zero_prices_allowed(self):
        items = LineItemValidator().validate([_spec(price="0", total="0")])
        assert items[0].line_total == Money.zero()

    def test_caller_total_is_trusted_by_default(self):
        items = LineItemValidator().validate([_spec(qty=2, price="10", total="99")])
        assert items[0].line_total == Money.of("99")


class TestStructuralErrors:

    @pytest.mark.parametrize("raw", [[], None])
    def test_empty_list_rejected(self, raw):
        with pytest.raises(ValidationError, match="at least one line item"):
            LineItemValidator().validate(raw)

    def test_missing_product_rejected(self):
        with pytest.raises(ValidationError, match="line item 1: product_id is required"):
            LineItemValidator().validate([_spec(product="  ")])

    @pytest.mark.parametrize("qty", [0, -1, "abc", "1.5", None])
    def test_bad_quantity_rejected(self, qty):
        with pytest.raises(ValidationError, match="quantity"):
            LineItemValidator().validate([_spec(qty=qty)])

    @pytest.mark.parametrize("price", ["-1", "ten", None])
    def test_bad_unit_price_rejected(self, price):
        with pytest.raises(ValidationError, match="unit_price"):
            LineItemValidator().validate([_spec(price=price)])

    @pytest.mark.parametrize("total", ["-5", "twenty"])
    def test_bad_line_total_rejected(self, total):
        with pytest.raises(ValidationError, match="line_total"):
            LineItemValidator().validate([_spec(total=total)])

    def test_overlong_product_rejected(self):
        with pytest.raises(ValidationError, match="product_id cannot be longer than 64"):
            LineItemValidator().validate([_spec(product="P" * 65)])

    def test_amount_beyond_storage_rejected(self):
        with pytest.raises(ValidationError, match="line item 1: line_total"):
            LineItemValidator().validate([_spec(total="10000000000000000")])

    def test_huge_quantity_rejected(self):
        with pytest.raises(ValidationError, match="line item 1: quantity"):
            LineItemValidator().validate([_spec(qty="100000000000000000000")])

    def test_error_message_format(self):
        with pytest.raises(ValidationError) as excinfo:
            LineItemValidator().validate([_spec(qty=0), _spec(product="")])
        assert str(excinfo.value) == (
            "Invalid line items: line item 1: quantity: Quantity must be positive"
            " | line item 2: product_id is required"
        )

    def test_all_offending_items_are_named(self):
        with pytest.raises(ValidationError) as excinfo:
            LineItemValidator().validate([_spec(), _spec(qty=0), _spec(product="")])
        message = str(excinfo.value)
        assert "line item 2" in message
        assert "line item 3" in message
        assert "line item 1" not in message


class TestLineTotalPolicy:

    def test_missing_total_counts_as_zero_by_default(self):
        items = LineItemValidator().validate([_spec(total=None)])
        assert items[0].line_total == Money.zero()

    def test_strict_mode_requires_total(self):
        validator = LineItemValidator(LineItemPolicy(strict_line_totals=True))
        with pytest.raises(ValidationError, match="line_total is required"):
            validator.validate([_spec(total=None)])

    def test_verify_mode_rejects_mismatch(self):
        validator = LineItemValidator(LineItemPolicy(verify_line_totals=True))
        with pytest.raises(ValidationError, match="does not match"):
            validator.validate([_spec(qty=2, price="10", total="25")])

    def test_verify_mode_compares_products_beyond_storage(self):
        validator = LineItemValidator(LineItemPolicy(verify_line_totals=True))
        with pytest.raises(ValidationError, match="does not match"):
            validator.validate([_spec(qty=2, price="999999999999.00", total="1.00")])

    def test_verify_mode_accepts_match(self):
        validator = LineItemValidator(LineItemPolicy(verify_line_totals=True))
        items = validator.validate([_spec(qty=3, price="2.50", total="7.50")])
        assert items[0].line_total == Money.of("7.50")
