"""Unit tests for document pricing

Tests cover:
- Line subtotal formula
- Discount before tax, tax on the discounted amount
- Invoice-only other charges and amount paid
- Rounding at every step
- Coercion of unparseable input to 0
"""

import pytest
from decimal import Decimal
from src.domain.document import DocumentKind
from src.domain.pricing import (
    calculate_totals,
    item_subtotal,
    line_subtotal,
    round2,
    to_amount,
)


def item(quantity="0", unit_cost="0", labor_hours="0", labor_rate="0", description="Work"):
    return {
        "description": description,
        "quantity": quantity,
        "unit_cost": unit_cost,
        "labor_hours": labor_hours,
        "labor_rate": labor_rate,
    }


class TestToAmount:
    """Test numeric coercion"""

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "1,000", "NaN", "Infinity", True, object()])
    def test_unparseable_values_become_zero(self, raw):
        assert to_amount(raw) == Decimal("0")

    def test_parses_strings_ints_and_floats(self):
        assert to_amount(" 12.50 ") == Decimal("12.50")
        assert to_amount(3) == Decimal("3")
        assert to_amount(2.5) == Decimal("2.5")

    def test_round2_is_half_up(self):
        assert round2("0.005") == Decimal("0.01")
        assert round2("2.675") == Decimal("2.68")
        assert round2("-1.005") == Decimal("-1.01")

    def test_round2_keeps_values_wider_than_the_default_precision(self):
        assert round2("1e30") == Decimal("1000000000000000000000000000000.00")
        assert round2(Decimal("123456789012345678901234567890.125")) == Decimal(
            "123456789012345678901234567890.13"
        )

    @pytest.mark.parametrize("raw", ["1e101", "-1e200", Decimal("1E+999999")])
    def test_absurd_magnitudes_become_zero(self, raw):
        assert to_amount(raw) == Decimal("0")


class TestLineSubtotal:
    """Test line subtotal = quantity * unit_cost + labor_hours * labor_rate"""

    def test_part_and_labor_are_summed(self):
        assert line_subtotal("2", "45.00", "1.5", "50.00") == Decimal("165.00")

    def test_labor_only(self):
        assert line_subtotal("0", "0", "2", "50") == Decimal("100.00")

    def test_result_is_rounded(self):
        assert line_subtotal("3", "0.333", "0", "0") == Decimal("1.00")

    def test_item_subtotal_reads_objects_and_mappings(self):
        class Row:
            quantity = Decimal("2")
            unit_cost = Decimal("10")
            labor_hours = Decimal("1")
            labor_rate = Decimal("5")

        assert item_subtotal(Row()) == Decimal("25.00")
        assert item_subtotal(item("2", "10", "1", "5")) == Decimal("25.00")

    def test_garbage_fields_count_as_zero(self):
        assert item_subtotal(item("abc", "10", "", "50")) == Decimal("0.00")
        assert item_subtotal({"description": "No numbers"}) == Decimal("0.00")


class TestCalculateTotals:
    """Test the full totals pipeline"""

    def test_tax_is_applied_after_discount(self):
        """100.00 with 10% discount and 10% tax is 90.00 + 9.00 = 99.00"""
        totals = calculate_totals(
            [item("1", "100")],
            discount_percent="10",
            tax_percent="10",
        )

        assert totals.subtotal_items == Decimal("100.00")
        assert totals.discount_amount == Decimal("10.00")
        assert totals.total_before_tax == Decimal("90.00")
        assert totals.tax_amount == Decimal("9.00")
        assert totals.grand_total == Decimal("99.00")

    def test_balance_due_is_grand_total_minus_paid(self):
        totals = calculate_totals(
            [item("1", "100")],
            discount_percent="10",
            tax_percent="10",
            amount_paid="50.00",
        )

        assert totals.grand_total == Decimal("99.00")
        assert totals.balance_due == Decimal("49.00")

    def test_other_charges_are_added_after_tax(self):
        totals = calculate_totals(
            [item("1", "100")],
            tax_percent="10",
            other_charges="5.50",
        )

        assert totals.tax_amount == Decimal("10.00")
        assert totals.other_charges == Decimal("5.50")
        assert totals.grand_total == Decimal("115.50")

    def test_zero_items_gives_all_zero_totals(self):
        totals = calculate_totals([], discount_percent="10", tax_percent="18")

        assert totals.line_subtotals == ()
        assert totals.subtotal_items == Decimal("0.00")
        assert totals.discount_amount == Decimal("0.00")
        assert totals.tax_amount == Decimal("0.00")
        assert totals.grand_total == Decimal("0.00")
        assert totals.balance_due == Decimal("0.00")

    def test_overpayment_gives_negative_balance(self):
        totals = calculate_totals([item("1", "100")], amount_paid="120")

        assert totals.balance_due == Decimal("-20.00")

    def test_estimate_ignores_charges_and_payment(self):
        totals = calculate_totals(
            [item("1", "100")],
            tax_percent="10",
            other_charges="25",
            amount_paid="50",
            kind=DocumentKind.ESTIMATE,
        )

        assert totals.other_charges == Decimal("0")
        assert totals.amount_paid == Decimal("0")
        assert totals.grand_total == Decimal("110.00")
        assert totals.balance_due is None

    def test_each_step_is_rounded_before_the_next(self):
        """33.33 at 15% discount -> 5.00 (not 4.9995), before-tax 28.33"""
        totals = calculate_totals([item("1", "33.33")], discount_percent="15", tax_percent="18")

        assert totals.discount_amount == Decimal("5.00")
        assert totals.total_before_tax == Decimal("28.33")
        assert totals.tax_amount == Decimal("5.10")
        assert totals.grand_total == Decimal("33.43")

    def test_sum_is_independent_of_item_order(self):
        items = [item("2", "19.99"), item("0", "0", "1.25", "50"), item("3", "7.335")]

        forward = calculate_totals(items, discount_percent="7.5", tax_percent="18")
        backward = calculate_totals(list(reversed(items)), discount_percent="7.5", tax_percent="18")

        assert forward.subtotal_items == backward.subtotal_items
        assert forward.grand_total == backward.grand_total

    def test_same_inputs_give_same_totals(self):
        items = [item("1", "100", "2", "45")]

        first = calculate_totals(items, "5", "18", "10", "20")
        second = calculate_totals(items, "5", "18", "10", "20")

        assert first == second

    def test_changing_an_item_rederives_every_total(self):
        before = calculate_totals([item("1", "100")], "10", "10", amount_paid="50")
        after = calculate_totals([item("2", "100")], "10", "10", amount_paid="50")

        assert after.subtotal_items == Decimal("200.00")
        assert after.discount_amount == Decimal("20.00")
        assert after.tax_amount == Decimal("18.00")
        assert after.grand_total == Decimal("198.00")
        assert after.balance_due == Decimal("148.00")
        assert before.balance_due == Decimal("49.00")

    def test_unparseable_adjustments_count_as_zero(self):
        totals = calculate_totals(
            [item("1", "100")],
            discount_percent="ten",
            tax_percent=None,
            other_charges="",
            amount_paid="n/a",
        )

        assert totals.grand_total == Decimal("100.00")
        assert totals.balance_due == Decimal("100.00")

    def test_changing_discount_and_tax_rederives_every_total(self):
        items = [item("1", "100")]

        before = calculate_totals(items, "10", "10", amount_paid="50")
        after = calculate_totals(items, "20", "5", amount_paid="50")

        assert before.grand_total == Decimal("99.00")
        assert after.subtotal_items == Decimal("100.00")
        assert after.discount_amount == Decimal("20.00")
        assert after.total_before_tax == Decimal("80.00")
        assert after.tax_amount == Decimal("4.00")
        assert after.grand_total == Decimal("84.00")
        assert after.balance_due == Decimal("34.00")

    def test_huge_quantities_and_rates_do_not_raise(self):
        totals = calculate_totals([item("1e30", "1")], tax_percent="1e27")

        assert totals.subtotal_items == Decimal("1e30")
        assert totals.tax_amount == Decimal("1e55")
        assert totals.grand_total - totals.tax_amount == totals.subtotal_items
        assert totals.balance_due == totals.grand_total
