from decimal import Decimal

import pytest

from app.services.pricing import calculate_totals, line_total, to_money


def test_example_cart_totals():
    t = calculate_totals([(Decimal("1000"), 2)])
    assert t.subtotal == Decimal("2000.00")
    assert t.shipping == Decimal("99.00")
    assert t.tax == Decimal("360.00")
    assert t.total == Decimal("2459.00")


def test_shipping_threshold_is_strictly_greater_than():
    assert calculate_totals([(Decimal("2999.00"), 1)]).shipping == Decimal("99.00")
    assert calculate_totals([(Decimal("3000.00"), 1)]).shipping == Decimal("0.00")
    assert calculate_totals([(Decimal("2999.01"), 1)]).shipping == Decimal("0.00")


def test_tax_on_subtotal_only_and_rounded_to_cents():
    t = calculate_totals([(Decimal("999.99"), 1)])
    # 999.99 * 0.18 = 179.9982
    assert t.tax == Decimal("180.00")
    assert t.total == t.subtotal + t.shipping + t.tax
    assert t.total == Decimal("1279.99")


@pytest.mark.parametrize(
    "lines",
    [
        [(Decimal("1299.50"), 3)],
        [(Decimal("12499"), 1), (Decimal("1899"), 2)],
        [(Decimal("0.01"), 7)],
    ],
)
def test_total_is_sum_of_parts(lines):
    t = calculate_totals(lines)
    assert t.total == t.subtotal + t.shipping + t.tax
    assert t.subtotal == sum(line_total(p, q) for p, q in lines)


def test_accepts_strings_and_ints_but_not_floats():
    assert calculate_totals([("500", 1), (250, 2)]).subtotal == Decimal("1000.00")
    with pytest.raises(TypeError):
        to_money(10.5)


def test_empty_lines_charge_only_shipping():
    t = calculate_totals([])
    assert t.subtotal == Decimal("0.00")
    assert t.tax == Decimal("0.00")
    assert t.total == Decimal("99.00")
