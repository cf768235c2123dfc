"""Order Totals — derived total from captured line items."""

from types import SimpleNamespace
from uuid import uuid4

from storefront.core.order_totals import compute_order_total


def _item(unit_price, quantity):
    return SimpleNamespace(product_id=uuid4(), unit_price=unit_price, quantity=quantity)


def test_total_is_sum_of_price_times_quantity():
    assert compute_order_total([_item(10.0, 3), _item(2.5, 4)]) == 40.0


def test_empty_order_totals_zero():
    assert compute_order_total([]) == 0


def test_free_items_contribute_nothing():
    assert compute_order_total([_item(0.0, 5), _item(4.0, 1)]) == 4.0
