"""Listing Order — named sort orders resolve through explicit tables."""

import pytest

from storefront.core.domain_types import SortDirection
from storefront.core.listing_order import (
    DEFAULT_LISTING_ORDER,
    PRODUCT_LISTING_ORDERS,
    USER_LISTING_ORDERS,
    resolve_listing_order,
)


@pytest.mark.parametrize("requested, expected", [
    ("oldest", ("created_at", SortDirection.ASC)),
    ("newest", ("created_at", SortDirection.DESC)),
    ("priceLowest", ("price", SortDirection.ASC)),
    ("priceHighest", ("price", SortDirection.DESC)),
])
def test_product_orders(requested, expected):
    assert resolve_listing_order(requested, PRODUCT_LISTING_ORDERS) == expected


@pytest.mark.parametrize("requested", [None, "", "random", "NEWEST"])
def test_unknown_or_missing_falls_back_to_newest(requested):
    assert resolve_listing_order(requested, PRODUCT_LISTING_ORDERS) == DEFAULT_LISTING_ORDER


def test_newest_equals_default():
    assert resolve_listing_order("newest", USER_LISTING_ORDERS) == DEFAULT_LISTING_ORDER


def test_price_orders_not_offered_for_users():
    assert resolve_listing_order("priceLowest", USER_LISTING_ORDERS) == DEFAULT_LISTING_ORDER
    assert resolve_listing_order("oldest", USER_LISTING_ORDERS) == (
        "created_at", SortDirection.ASC,
    )
