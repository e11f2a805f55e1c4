"""Unit tests for the dual-cursor price range."""

import math
import random

import pytest

from storefront.catalog.price_range import PriceRange
from storefront.schemas.product import ProductRecord


def _holds(r: PriceRange) -> bool:
    return r.lower <= r.low <= r.high <= r.upper


def test_new_range_starts_at_bounds():
    r = PriceRange.between(100, 900)

    assert (r.low, r.high) == (100, 900)


def test_set_min_stops_at_current_max():
    """Dragging the minimum past the maximum stops it at the maximum."""
    r = PriceRange.between(0, 1000).set_max(400).set_min(700)

    assert r.low == 400
    assert r.high == 400


def test_set_max_stops_at_current_min():
    r = PriceRange.between(0, 1000).set_min(600).set_max(100)

    assert r.high == 600


def test_out_of_bounds_values_are_clamped():
    r = PriceRange.between(100, 900).set_min(-50).set_max(5000)

    assert (r.low, r.high) == (100, 900)


def test_non_finite_input_is_ignored():
    r = PriceRange.between(100, 900).set_min(300)

    assert r.set_min(math.nan) == r
    assert r.set_max(math.inf) == r


def test_invariant_holds_for_any_sequence():
    """Random drags, including reversed and out-of-bound values, never break ordering."""
    rng = random.Random(42)
    r = PriceRange.between(50, 500)
    for _ in range(500):
        value = rng.uniform(-1000, 2000)
        r = r.set_min(value) if rng.random() < 0.5 else r.set_max(value)
        assert _holds(r)


def test_reset_returns_to_bounds():
    r = PriceRange.between(0, 100).set_min(20).set_max(30).reset()

    assert (r.low, r.high) == (0, 100)


def test_rebound_drops_previous_selection():
    """New bounds replace the old ones and both cursors move to them."""
    r = PriceRange.between(0, 100).set_min(20).set_max(30).rebound(500, 800)

    assert (r.lower, r.upper, r.low, r.high) == (500, 800, 500, 800)


def test_for_products_uses_price_bounds():
    products = [
        ProductRecord(id=1, name="a", price=120.4),
        ProductRecord(id=2, name="b", price=349.1),
    ]
    r = PriceRange.for_products(products)

    assert (r.lower, r.upper) == (120, 350)


def test_fill_percentages():
    r = PriceRange.between(0, 200).set_min(50).set_max(150)

    assert r.fill() == (25.0, 25.0)


def test_degenerate_range_fill_is_zero():
    """Equal bounds (one price or no products) must not divide by zero."""
    r = PriceRange.for_products([])

    assert r.is_degenerate
    assert r.fill() == (0.0, 0.0)
    assert _holds(r.set_min(10).set_max(-10))


def test_reversed_bounds_rejected():
    with pytest.raises(ValueError):
        PriceRange.between(10, 5)
