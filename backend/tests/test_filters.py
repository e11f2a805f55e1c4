"""Unit tests for faceted product filtering."""

import pytest

from storefront.catalog.filters import (
    effective_category_ids,
    filter_products,
    match_products,
    price_bounds,
    search_products,
)
from storefront.catalog.tree import build_tree
from storefront.schemas.category import CategoryRecord
from storefront.schemas.product import FilterState, ProductRecord, SortBy


@pytest.fixture
def tree():
    return build_tree([
        CategoryRecord(id=1, name="Fiction"),
        CategoryRecord(id=2, name="Novel", parent_id=1),
        CategoryRecord(id=3, name="Poetry"),
    ])


@pytest.fixture
def products():
    return [
        ProductRecord(id=10, name="Padma Nadir Majhi", price=200, category_id=2, available=True),
        ProductRecord(id=11, name="Gitanjali", price=500, category_id=3, available=True),
        ProductRecord(id=12, name="Devdas", price=150, category_id=2, available=False),
    ]


def _state(**kwargs) -> FilterState:
    kwargs.setdefault("price_min", 0)
    kwargs.setdefault("price_max", 1000)
    return FilterState(**kwargs)


# ── Category facet ──────────────────────

def test_effective_category_ids_includes_descendants(tree):
    """Selecting a parent covers all of its descendants."""
    assert effective_category_ids({1}, tree) == frozenset({1, 2})


def test_effective_category_ids_empty_selection_means_no_filter(tree):
    assert effective_category_ids(set(), tree) is None


def test_effective_category_ids_keeps_stale_ids(tree):
    """Ids missing from the tree stay in the set and match nothing."""
    assert effective_category_ids({77}, tree) == frozenset({77})


def test_category_selection_matches_descendants():
    """Fiction(1) -> Novel(2): selecting 1 yields A and B, never C."""
    roots = build_tree([
        CategoryRecord(id=1, name="Fiction"),
        CategoryRecord(id=2, name="Novel", parent_id=1),
    ])
    items = [
        ProductRecord(id=1, name="A", price=10, category_id=1),
        ProductRecord(id=2, name="B", price=10, category_id=2),
        ProductRecord(id=3, name="C", price=10, category_id=99),
    ]

    result = match_products(items, _state(selected_category_ids={1}), roots)

    assert [p.name for p in result] == ["A", "B"]


def test_uncategorised_products_never_match_a_selection(tree):
    items = [ProductRecord(id=1, name="Loose", price=10, category_id=None)]

    assert match_products(items, _state(selected_category_ids={1}), tree) == []
    assert len(match_products(items, _state(), tree)) == 1


def test_stale_selection_matches_nothing(tree, products):
    """A selected id that vanished from the tree filters everything out."""
    assert match_products(products, _state(selected_category_ids={404}), tree) == []


# ── Price facet ──────────────────────

def test_price_bounds_are_inclusive(tree):
    """Range [100, 100] keeps a product priced 100 and drops one priced 101."""
    items = [
        ProductRecord(id=1, name="Exact", price=100),
        ProductRecord(id=2, name="Above", price=101),
    ]

    result = match_products(items, _state(price_min=100, price_max=100), tree)

    assert [p.id for p in result] == [1]


def test_price_range_excludes_outside(tree, products):
    result = match_products(products, _state(price_min=160, price_max=400), tree)

    assert [p.id for p in result] == [10]


# ── Availability facet ──────────────────────

def test_in_stock_only_excludes_unavailable(tree):
    """Unavailable or zero-stock products drop out only when the toggle is on."""
    items = [
        ProductRecord(id=1, name="Gone", price=10, available=False),
        ProductRecord(id=2, name="Empty", price=10, available=True, stock=0),
        ProductRecord(id=3, name="Here", price=10, available=True, stock=4),
        ProductRecord(id=4, name="Untracked", price=10, available=True),
    ]

    on = match_products(items, _state(in_stock_only=True), tree)
    off = match_products(items, _state(in_stock_only=False), tree)

    assert [p.id for p in on] == [3, 4]
    assert [p.id for p in off] == [1, 2, 3, 4]


# ── Sorting and slicing ──────────────────────

def test_sort_by_price(tree, products):
    asc = match_products(products, _state(sort_by=SortBy.PRICE_ASC), tree)
    desc = match_products(products, _state(sort_by=SortBy.PRICE_DESC), tree)

    assert [p.id for p in asc] == [12, 10, 11]
    assert [p.id for p in desc] == [11, 10, 12]


def test_sort_by_name(tree, products):
    result = match_products(products, _state(sort_by=SortBy.NAME_ASC), tree)

    assert [p.name for p in result] == ["Devdas", "Gitanjali", "Padma Nadir Majhi"]


def test_sort_by_name_follows_locale(tree):
    items = [
        ProductRecord(id=1, name="Zebra", price=10),
        ProductRecord(id=2, name="Öl", price=10),
    ]
    state = _state(sort_by=SortBy.NAME_ASC)

    assert [p.id for p in match_products(items, state, tree, locale="sv")] == [1, 2]
    assert [p.id for p in match_products(items, state, tree, locale="de")] == [2, 1]


def test_default_sort_keeps_input_order(tree, products):
    result = match_products(products, _state(), tree)

    assert [p.id for p in result] == [10, 11, 12]


def test_filter_products_slices_to_show_count(tree):
    items = [ProductRecord(id=i, name=f"Book {i}", price=10) for i in range(1, 51)]

    assert len(filter_products(items, _state(show_count=20), tree)) == 20
    assert len(filter_products(items[:5], _state(show_count=20), tree)) == 5


def test_filter_products_is_pure(tree, products):
    """Same inputs, same output, inputs untouched."""
    state = _state(selected_category_ids={1}, sort_by=SortBy.PRICE_DESC)
    before = list(products)

    first = filter_products(products, state, tree)
    second = filter_products(products, state, tree)

    assert first == second
    assert products == before


def test_end_to_end_listing(tree, products):
    """Fiction selected, in stock only, price ascending -> only product 10."""
    state = FilterState(
        selected_category_ids={1},
        price_min=0,
        price_max=1000,
        in_stock_only=True,
        sort_by=SortBy.PRICE_ASC,
    )

    result = filter_products(products, state, tree)

    assert [p.id for p in result] == [10]


def test_filter_state_rejects_reversed_prices():
    with pytest.raises(ValueError):
        FilterState(price_min=10, price_max=5)


# ── price_bounds ──────────────────────

def test_price_bounds_floor_and_ceil():
    items = [
        ProductRecord(id=1, name="a", price=99.5),
        ProductRecord(id=2, name="b", price=250.2),
        ProductRecord(id=3, name="free", price=0),
    ]

    assert price_bounds(items) == (99, 251)


def test_price_bounds_empty():
    assert price_bounds([]) == (0, 0)


# ── search_products ──────────────────────

def test_search_products_case_insensitive(products):
    assert [p.id for p in search_products(products, "gita")] == [11]


def test_search_products_needs_min_chars(products):
    assert search_products(products, " d ") == []


def test_search_products_respects_limit():
    items = [ProductRecord(id=i, name=f"Boi {i}", price=10) for i in range(20)]

    assert len(search_products(items, "boi", limit=8)) == 8
