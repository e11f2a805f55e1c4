"""Faceted product filtering: category membership, price range, availability."""

import math
from typing import Iterable, Sequence

from storefront.catalog.collation import collation_key
from storefront.catalog.tree import collect_descendant_ids, index_tree
from storefront.schemas.category import CategoryNode
from storefront.schemas.product import FilterState, ProductRecord, SortBy


def effective_category_ids(
    selected: Iterable[int], roots: Sequence[CategoryNode]
) -> frozenset[int] | None:
    """Selected ids plus all their descendants, or None when nothing is selected.

    Ids missing from the tree are kept as-is; they match nothing.
    """
    selected = frozenset(selected)
    if not selected:
        return None

    nodes = index_tree(roots)
    out = set(selected)
    for cid in selected:
        node = nodes.get(cid)
        if node is not None:
            out.update(collect_descendant_ids(node))
    return frozenset(out)


def match_products(
    products: Iterable[ProductRecord],
    state: FilterState,
    roots: Sequence[CategoryNode],
    locale: str | None = None,
) -> list[ProductRecord]:
    """Every product passing all facets, sorted per ``state.sort_by``."""
    category_ids = effective_category_ids(state.selected_category_ids, roots)

    def matches(product: ProductRecord) -> bool:
        if category_ids is not None:
            if product.category_id is None or product.category_id not in category_ids:
                return False
        if not (state.price_min <= product.price <= state.price_max):
            return False
        if state.in_stock_only and not product.in_stock:
            return False
        return True

    matched = [p for p in products if matches(p)]

    if state.sort_by == SortBy.PRICE_ASC:
        matched.sort(key=lambda p: p.price)
    elif state.sort_by == SortBy.PRICE_DESC:
        matched.sort(key=lambda p: p.price, reverse=True)
    elif state.sort_by == SortBy.NAME_ASC:
        key = collation_key(locale)
        matched.sort(key=lambda p: key(p.name))

    return matched


def filter_products(
    products: Iterable[ProductRecord],
    state: FilterState,
    roots: Sequence[CategoryNode],
    locale: str | None = None,
) -> list[ProductRecord]:
    """Matched products cut down to the first ``show_count``."""
    return match_products(products, state, roots, locale)[: state.show_count]


def price_bounds(products: Iterable[ProductRecord]) -> tuple[int, int]:
    """Whole-number bounds over positive prices; ``(0, 0)`` if there are none."""
    prices = [p.price for p in products if math.isfinite(p.price) and p.price > 0]
    if not prices:
        return 0, 0
    return math.floor(min(prices)), math.ceil(max(prices))


def search_products(
    products: Iterable[ProductRecord],
    term: str,
    min_chars: int = 2,
    limit: int = 8,
) -> list[ProductRecord]:
    """Case-insensitive name search for the header search box."""
    term = (term or "").strip()
    if len(term) < min_chars:
        return []

    needle = term.casefold()
    out: list[ProductRecord] = []
    for product in products:
        if needle in product.name.casefold():
            out.append(product)
            if len(out) >= limit:
                break
    return out
