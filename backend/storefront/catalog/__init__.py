"""Pure catalog logic shared by the product listing, category pages and header menu."""

from storefront.catalog.filters import (
    effective_category_ids, filter_products, match_products, price_bounds, search_products,
)
from storefront.catalog.price_range import PriceRange
from storefront.catalog.tree import (
    build_tree, category_path, collect_descendant_ids, find_category, index_tree, iter_tree,
)
from storefront.catalog.tree_widget import CategoryTreeState

__all__ = [
    "effective_category_ids", "filter_products", "match_products", "price_bounds", "search_products",
    "PriceRange",
    "build_tree", "category_path", "collect_descendant_ids", "find_category", "index_tree", "iter_tree",
    "CategoryTreeState",
]
