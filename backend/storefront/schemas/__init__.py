from storefront.schemas.product import (
    FilterState, PriceBounds, ProductListResponse, ProductRecord, ProductSearchResponse, SortBy,
)
from storefront.schemas.category import (
    CategoryNode, CategoryProductsResponse, CategoryRecord, CategoryRowsResponse,
    CategorySummary, CategoryTreeResponse, TreeRow,
)

__all__ = [
    "FilterState", "PriceBounds", "ProductListResponse", "ProductRecord", "ProductSearchResponse", "SortBy",
    "CategoryNode", "CategoryProductsResponse", "CategoryRecord", "CategoryRowsResponse",
    "CategorySummary", "CategoryTreeResponse", "TreeRow",
]
