"""Catalog endpoints: category tree, category pages, filtered product listing, search."""

import math

from fastapi import APIRouter, Depends, HTTPException, Query, status

from storefront.catalog.filters import (
    effective_category_ids,
    filter_products,
    match_products,
    search_products,
)
from storefront.catalog.price_range import PriceRange
from storefront.catalog.tree import build_tree, find_category, index_tree
from storefront.catalog.tree_widget import CategoryTreeState
from storefront.core.config import settings
from storefront.core.deps import ListingParams, get_catalog_client
from storefront.schemas.category import (
    CategoryProductsResponse,
    CategoryRowsResponse,
    CategorySummary,
    CategoryTreeResponse,
)
from storefront.schemas.product import (
    FilterState,
    PriceBounds,
    ProductListResponse,
    ProductSearchResponse,
)
from storefront.services.catalog_client import CatalogClient, CatalogUnavailable

router = APIRouter(prefix="/api/v1/catalog", tags=["catalog"])


@router.get("/categories/tree", response_model=CategoryTreeResponse)
async def get_category_tree(client: CatalogClient = Depends(get_catalog_client)):
    """Category forest shared by the filter sidebar and the header menu."""
    try:
        records = await client.fetch_categories()
    except CatalogUnavailable as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to load categories",
        ) from exc

    roots = build_tree(records)
    return CategoryTreeResponse(items=roots, total=len(index_tree(roots)))


@router.get("/categories/rows", response_model=CategoryRowsResponse)
async def get_category_rows(
    expanded: list[int] = Query(default=[]),
    selected: list[int] = Query(default=[]),
    navigation: bool = False,
    client: CatalogClient = Depends(get_catalog_client),
):
    """Visible rows of the category tree for a given expand/select state."""
    try:
        records = await client.fetch_categories()
    except CatalogUnavailable as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to load categories",
        ) from exc

    roots = build_tree(records)
    state = CategoryTreeState(
        expanded=frozenset(expanded),
        selected=frozenset(selected) if not navigation else frozenset(),
        selection_enabled=not navigation,
    ).prune(roots)
    return CategoryRowsResponse(rows=state.rows(roots), summary=state.summary())


@router.get("/categories/{param}/products", response_model=CategoryProductsResponse)
async def get_category_products(
    param: str,
    client: CatalogClient = Depends(get_catalog_client),
):
    """Products of a category (looked up by id or slug) and all its subcategories."""
    try:
        records = await client.fetch_categories()
        products = await client.fetch_products()
    except CatalogUnavailable as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to load category products",
        ) from exc

    roots = build_tree(records)
    category = find_category(roots, param)
    if category is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found",
        )

    category_ids = effective_category_ids({category.id}, roots)
    state = FilterState(
        selected_category_ids=frozenset({category.id}),
        price_min=0,
        price_max=math.inf,
    )
    items = match_products(products, state, roots)

    return CategoryProductsResponse(
        category=CategorySummary(id=category.id, name=category.name, slug=category.slug),
        category_ids=sorted(category_ids),
        subcategory_count=len(category_ids) - 1,
        total=len(items),
        products=items,
    )


@router.get("/products", response_model=ProductListResponse)
async def list_products(
    params: ListingParams = Depends(),
    client: CatalogClient = Depends(get_catalog_client),
):
    """Product listing filtered by category, price and availability."""
    try:
        records = await client.fetch_categories()
        products = await client.fetch_products()
    except CatalogUnavailable as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to load products",
        ) from exc

    roots = build_tree(records)

    # Bounds come from the full product list; requested prices are clamped into them
    price = PriceRange.for_products(products)
    if params.price_min is not None:
        price = price.set_min(params.price_min)
    if params.price_max is not None:
        price = price.set_max(params.price_max)

    state = FilterState(
        selected_category_ids=params.category_ids,
        price_min=price.low,
        price_max=price.high,
        in_stock_only=params.in_stock_only,
        show_count=params.show,
        sort_by=params.sort_by,
    )
    total = len(match_products(products, state, roots))
    visible = filter_products(products, state, roots)

    return ProductListResponse(
        items=visible,
        total=total,
        shown=len(visible),
        bounds=PriceBounds(min=int(price.lower), max=int(price.upper)),
        price_min=price.low,
        price_max=price.high,
    )


@router.get("/products/search", response_model=ProductSearchResponse)
async def search(
    q: str = Query("", max_length=100),
    client: CatalogClient = Depends(get_catalog_client),
):
    """Name search backing the header search box."""
    try:
        products = await client.fetch_products()
    except CatalogUnavailable as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to load products",
        ) from exc

    items = search_products(products, q, settings.SEARCH_MIN_CHARS, settings.SEARCH_LIMIT)
    return ProductSearchResponse(items=items, term=q.strip())
