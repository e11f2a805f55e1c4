"""Dependency injection: catalog client lifecycle and listing query parsing."""

from typing import AsyncIterator

from fastapi import HTTPException, Query, status

from storefront.core.config import settings
from storefront.schemas.product import SortBy
from storefront.services.catalog_client import CatalogClient


async def get_catalog_client() -> AsyncIterator[CatalogClient]:
    """One client per request, closed when the response is sent."""
    async with CatalogClient() as client:
        yield client


class ListingParams:
    """Query parameters of the product listing, validated against the settings."""

    def __init__(
        self,
        category_ids: list[int] = Query(default=[]),
        price_min: float | None = Query(None, ge=0),
        price_max: float | None = Query(None, ge=0),
        in_stock_only: bool = False,
        sort_by: SortBy = SortBy.DEFAULT,
        show: int = Query(settings.DEFAULT_SHOW_COUNT),
    ):
        if show not in settings.SHOW_COUNT_OPTIONS:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"show must be one of: {', '.join(map(str, settings.SHOW_COUNT_OPTIONS))}",
            )
        self.category_ids: frozenset[int] = frozenset(category_ids)
        self.price_min = price_min
        self.price_max = price_max
        self.in_stock_only = in_stock_only
        self.sort_by = sort_by
        self.show = show
