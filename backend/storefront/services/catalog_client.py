"""HTTP client for the external catalog service that owns categories and products."""

import logging

import httpx

from storefront.catalog.records import normalize_categories, normalize_products
from storefront.core.config import settings
from storefront.schemas.category import CategoryRecord
from storefront.schemas.product import ProductRecord

logger = logging.getLogger(__name__)


class CatalogUnavailable(Exception):
    """The catalog service could not be reached or sent something unusable."""


class CatalogClient:
    """Async client; use as ``async with CatalogClient() as client``."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.CATALOG_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.CATALOG_TIMEOUT_SECONDS
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "CatalogClient":
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
            headers={"Accept": "application/json"},
        )
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _get_json(self, path: str):
        if self._client is None:
            raise RuntimeError("CatalogClient must be used as an async context manager")
        try:
            resp = await self._client.get(path)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as exc:
            logger.error("Catalog API error on %s: %s", path, exc)
            raise CatalogUnavailable(f"Catalog API returned {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            logger.error("Catalog connection error on %s: %s", path, exc)
            raise CatalogUnavailable("Cannot reach catalog API") from exc
        except ValueError as exc:
            logger.error("Catalog API sent invalid JSON on %s: %s", path, exc)
            raise CatalogUnavailable("Catalog API sent invalid JSON") from exc

    async def fetch_categories(self) -> list[CategoryRecord]:
        payload = await self._get_json("/categories")
        try:
            records = normalize_categories(payload)
        except TypeError as exc:
            logger.error("Unexpected categories payload: %s", exc)
            raise CatalogUnavailable("Unexpected categories payload") from exc
        logger.info("Loaded %d categories", len(records))
        return records

    async def fetch_products(self) -> list[ProductRecord]:
        payload = await self._get_json("/products")
        try:
            records = normalize_products(payload)
        except TypeError as exc:
            logger.error("Unexpected products payload: %s", exc)
            raise CatalogUnavailable("Unexpected products payload") from exc
        logger.info("Loaded %d products", len(records))
        return records
