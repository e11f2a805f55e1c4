"""Normalise raw catalog payloads into typed records.

A bad record is logged and skipped so it cannot blank the whole list. Only
a payload that is not a list at all is an error.
"""

import logging
import math
from typing import Any

from pydantic import ValidationError

from storefront.schemas.category import CategoryRecord
from storefront.schemas.product import ProductRecord

logger = logging.getLogger(__name__)

_CATEGORY_ENVELOPE_KEYS = ("categories", "items", "data")
_PRODUCT_ENVELOPE_KEYS = ("products", "items", "data")


def _to_number(value: Any) -> float | None:
    """Parse numbers the way the storefront receives them ("1,250" included)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.replace(",", "").strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _to_int_id(value: Any) -> int | None:
    number = _to_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def _pick_list(payload: Any, keys: tuple[str, ...]) -> list:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in keys:
            inner = payload.get(key)
            if isinstance(inner, list):
                return inner
            if key == "data" and isinstance(inner, dict):
                return _pick_list(inner, keys)
    raise TypeError(f"Expected a list of records, got {type(payload).__name__}")


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def normalize_categories(payload: Any) -> list[CategoryRecord]:
    records: list[CategoryRecord] = []
    for raw in _pick_list(payload, _CATEGORY_ENVELOPE_KEYS):
        if not isinstance(raw, dict):
            logger.warning("Skipping category record of type %s", type(raw).__name__)
            continue

        cid = _to_int_id(raw.get("id"))
        if cid is None:
            logger.warning("Skipping category record without a usable id: %r", raw.get("id"))
            continue

        parent_raw = raw.get("parentId", raw.get("parent_id"))
        # 0, "" and null all mean "no parent"
        parent_id = _to_int_id(parent_raw) if parent_raw else None

        passthrough = {
            k: v for k, v in raw.items()
            if k not in ("id", "name", "parentId", "parent_id", "slug", "image")
        }
        try:
            records.append(
                CategoryRecord(
                    id=cid,
                    name=str(raw.get("name") or ""),
                    parent_id=parent_id,
                    slug=_optional_str(raw.get("slug")),
                    image=_optional_str(raw.get("image")),
                    **passthrough,
                )
            )
        except ValidationError as exc:
            logger.warning("Skipping invalid category %s: %s", cid, exc.errors())
    return records


def _resolve_price(raw: dict) -> float:
    # Priority: first variant price, then basePrice, then price
    variants = raw.get("variants")
    candidates = []
    if isinstance(variants, list) and variants and isinstance(variants[0], dict):
        candidates.append(variants[0].get("price"))
    candidates.extend([raw.get("basePrice"), raw.get("price")])
    for candidate in candidates:
        number = _to_number(candidate)
        if number is not None:
            return number
    return 0.0


def _resolve_stock(raw: dict) -> int | None:
    variants = raw.get("variants")
    if isinstance(variants, list) and variants:
        return int(sum(_to_number(v.get("stock")) or 0 for v in variants if isinstance(v, dict)))
    stock = _to_number(raw.get("stock"))
    return None if stock is None else int(stock)


def _resolve_category_id(raw: dict) -> int | None:
    cid = _to_int_id(raw.get("categoryId", raw.get("category_id")))
    if cid is not None:
        return cid
    category = raw.get("category")
    if isinstance(category, dict):
        return _to_int_id(category.get("id"))
    return None


def normalize_products(payload: Any) -> list[ProductRecord]:
    records: list[ProductRecord] = []
    for raw in _pick_list(payload, _PRODUCT_ENVELOPE_KEYS):
        if not isinstance(raw, dict):
            logger.warning("Skipping product record of type %s", type(raw).__name__)
            continue

        pid = _to_int_id(raw.get("id"))
        if pid is None:
            logger.warning("Skipping product record without a usable id: %r", raw.get("id"))
            continue

        price = _resolve_price(raw)
        original = _to_number(raw.get("originalPrice"))
        if original is None:
            original = _to_number(raw.get("original_price"))
        discount = _to_number(raw.get("discount"))
        available = raw.get("available")

        try:
            records.append(
                ProductRecord(
                    id=pid,
                    name=str(raw.get("name") or "Untitled Product"),
                    slug=str(raw.get("slug") or pid),
                    image=_optional_str(raw.get("image")),
                    price=price,
                    original_price=original if original is not None else price,
                    category_id=_resolve_category_id(raw),
                    available=True if available is None else bool(available),
                    stock=_resolve_stock(raw),
                    discount=round(discount) if discount else None,
                )
            )
        except ValidationError as exc:
            logger.warning("Skipping invalid product %s: %s", pid, exc.errors())
    return records
