"""Locale-aware name ordering backed by ICU collators."""

import logging
from functools import lru_cache
from typing import Callable

import icu

from storefront.core.config import settings

logger = logging.getLogger(__name__)

SortKey = Callable[[str], bytes]


@lru_cache
def _collator(locale: str) -> icu.Collator:
    logger.debug("Creating ICU collator for locale %s", locale)
    return icu.Collator.createInstance(icu.Locale(locale))


def collation_key(locale: str | None = None) -> SortKey:
    """Return a sort key function ordering names the way ``locale`` does.

    Defaults to ``settings.COLLATION_LOCALE``. Collators are cached per locale.
    """
    collator = _collator(locale or settings.COLLATION_LOCALE)

    def key(name: str) -> bytes:
        return collator.getSortKey(name or "")

    return key
