"""Dual-cursor price range slider state.

The two cursors can never cross: dragging the minimum past the maximum
stops it at the maximum, and the other way round. Every transition returns
a new state.
"""

import math
from typing import Iterable

from pydantic import BaseModel, ConfigDict, model_validator

from storefront.catalog.filters import price_bounds
from storefront.schemas.product import ProductRecord


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(value, hi))


class PriceRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    lower: float
    upper: float
    low: float
    high: float

    @model_validator(mode="before")
    @classmethod
    def _default_cursors(cls, data):
        if isinstance(data, dict):
            data = dict(data)
            data.setdefault("low", data.get("lower"))
            data.setdefault("high", data.get("upper"))
        return data

    @model_validator(mode="after")
    def _check_invariant(self) -> "PriceRange":
        if self.lower > self.upper:
            raise ValueError(f"lower bound {self.lower} exceeds upper bound {self.upper}")
        if not (self.lower <= self.low <= self.high <= self.upper):
            raise ValueError("cursors must satisfy lower <= low <= high <= upper")
        return self

    @classmethod
    def between(cls, lower: float, upper: float) -> "PriceRange":
        return cls(lower=lower, upper=upper)

    @classmethod
    def for_products(cls, products: Iterable[ProductRecord]) -> "PriceRange":
        lower, upper = price_bounds(products)
        return cls(lower=lower, upper=upper)

    def set_min(self, value: float) -> "PriceRange":
        if not math.isfinite(value):
            return self
        return self.model_copy(update={"low": _clamp(value, self.lower, self.high)})

    def set_max(self, value: float) -> "PriceRange":
        if not math.isfinite(value):
            return self
        return self.model_copy(update={"high": _clamp(value, self.low, self.upper)})

    def reset(self) -> "PriceRange":
        return self.model_copy(update={"low": self.lower, "high": self.upper})

    def rebound(self, lower: float, upper: float) -> "PriceRange":
        """Move to new bounds. The previous selection is dropped, not carried over."""
        return PriceRange.between(lower, upper)

    @property
    def is_degenerate(self) -> bool:
        return self.lower == self.upper

    def fill(self) -> tuple[float, float]:
        """Left and right inset of the highlighted track, in percent."""
        span = self.upper - self.lower
        if span <= 0:
            return 0.0, 0.0
        left = (self.low - self.lower) / span * 100
        right = 100 - (self.high - self.lower) / span * 100
        return left, right
