"""Product schemas and the filter state shared by listing screens."""

import enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


class SortBy(str, enum.Enum):
    DEFAULT = "default"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    NAME_ASC = "name_asc"


class ProductRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    name: str = "Untitled Product"
    slug: str | None = None
    image: str | None = None
    price: float = Field(0.0, ge=0)
    original_price: float = Field(0.0, ge=0, alias="originalPrice")
    category_id: int | None = Field(None, alias="categoryId")
    available: bool = True
    stock: int | None = None
    discount: int | None = None  # explicit discount from the API wins over the derived one

    @computed_field
    @property
    def discount_percent(self) -> int:
        if self.discount is not None:
            return self.discount
        if self.original_price > self.price:
            return round((self.original_price - self.price) / self.original_price * 100)
        return 0

    @computed_field
    @property
    def in_stock(self) -> bool:
        return self.available and (self.stock is None or self.stock > 0)


class FilterState(BaseModel):
    """Ephemeral filter state owned by one listing screen."""
    model_config = ConfigDict(frozen=True)

    selected_category_ids: frozenset[int] = frozenset()
    price_min: float = 0
    price_max: float = 0
    in_stock_only: bool = False
    show_count: int = Field(20, ge=1)
    sort_by: SortBy = SortBy.DEFAULT
    # Navigation only, never read by the filter
    expanded_node_ids: frozenset[int] = frozenset()

    @model_validator(mode="after")
    def _check_price_order(self) -> "FilterState":
        if self.price_min > self.price_max:
            raise ValueError("price_min must not exceed price_max")
        return self


class PriceBounds(BaseModel):
    min: int
    max: int


class ProductListResponse(BaseModel):
    """Filtered, sorted and sliced product listing."""
    items: list[ProductRecord]
    total: int = Field(..., description="Number of products matching every facet")
    shown: int
    bounds: PriceBounds
    price_min: float
    price_max: float


class ProductSearchResponse(BaseModel):
    items: list[ProductRecord]
    term: str
