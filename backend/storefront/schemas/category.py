"""Category schemas: raw catalog records, derived tree nodes, API responses."""

from pydantic import BaseModel, ConfigDict, Field

from storefront.schemas.product import ProductRecord


class CategoryRecord(BaseModel):
    """Category as delivered by the catalog service. Unknown fields pass through."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    name: str = ""
    parent_id: int | None = Field(None, alias="parentId")
    slug: str | None = None
    image: str | None = None


class CategoryNode(BaseModel):
    """Immutable tree node. Children are sorted by name with locale collation."""
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    parent_id: int | None = None
    slug: str | None = None
    image: str | None = None
    children: tuple["CategoryNode", ...] = ()

    @property
    def has_children(self) -> bool:
        return len(self.children) > 0


class CategoryTreeResponse(BaseModel):
    items: list[CategoryNode]
    total: int


class CategorySummary(BaseModel):
    id: int
    name: str
    slug: str | None = None


class CategoryProductsResponse(BaseModel):
    """Category page payload: the category, every id it covers, and its products."""
    category: CategorySummary
    category_ids: list[int]
    subcategory_count: int
    total: int
    products: list[ProductRecord]


class TreeRow(BaseModel):
    """One visible row of a rendered category tree."""
    id: int
    name: str
    slug: str | None = None
    depth: int
    has_children: bool
    is_open: bool
    is_checked: bool


class CategoryRowsResponse(BaseModel):
    rows: list[TreeRow]
    summary: str
