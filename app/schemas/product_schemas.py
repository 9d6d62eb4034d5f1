"""Product request and response schemas."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field

from app.schemas.base_schemas import CamelModel, RecordId

# Price/quantity stay loosely typed here; normalize_variants coerces them and
# reports the offending SKU when a value is not numeric.
LooseNumber = Union[float, str, None]

# Matches the width of the product_tags.tag column
Tag = Annotated[str, Field(min_length=1, max_length=100)]


class VariantInput(CamelModel):
    """Variant as submitted by the admin client."""

    sku: str = Field("", max_length=128)
    name: Optional[str] = Field(None, max_length=255)
    price: LooseNumber = None
    sale_price: LooseNumber = None
    quantity: LooseNumber = 0
    sold_count: int = Field(0, ge=0)
    attributes: Dict[str, str] = Field(default_factory=dict)
    images: List[str] = Field(default_factory=list)


class ProductCreate(CamelModel):
    """Request schema for creating a product."""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    type: Literal["simple", "variable"] = "simple"
    images: List[str] = Field(default_factory=list)
    categories: List[RecordId] = Field(default_factory=list, description="Category ids")
    primary_category_id: Optional[RecordId] = None
    brand_id: Optional[RecordId] = None
    variants: List[VariantInput] = Field(default_factory=list)
    tags: List[Tag] = Field(default_factory=list)
    specifications: Dict[str, str] = Field(default_factory=dict)
    is_active: bool = True
    is_featured: bool = False
    is_on_sale: bool = False
    is_new_arrival: bool = False
    is_best_seller: bool = False
    available_from: Optional[datetime] = None
    available_to: Optional[datetime] = None


class ProductUpdate(CamelModel):
    """Partial update; only fields present in the request body are written."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    type: Optional[Literal["simple", "variable"]] = None
    images: Optional[List[str]] = None
    categories: Optional[List[RecordId]] = None
    primary_category_id: Optional[RecordId] = None
    brand_id: Optional[RecordId] = None
    variants: Optional[List[VariantInput]] = None
    tags: Optional[List[Tag]] = None
    specifications: Optional[Dict[str, str]] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    is_on_sale: Optional[bool] = None
    is_new_arrival: Optional[bool] = None
    is_best_seller: Optional[bool] = None
    available_from: Optional[datetime] = None
    available_to: Optional[datetime] = None


class ProductBulkUpdate(CamelModel):
    """Apply the same field changes to several products at once."""

    ids: List[RecordId] = Field(..., min_length=1)
    changes: ProductUpdate


class ProductStatsUpdate(CamelModel):
    """Counters to increment and/or an absolute rating to set."""

    view_count_increment: Optional[int] = Field(None, ge=0)
    total_sold_count_increment: Optional[int] = Field(None, ge=0)
    review_count_increment: Optional[int] = Field(None, ge=0)
    average_rating: Optional[float] = Field(None, ge=0, le=5)


class CategoryRef(CamelModel):
    id: int
    name: str


class BrandRef(CamelModel):
    id: int
    name: str
    slug: str


class VariantRead(CamelModel):
    sku: str
    name: Optional[str] = None
    price: float
    sale_price: Optional[float] = None
    quantity: int
    sold_count: int
    attributes: Dict[str, Any] = Field(default_factory=dict)
    images: List[str] = Field(default_factory=list)


class ProductRead(CamelModel):
    """Product as returned to admin and storefront clients."""

    id: int
    name: str
    slug: str
    description: Optional[str] = None
    type: str
    images: List[str] = Field(default_factory=list)
    categories: List[CategoryRef] = Field(default_factory=list)
    primary_category_id: Optional[int] = None
    primary_category: Optional[CategoryRef] = None
    brand_id: Optional[int] = None
    brand: Optional[BrandRef] = None
    variants: List[VariantRead] = Field(default_factory=list)
    view_count: int
    total_sold_count: int
    average_rating: float
    review_count: int
    tags: List[str] = Field(default_factory=list)
    specifications: Dict[str, Any] = Field(default_factory=dict)
    is_active: bool
    is_featured: bool
    is_on_sale: bool
    is_new_arrival: bool
    is_best_seller: bool
    available_from: Optional[datetime] = None
    available_to: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UploadResult(CamelModel):
    """Media host response for one stored file."""

    url: str
    public_id: str
    width: Optional[int] = None
    height: Optional[int] = None
    format: Optional[str] = None
    resource_type: Optional[str] = None
