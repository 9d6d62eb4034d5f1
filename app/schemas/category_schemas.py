"""Category and brand request/response schemas."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.base_schemas import CamelModel


class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["Strategy Games"])
    description: Optional[str] = Field(
        None, examples=["Strategic board games and simulations"]
    )
    image: Optional[str] = Field(None, max_length=512, examples=["category-image.jpg"])
    is_active: Optional[bool] = None


class CategoryUpdate(CamelModel):
    """Partial update; omitted fields are left untouched."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    image: Optional[str] = Field(None, max_length=512)
    is_active: Optional[bool] = None


class CategoryRead(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BrandCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    logo: Optional[str] = Field(None, max_length=512)
    is_active: Optional[bool] = None


class BrandUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    logo: Optional[str] = Field(None, max_length=512)
    is_active: Optional[bool] = None


class BrandRead(CamelModel):
    id: int
    name: str
    slug: str
    logo: Optional[str] = None
    is_active: bool
