"""Base schemas for common response patterns."""
from __future__ import annotations

from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.database import MAX_ID

T = TypeVar("T")

# Reference to a stored record by id
RecordId = Annotated[int, Field(ge=1, le=MAX_ID)]


class CamelModel(BaseModel):
    """Model serialized with camelCase keys, accepting either spelling on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def sent_fields(self, *non_nullable: str) -> dict[str, Any]:
        """Fields present in the request, minus explicit nulls on non-nullable ones."""
        changes = self.model_dump(exclude_unset=True)
        for field in non_nullable:
            if field in changes and changes[field] is None:
                del changes[field]
        return changes


class BaseResponse(CamelModel, Generic[T]):
    """Base response model with generic data field."""

    success: bool = True
    message: str = "Success"
    data: T | None = None


class ErrorResponse(CamelModel):
    """Error response model."""

    success: bool = False
    message: str
    error_code: str | None = None
    details: dict[str, Any] | None = None


class PageMeta(CamelModel):
    """Pagination block returned by storefront listings."""

    total: int
    page: int
    limit: int
    total_pages: int


class PaginatedResponse(CamelModel, Generic[T]):
    """Paginated response model."""

    items: list[T]
    meta: PageMeta

    @classmethod
    def create(
        cls,
        items: list[T],
        total: int,
        page: int,
        limit: int,
    ) -> "PaginatedResponse[T]":
        """Create a paginated response."""
        total_pages = (total + limit - 1) // limit if limit > 0 else 0
        return cls(
            items=items,
            meta=PageMeta(total=total, page=page, limit=limit, total_pages=total_pages),
        )


class AdminPageMeta(CamelModel):
    """Page metadata for admin listings."""

    item_count: int
    total_items: int
    items_per_page: int
    total_pages: int
    current_page: int


class AdminListResponse(CamelModel, Generic[T]):
    """Admin listing: one page of items plus page metadata."""

    items: list[T]
    pagination: AdminPageMeta
