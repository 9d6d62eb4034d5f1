"""Product ORM models: product, its variants, tags and category links."""
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, IdType
from app.models.brand import Brand
from app.models.category import Category

product_categories = Table(
    "product_categories",
    Base.metadata,
    Column("product_id", ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
    Index("idx_product_categories_category", "category_id"),
)


class Product(Base):
    """Catalog product."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, comment="Display name")
    slug: Mapped[str] = mapped_column(
        String(300),
        nullable=False,
        comment="URL-safe unique name derivation",
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default="simple",
        comment="simple or variable",
    )
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    primary_category_id: Mapped[int | None] = mapped_column(
        IdType,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    )
    brand_id: Mapped[int | None] = mapped_column(
        IdType,
        ForeignKey("brands.id", ondelete="SET NULL"),
        nullable=True,
    )
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_sold_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    average_rating: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0,
        comment="Bounded to [0, 5]",
    )
    review_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    specifications: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_on_sale: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_new_arrival: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_best_seller: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    available_from: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
        comment="Hidden from the storefront before this instant (UTC)",
    )
    available_to: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
        comment="Hidden from the storefront after this instant (UTC)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    categories: Mapped[List[Category]] = relationship(
        secondary=product_categories,
        back_populates="products",
        lazy="selectin",
    )
    primary_category: Mapped[Optional[Category]] = relationship(
        foreign_keys=[primary_category_id],
        lazy="selectin",
    )
    brand: Mapped[Optional[Brand]] = relationship(lazy="selectin")
    variants: Mapped[List["ProductVariant"]] = relationship(
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductVariant.position",
        lazy="selectin",
    )
    tag_rows: Mapped[List["ProductTag"]] = relationship(
        cascade="all, delete-orphan",
        order_by="ProductTag.tag",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_products_slug", "slug", unique=True),
        Index("idx_products_name", "name"),
        Index("idx_products_primary_category", "primary_category_id"),
        Index("idx_products_brand", "brand_id"),
        Index("idx_products_active", "is_active"),
        Index("idx_products_featured", "is_featured"),
        Index("idx_products_on_sale", "is_on_sale"),
        Index("idx_products_new_arrival", "is_new_arrival"),
        Index("idx_products_best_seller", "is_best_seller"),
        Index("idx_products_total_sold", "total_sold_count"),
        Index("idx_products_view_count", "view_count"),
        Index("idx_products_rating", "average_rating"),
    )

    @property
    def tags(self) -> list[str]:
        return [row.tag for row in self.tag_rows]

    @tags.setter
    def tags(self, values: list[str]) -> None:
        # Existing rows are reused so an unchanged tag is never deleted and re-inserted
        existing = {row.tag: row for row in self.tag_rows}
        self.tag_rows = [
            existing.get(tag) or ProductTag(tag=tag) for tag in dict.fromkeys(values)
        ]

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, slug='{self.slug}')>"


class ProductVariant(Base):
    """A purchasable configuration of a product."""

    __tablename__ = "product_variants"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sku: Mapped[str] = mapped_column(String(128), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    sale_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sold_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    attributes: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    product: Mapped[Product] = relationship(back_populates="variants")

    __table_args__ = (
        Index("idx_variants_product", "product_id"),
        Index("idx_variants_price", "price"),
        Index("idx_variants_sku", "sku"),
        Index("idx_variants_sold_count", "sold_count"),
    )


class ProductTag(Base):
    """One tag on one product."""

    __tablename__ = "product_tags"

    product_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag: Mapped[str] = mapped_column(String(100), primary_key=True)

    __table_args__ = (Index("idx_product_tags_tag", "tag"),)
