"""User ORM model."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, IdType


class User(Base):
    """Storefront customer identity."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        IdType,
        primary_key=True,
        autoincrement=True,
        comment="User primary key",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Login email, stored lowercase",
    )
    username: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Display name",
    )
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
        comment="bcrypt hash; empty for federated-only accounts",
    )
    avatar: Mapped[str | None] = mapped_column(
        String(512),
        nullable=True,
        comment="Avatar URL",
    )
    providers: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment='Linked identity providers, e.g. [{"provider":"google","providerId":"..."}]',
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def has_provider(self, provider: str) -> bool:
        return any(p.get("provider") == provider for p in self.providers or [])

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
