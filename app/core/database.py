"""Database configuration using SQLAlchemy 2.0."""
from __future__ import annotations

from typing import Any, Generator

from sqlalchemy import BigInteger, Integer, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.core.config import get_settings


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine, adding the SQLite thread flag when needed."""
    kwargs: dict[str, Any] = {"echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_pre_ping"] = True
        kwargs["pool_recycle"] = 3600
    return create_engine(database_url, **kwargs)


settings = get_settings()

engine = build_engine(settings.database_url, echo=settings.database_echo)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session.

    Usage in FastAPI:
        @app.get("/items")
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create all tables registered on Base."""
    # Import models so their tables are registered on the metadata
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


# BIGINT ids everywhere except SQLite, where only INTEGER PRIMARY KEY autoincrements
IdType = BigInteger().with_variant(Integer, "sqlite")

# Largest value a signed 64-bit id column can hold
MAX_ID = 2**63 - 1
