"""
Database models and engine setup with SQLAlchemy.

Uses async SQLAlchemy for non-blocking database operations.

Design Decisions:
- AsyncSession for non-blocking operations
- Money stored as text so Decimal values round-trip exactly
- In-memory SQLite shares a single connection through StaticPool
- Session-per-operation pattern
"""

import logging
import secrets
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# 16 random bytes, 22 url-safe characters
RECEIPT_ID_BYTES = 16


def new_receipt_id() -> str:
    """Generate a short random identifier for a stored receipt."""
    return secrets.token_urlsafe(RECEIPT_ID_BYTES)


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


class ReceiptRecord(Base):
    """A scored receipt keyed by its generated identifier."""
    __tablename__ = "receipts"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_receipt_id)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc)
    )

    retailer: Mapped[str] = mapped_column(String(256))
    purchase_date: Mapped[str] = mapped_column(String(10))
    purchase_time: Mapped[str] = mapped_column(String(5))
    total: Mapped[str] = mapped_column(String(64))
    points: Mapped[int] = mapped_column(Integer)

    # [{"shortDescription": ..., "price": ...}, ...]
    items_json: Mapped[list] = mapped_column(JSON, default=list)


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine for the given URL."""
    if database_url.startswith("sqlite"):
        engine = create_async_engine(
            database_url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(
            database_url,
            echo=echo,
            pool_size=5,
            max_overflow=10,
            pool_timeout=30,
        )
    logger.info(f"Database engine created for {engine.url.render_as_string(hide_password=True)}")
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Get the session factory for creating database sessions."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """
    Initialize database tables.

    Call this on application startup to ensure tables exist.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized")


async def close_db(engine: AsyncEngine) -> None:
    """Close database connections on shutdown."""
    await engine.dispose()
    logger.info("Database connections closed")
