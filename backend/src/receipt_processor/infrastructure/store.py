"""
Receipt store: keeps scored receipts under generated identifiers.

Design Decisions:
- Abstract store interface injected into the HTTP handlers
- In-memory backend guards its dict with an asyncio.Lock
- Database backend uses async SQLAlchemy sessions per operation
- Identifiers are generated by the store, never by the caller
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from decimal import Decimal

from sqlalchemy import select

from receipt_processor.config import Settings
from receipt_processor.domain.models import Item, Receipt

from .database import (
    ReceiptRecord,
    close_db,
    create_engine,
    create_session_factory,
    init_db,
    new_receipt_id,
)

logger = logging.getLogger(__name__)


class ReceiptStore(ABC):
    """Abstract interface for scored-receipt storage backends."""

    name: str = "abstract"

    async def init(self) -> None:
        """Prepare the backend. Called once on application startup."""

    async def close(self) -> None:
        """Release backend resources. Called once on shutdown."""

    @abstractmethod
    async def save(self, receipt: Receipt) -> str:
        """Store a scored receipt and return its new identifier."""
        pass

    @abstractmethod
    async def get(self, receipt_id: str) -> Receipt | None:
        """Return the receipt stored under receipt_id, or None."""
        pass

    @abstractmethod
    async def dump(self) -> dict[str, Receipt]:
        """Return every stored receipt keyed by identifier."""
        pass

    @staticmethod
    def _require_scored(receipt: Receipt) -> None:
        if not receipt.is_scored:
            raise ValueError("Only scored receipts can be stored")


class InMemoryReceiptStore(ReceiptStore):
    """
    Process-local store for development and tests.

    Contents are lost on restart.
    """

    name = "memory"

    def __init__(self) -> None:
        self._receipts: dict[str, Receipt] = {}
        self._lock = asyncio.Lock()

    async def save(self, receipt: Receipt) -> str:
        self._require_scored(receipt)
        receipt_id = new_receipt_id()
        async with self._lock:
            self._receipts[receipt_id] = receipt
        return receipt_id

    async def get(self, receipt_id: str) -> Receipt | None:
        async with self._lock:
            return self._receipts.get(receipt_id)

    async def dump(self) -> dict[str, Receipt]:
        async with self._lock:
            return dict(self._receipts)


class DatabaseReceiptStore(ReceiptStore):
    """
    SQL-backed store using async SQLAlchemy.

    Works with any async driver; SQLite (aiosqlite) is the default.
    """

    name = "database"

    def __init__(self, database_url: str, echo: bool = False) -> None:
        self.engine = create_engine(database_url, echo=echo)
        self._session_factory = create_session_factory(self.engine)

    async def init(self) -> None:
        await init_db(self.engine)

    async def close(self) -> None:
        await close_db(self.engine)

    async def save(self, receipt: Receipt) -> str:
        self._require_scored(receipt)
        record = ReceiptRecord(
            id=new_receipt_id(),
            retailer=receipt.retailer,
            purchase_date=receipt.purchase_date,
            purchase_time=receipt.purchase_time,
            total=str(receipt.total),
            points=receipt.points,
            items_json=[
                {"shortDescription": item.short_description, "price": str(item.price)}
                for item in receipt.items
            ],
        )
        async with self._session_factory() as session:
            async with session.begin():
                session.add(record)
        return record.id

    async def get(self, receipt_id: str) -> Receipt | None:
        async with self._session_factory() as session:
            record = await session.get(ReceiptRecord, receipt_id)
        return _to_receipt(record) if record is not None else None

    async def dump(self) -> dict[str, Receipt]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(ReceiptRecord).order_by(ReceiptRecord.created_at)
            )
            records = result.scalars().all()
        return {record.id: _to_receipt(record) for record in records}


def _to_receipt(record: ReceiptRecord) -> Receipt:
    return Receipt(
        retailer=record.retailer,
        purchase_date=record.purchase_date,
        purchase_time=record.purchase_time,
        total=Decimal(record.total),
        items=tuple(
            Item(short_description=item["shortDescription"], price=Decimal(item["price"]))
            for item in record.items_json
        ),
        points=record.points,
    )


def create_store(settings: Settings) -> ReceiptStore:
    """Build the store backend selected in settings."""
    if settings.store_backend == "database":
        store: ReceiptStore = DatabaseReceiptStore(settings.database_url, echo=settings.debug)
    else:
        store = InMemoryReceiptStore()
    logger.info(f"Receipt store backend: {store.name}")
    return store
