import asyncio
import re
from decimal import Decimal

import pytest

from receipt_processor.config import Settings
from receipt_processor.domain.validation import validate_receipt
from receipt_processor.infrastructure.database import new_receipt_id
from receipt_processor.infrastructure.store import (
    DatabaseReceiptStore,
    InMemoryReceiptStore,
    create_store,
)


SHORT_ID = re.compile(r"[A-Za-z0-9_-]{22}")


def scored(raw, points=28):
    return validate_receipt(raw).receipt.with_points(points)


def test_memory_store_round_trip(target_receipt):
    async def scenario():
        store = InMemoryReceiptStore()
        receipt = scored(target_receipt)
        receipt_id = await store.save(receipt)
        assert SHORT_ID.fullmatch(receipt_id)

        assert await store.get(receipt_id) == receipt
        assert await store.get("unknown") is None
        assert await store.dump() == {receipt_id: receipt}

    asyncio.run(scenario())


def test_memory_store_generates_distinct_ids_under_concurrency(single_item_receipt):
    async def scenario():
        store = InMemoryReceiptStore()
        receipt = scored(single_item_receipt, 12)
        ids = await asyncio.gather(*(store.save(receipt) for _ in range(50)))

        assert len(set(ids)) == 50
        assert len(await store.dump()) == 50

    asyncio.run(scenario())


def test_store_refuses_unscored_receipt(target_receipt):
    unscored = validate_receipt(target_receipt).receipt

    with pytest.raises(ValueError):
        asyncio.run(InMemoryReceiptStore().save(unscored))


def test_database_store_round_trip(target_receipt, corner_market_receipt):
    async def scenario():
        store = DatabaseReceiptStore("sqlite+aiosqlite:///:memory:")
        await store.init()
        try:
            first = scored(target_receipt, 28)
            second = scored(corner_market_receipt, 109)
            first_id = await store.save(first)
            second_id = await store.save(second)
            assert SHORT_ID.fullmatch(first_id) and SHORT_ID.fullmatch(second_id)

            loaded = await store.get(first_id)
            assert loaded == first
            assert loaded.total == Decimal("35.35")
            assert loaded.items[4].short_description == "   Klarbrunn 12-PK 12 FL OZ  "

            assert await store.get("unknown") is None

            dumped = await store.dump()
            assert set(dumped) == {first_id, second_id}
            assert dumped[second_id].points == 109
        finally:
            await store.close()

    asyncio.run(scenario())


def test_create_store_selects_backend():
    assert create_store(Settings(_env_file=None)).name == "memory"

    store = create_store(Settings(_env_file=None, store_backend="database"))
    assert isinstance(store, DatabaseReceiptStore)
    asyncio.run(store.close())


def test_receipt_ids_are_short_url_safe_tokens():
    ids = {new_receipt_id() for _ in range(100)}
    assert len(ids) == 100
    assert all(SHORT_ID.fullmatch(receipt_id) for receipt_id in ids)
