"""
Tests for the cascading delete sequences spanning stocks, products and categories.
"""

from unittest.mock import AsyncMock

from pymongo.errors import OperationFailure
import pytest

from event_blog.database.errors import NotFoundError, StorageError

STOCK_ID = "6f1c4a8e-9a44-4b1e-8f8e-1f0a3f2d7c11"
OTHER_STOCK_ID = "0b7f3c52-5d2e-4c8b-a4de-3b9a7e61f2aa"


def _seed_stock(fake_db):
    fake_db["stocks"].documents.append({"stock_id": STOCK_ID, "user_id": "u-1", "stock_name": "Pantry"})
    fake_db["stocks"].documents.append({"stock_id": OTHER_STOCK_ID, "user_id": "u-1", "stock_name": "Garage"})
    fake_db["products"].documents.extend(
        [
            {"product_id": "p1", "stock_id": STOCK_ID, "product_name": "Chips", "category": "Snacks"},
            {"product_id": "p2", "stock_id": STOCK_ID, "product_name": "Soap", "category": "Household"},
            {"product_id": "p3", "stock_id": OTHER_STOCK_ID, "product_name": "Nuts", "category": "Snacks"},
        ]
    )


def _seed_category(fake_db):
    fake_db["categories"].documents.append(
        {"category_id": "c1", "stock_id": STOCK_ID, "category_name": "Snacks", "description": None}
    )


def _product(fake_db, product_id):
    return next(doc for doc in fake_db["products"].documents if doc["product_id"] == product_id)


@pytest.mark.asyncio
async def test_delete_stock_removes_stock_and_its_products(coordinator, fake_db):
    _seed_stock(fake_db)

    result = await coordinator.delete_stock(STOCK_ID)

    assert result.deleted_stock == 1
    assert result.deleted_products == 2
    assert [doc["stock_id"] for doc in fake_db["stocks"].documents] == [OTHER_STOCK_ID]
    assert [doc["product_id"] for doc in fake_db["products"].documents] == ["p3"]


@pytest.mark.asyncio
async def test_delete_stock_replay_is_a_no_op(coordinator, fake_db):
    _seed_stock(fake_db)
    await coordinator.delete_stock(STOCK_ID)

    result = await coordinator.delete_stock(STOCK_ID)

    assert result.deleted_stock == 0
    assert result.deleted_products == 0
    assert len(fake_db["products"].documents) == 1


@pytest.mark.asyncio
async def test_delete_stock_still_sweeps_orphaned_products(coordinator, fake_db):
    # Stock already gone, products left behind by an interrupted earlier run
    fake_db["products"].documents.append({"product_id": "p9", "stock_id": STOCK_ID, "product_name": "Tea"})

    result = await coordinator.delete_stock(STOCK_ID)

    assert result.deleted_stock == 0
    assert result.deleted_products == 1
    assert fake_db["products"].documents == []


@pytest.mark.asyncio
async def test_delete_stock_reports_failed_product_step(coordinator, fake_db):
    _seed_stock(fake_db)
    fake_db["products"].delete_many = AsyncMock(side_effect=OperationFailure("not primary"))

    with pytest.raises(StorageError) as exc_info:
        await coordinator.delete_stock(STOCK_ID)

    assert exc_info.value.step == "delete_products"
    # The stock delete had already happened
    assert all(doc["stock_id"] != STOCK_ID for doc in fake_db["stocks"].documents)


@pytest.mark.asyncio
async def test_delete_category_clears_label_on_matching_products(coordinator, fake_db):
    _seed_stock(fake_db)
    _seed_category(fake_db)

    result = await coordinator.delete_category("c1")

    assert result.updated_products == 1
    assert result.deleted_category == 1
    assert _product(fake_db, "p1")["category"] is None
    assert _product(fake_db, "p2")["category"] == "Household"
    # Same label in another stock is untouched
    assert _product(fake_db, "p3")["category"] == "Snacks"
    assert fake_db["categories"].documents == []


@pytest.mark.asyncio
async def test_delete_unknown_category_modifies_nothing(coordinator, fake_db):
    _seed_stock(fake_db)
    fake_db["products"].update_many = AsyncMock()

    with pytest.raises(NotFoundError) as exc_info:
        await coordinator.delete_category("missing")

    assert exc_info.value.status_code == 404
    fake_db["products"].update_many.assert_not_called()
    assert _product(fake_db, "p1")["category"] == "Snacks"


@pytest.mark.asyncio
async def test_failed_clear_leaves_category_for_retry(coordinator, fake_db):
    _seed_stock(fake_db)
    _seed_category(fake_db)
    products = fake_db["products"]
    original_update = products.update_many
    products.update_many = AsyncMock(side_effect=OperationFailure("write concern error"))

    with pytest.raises(StorageError) as exc_info:
        await coordinator.delete_category("c1")

    assert exc_info.value.step == "clear_product_category"
    assert len(fake_db["categories"].documents) == 1

    products.update_many = original_update
    result = await coordinator.delete_category("c1")

    assert result.updated_products == 1
    assert result.deleted_category == 1


@pytest.mark.asyncio
async def test_fetch_failure_is_reported_as_first_step(coordinator, fake_db):
    fake_db["categories"].find_one = AsyncMock(side_effect=OperationFailure("unreachable"))

    with pytest.raises(StorageError) as exc_info:
        await coordinator.delete_category("c1")

    assert exc_info.value.step == "fetch_category"


@pytest.mark.asyncio
async def test_malformed_category_document_fails_fetch_step(coordinator, fake_db):
    _seed_stock(fake_db)
    fake_db["categories"].documents.append({"category_id": "c1", "category_name": "Snacks"})

    with pytest.raises(StorageError) as exc_info:
        await coordinator.delete_category("c1")

    assert exc_info.value.step == "fetch_category"
    assert _product(fake_db, "p1")["category"] == "Snacks"
    assert len(fake_db["categories"].documents) == 1
