"""
# Cross-Collection Consistency

This module implements the two mutations that span collections. MongoDB multi-document
transactions are not used; each operation is an **ordered sequence of single-collection
steps**, and the order is chosen so that a crash between steps leaves a state that is
either safe to retry or merely cosmetically inconsistent.

## Cascading Stock Delete

| Step | Call | Re-run after a crash |
|------|------|----------------------|
| `delete_stock` | `stocks.delete_one({stock_id})` | removes nothing further |
| `delete_products` | `products.delete_many({stock_id})` | removes the remaining orphans |

The parent goes first: an interruption leaves orphaned products, which a later sweep can
find by their dangling `stock_id`. Both steps always run, even when the stock was already
gone, so replaying the whole operation converges.

## Category Delete With Nullification

| Step | Call | Re-run after a crash |
|------|------|----------------------|
| `fetch_category` | `categories.find_one({category_id})` | `NotFoundError` once step 3 has run |
| `clear_product_category` | `products.update_many({stock_id, category}, {$set: {category: None}})` | matches nothing further |
| `delete_category` | `categories.delete_one({category_id})` | deletes nothing further |

Dependents are cleared before the parent goes, so an interruption leaves the category
document in place and the operation can simply be retried. A missing category fails in
step 1, before anything is written.

Any failing step raises `StorageError` with `step` set to the step name.
"""

from event_blog.database.documents import parse_document
from event_blog.database.errors import NotFoundError
from event_blog.database.provisioner import (
    CATEGORIES_COLLECTION,
    PRODUCTS_COLLECTION,
    STOCKS_COLLECTION,
    CollectionProvisioner,
)
from event_blog.managers.logging_manager import get_logger
from event_blog.models.category_models import Category, CategoryDeletionResult
from event_blog.models.stock_models import StockDeletionResult

logger = get_logger(prefix="[CONSISTENCY]")


class ConsistencyCoordinator:
    """Runs the cascading delete sequences against provisioned collections."""

    def __init__(self, provisioner: CollectionProvisioner):
        self.provisioner = provisioner
        self.manager = provisioner.manager

    async def delete_stock(self, stock_id: str) -> StockDeletionResult:
        """Delete a stock, then every product that references it."""
        stocks = await self.provisioner.get_collection(STOCKS_COLLECTION)
        products = await self.provisioner.get_collection(PRODUCTS_COLLECTION)
        query = {"stock_id": stock_id}

        stock_result = await self.manager.run(
            STOCKS_COLLECTION, "delete_one", stocks.delete_one(query), step="delete_stock", query=query
        )
        if stock_result.deleted_count == 0:
            logger.info("Stock %s not present; still removing products that reference it", stock_id)

        product_result = await self.manager.run(
            PRODUCTS_COLLECTION, "delete_many", products.delete_many(query), step="delete_products", query=query
        )

        logger.info(
            "Deleted stock %s: %d stock, %d products",
            stock_id,
            stock_result.deleted_count,
            product_result.deleted_count,
        )
        return StockDeletionResult(
            deleted_stock=stock_result.deleted_count,
            deleted_products=product_result.deleted_count,
        )

    async def delete_category(self, category_id: str) -> CategoryDeletionResult:
        """
        Clear the category label on the stock's matching products, then delete the category.

        Raises:
            `NotFoundError`: No category has `category_id`; nothing was modified.
            `StorageError`: A step failed; `step` tells which.
        """
        categories = await self.provisioner.get_collection(CATEGORIES_COLLECTION)
        products = await self.provisioner.get_collection(PRODUCTS_COLLECTION)
        category_query = {"category_id": category_id}

        document = await self.manager.run(
            CATEGORIES_COLLECTION,
            "find_one",
            categories.find_one(category_query),
            step="fetch_category",
            query=category_query,
        )
        if document is None:
            raise NotFoundError("category", category_id)
        category = parse_document(Category, document, CATEGORIES_COLLECTION, "find_one", step="fetch_category")

        product_query = {"stock_id": category.stock_id, "category": category.category_name}
        update_result = await self.manager.run(
            PRODUCTS_COLLECTION,
            "update_many",
            products.update_many(product_query, {"$set": {"category": None}}),
            step="clear_product_category",
            query=product_query,
        )

        delete_result = await self.manager.run(
            CATEGORIES_COLLECTION,
            "delete_one",
            categories.delete_one(category_query),
            step="delete_category",
            query=category_query,
        )

        logger.info(
            "Deleted category %s (%s): %d products cleared, %d category deleted",
            category_id,
            category.category_name,
            update_result.modified_count,
            delete_result.deleted_count,
        )
        return CategoryDeletionResult(
            updated_products=update_result.modified_count,
            deleted_category=delete_result.deleted_count,
        )
