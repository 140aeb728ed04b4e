"""Category listing, bulk creation and deletion with product nullification."""

from typing import List

from event_blog.database.documents import parse_documents
from event_blog.database.consistency import ConsistencyCoordinator
from event_blog.database.provisioner import CATEGORIES_COLLECTION, CollectionProvisioner
from event_blog.managers.logging_manager import get_logger
from event_blog.models.category_models import Category, CategoryCreate, CategoryDeletionResult

logger = get_logger(prefix="[CategoryService]")


class CategoryService:
    def __init__(self, provisioner: CollectionProvisioner, coordinator: ConsistencyCoordinator):
        self.provisioner = provisioner
        self.coordinator = coordinator
        self.manager = provisioner.manager

    async def list_categories(self, stock_id: str) -> List[Category]:
        query = {"stock_id": stock_id}
        collection = await self.provisioner.get_collection(CATEGORIES_COLLECTION)
        documents = await self.manager.run(
            CATEGORIES_COLLECTION, "find", collection.find(query).to_list(length=None), query=query
        )
        return parse_documents(Category, documents, CATEGORIES_COLLECTION)

    async def create_categories(self, requests: List[CategoryCreate]) -> List[Category]:
        """Insert every category in one round trip. `requests` must not be empty."""
        if not requests:
            raise ValueError("at least one category is required")

        categories = [
            Category(
                stock_id=str(request.stock_id),
                category_name=request.category_name,
                description=request.description or None,
            )
            for request in requests
        ]
        collection = await self.provisioner.get_collection(CATEGORIES_COLLECTION)
        await self.manager.run(
            CATEGORIES_COLLECTION,
            "insert_many",
            collection.insert_many([category.model_dump() for category in categories]),
        )
        logger.info("Created %d categories", len(categories))
        return categories

    async def delete_category(self, category_id: str) -> CategoryDeletionResult:
        """Clear the label on matching products, then delete (see `ConsistencyCoordinator`)."""
        return await self.coordinator.delete_category(category_id)
