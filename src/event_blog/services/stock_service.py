"""Stock listing, creation and cascading deletion."""

from typing import List

from event_blog.database.documents import parse_documents
from event_blog.database.consistency import ConsistencyCoordinator
from event_blog.database.provisioner import STOCKS_COLLECTION, CollectionProvisioner
from event_blog.managers.logging_manager import get_logger
from event_blog.models.stock_models import Stock, StockCreate, StockDeletionResult

logger = get_logger(prefix="[StockService]")


class StockService:
    def __init__(self, provisioner: CollectionProvisioner, coordinator: ConsistencyCoordinator):
        self.provisioner = provisioner
        self.coordinator = coordinator
        self.manager = provisioner.manager

    async def list_stocks(self) -> List[Stock]:
        collection = await self.provisioner.get_collection(STOCKS_COLLECTION)
        documents = await self.manager.run(STOCKS_COLLECTION, "find", collection.find({}).to_list(length=None))
        return parse_documents(Stock, documents, STOCKS_COLLECTION)

    async def create_stock(self, request: StockCreate) -> Stock:
        stock = Stock(user_id=str(request.user_id), stock_name=request.stock_name)
        collection = await self.provisioner.get_collection(STOCKS_COLLECTION)
        await self.manager.run(STOCKS_COLLECTION, "insert_one", collection.insert_one(stock.model_dump()))
        logger.info("Created stock %s for user %s", stock.stock_id, stock.user_id)
        return stock

    async def delete_stock(self, stock_id: str) -> StockDeletionResult:
        """Delete the stock and its products (see `ConsistencyCoordinator.delete_stock`)."""
        return await self.coordinator.delete_stock(stock_id)
