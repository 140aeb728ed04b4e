"""Product listing, creation and deletion."""

from typing import List, Optional

from event_blog.database.documents import parse_documents
from event_blog.database.errors import NotFoundError
from event_blog.database.provisioner import PRODUCTS_COLLECTION, CollectionProvisioner
from event_blog.managers.logging_manager import get_logger
from event_blog.models.product_models import Product, ProductCreate

logger = get_logger(prefix="[ProductService]")


class ProductService:
    def __init__(self, provisioner: CollectionProvisioner):
        self.provisioner = provisioner
        self.manager = provisioner.manager

    async def list_products(self, stock_id: Optional[str] = None) -> List[Product]:
        """List all products, or only those of `stock_id` when given."""
        query = {"stock_id": stock_id} if stock_id else {}
        collection = await self.provisioner.get_collection(PRODUCTS_COLLECTION)
        documents = await self.manager.run(
            PRODUCTS_COLLECTION, "find", collection.find(query).to_list(length=None), query=query
        )
        return parse_documents(Product, documents, PRODUCTS_COLLECTION)

    async def create_product(self, request: ProductCreate) -> Product:
        product = Product(
            stock_id=str(request.stock_id),
            product_name=request.product_name,
            category=request.category,
            unit=request.unit,
            product_qty=request.product_qty,
        )
        collection = await self.provisioner.get_collection(PRODUCTS_COLLECTION)
        await self.manager.run(PRODUCTS_COLLECTION, "insert_one", collection.insert_one(product.model_dump()))
        logger.info("Created product %s in stock %s", product.product_id, product.stock_id)
        return product

    async def delete_product(self, product_id: str) -> int:
        """
        Delete a single product.

        Raises:
            `NotFoundError`: No product has `product_id`.
        """
        query = {"product_id": product_id}
        collection = await self.provisioner.get_collection(PRODUCTS_COLLECTION)
        result = await self.manager.run(PRODUCTS_COLLECTION, "delete_one", collection.delete_one(query), query=query)
        if result.deleted_count == 0:
            raise NotFoundError("product", product_id)
        logger.info("Deleted product %s", product_id)
        return result.deleted_count
