"""
Per-entity services built on the collection provisioner.

`Services` bundles one instance of each, wired to a single `DatabaseManager`, so the
API layer receives all of them through one dependency.
"""

from dataclasses import dataclass

from event_blog.database.consistency import ConsistencyCoordinator
from event_blog.database.manager import DatabaseManager
from event_blog.database.provisioner import CollectionProvisioner
from event_blog.services.category_service import CategoryService
from event_blog.services.event_service import EventService
from event_blog.services.product_service import ProductService
from event_blog.services.stock_service import StockService
from event_blog.services.user_service import UserService


@dataclass
class Services:
    manager: DatabaseManager
    provisioner: CollectionProvisioner
    coordinator: ConsistencyCoordinator
    users: UserService
    events: EventService
    stocks: StockService
    products: ProductService
    categories: CategoryService

    @classmethod
    def build(cls, manager: DatabaseManager) -> "Services":
        provisioner = CollectionProvisioner(manager)
        coordinator = ConsistencyCoordinator(provisioner)
        return cls(
            manager=manager,
            provisioner=provisioner,
            coordinator=coordinator,
            users=UserService(provisioner),
            events=EventService(provisioner),
            stocks=StockService(provisioner, coordinator),
            products=ProductService(provisioner),
            categories=CategoryService(provisioner, coordinator),
        )


__all__ = [
    "CategoryService",
    "EventService",
    "ProductService",
    "Services",
    "StockService",
    "UserService",
]
