"""
# Collection Provisioning

This module makes sure a collection exists, and carries its required indexes, before
any query targets it.

## Provisioning Policy

| Collection | Policy | Indexes |
|------------|--------|---------|
| `users` | once per process, memoized (single flight) | `email_unique` on `email` (unique) |
| `events` | check-then-create on every call | - |
| `stocks` | check-then-create on every call | - |
| `products` | check-then-create on every call | - |
| `categories` | check-then-create on every call | - |

Collections listed in `COLLECTION_INDEXES` carry a uniqueness invariant that must be
enforced by the storage engine itself, so their setup runs once and its outcome
(including a failure) is shared by every caller. The remaining collections only need to
exist; two callers racing to create one are both satisfied, since the loser's
"already exists" answer is treated as success.

Every existence check, creation and index call is bounded by `MONGO_OPERATION_TIMEOUT`.
Any failing step surfaces as `ProvisioningError`.
"""

from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import CollectionInvalid

from event_blog.database.errors import ProvisioningError, StorageError
from event_blog.database.manager import DatabaseManager
from event_blog.database.single_flight import SingleFlight
from event_blog.managers.logging_manager import get_logger

logger = get_logger(prefix="[PROVISIONER]")

USERS_COLLECTION = "users"
EVENTS_COLLECTION = "events"
STOCKS_COLLECTION = "stocks"
PRODUCTS_COLLECTION = "products"
CATEGORIES_COLLECTION = "categories"

COLLECTIONS = (
    USERS_COLLECTION,
    EVENTS_COLLECTION,
    STOCKS_COLLECTION,
    PRODUCTS_COLLECTION,
    CATEGORIES_COLLECTION,
)

COLLECTION_INDEXES: Dict[str, List[Dict[str, Any]]] = {
    USERS_COLLECTION: [
        {
            "index": [("email", ASCENDING)],
            "options": {"name": "email_unique", "unique": True},
        },
    ],
}


class CollectionProvisioner:
    """
    Hands out collection handles, provisioning the underlying collections on demand.

    Args:
        manager: The connection supervisor the handles are obtained from.
    """

    def __init__(self, manager: DatabaseManager):
        self.manager = manager
        self._setups: Dict[str, SingleFlight] = {
            name: SingleFlight(f"provision:{name}") for name in COLLECTION_INDEXES
        }

    def setup_attempts(self, name: str) -> int:
        setup = self._setups.get(name)
        return setup.attempts if setup else 0

    async def get_collection(self, name: str) -> AsyncIOMotorCollection:
        """
        Return a handle to collection `name`, provisioned.

        Raises:
            `ValueError`: `name` is not one of `COLLECTIONS`.
            `ConfigurationError` / `ConnectivityError`: From the connection supervisor.
            `ProvisioningError`: Existence check, creation or index installation failed.
        """
        if name not in COLLECTIONS:
            raise ValueError(f"unknown collection '{name}'")

        database = await self.manager.get_database()

        setup = self._setups.get(name)
        if setup is not None:
            await setup.run(lambda: self._provision(database, name))
        else:
            await self._ensure_exists(database, name)

        return database[name]

    async def provision_all(self):
        """Provision every known collection, e.g. during application startup."""
        for name in COLLECTIONS:
            await self.get_collection(name)
        logger.info("Provisioned %d collections", len(COLLECTIONS))

    async def _provision(self, database: AsyncIOMotorDatabase, name: str):
        logger.info("Provisioning collection '%s'", name)
        await self._ensure_exists(database, name)

        collection = database[name]
        existing = await self._bounded(name, "list_indexes", collection.index_information())
        for index_spec in COLLECTION_INDEXES[name]:
            index_name = index_spec["options"]["name"]
            if index_name in existing:
                logger.debug("Index '%s' already present on '%s'", index_name, name)
                continue
            await self._bounded(
                name, "create_index", collection.create_index(index_spec["index"], **index_spec["options"])
            )
            logger.info("Created index '%s' on '%s'", index_name, name)

    async def _ensure_exists(self, database: AsyncIOMotorDatabase, name: str):
        names = await self._bounded(name, "list_collection_names", database.list_collection_names(filter={"name": name}))
        if names:
            return

        try:
            await self.manager.run(name, "create_collection", database.create_collection(name))
        except StorageError as e:
            if isinstance(e.__cause__, CollectionInvalid):
                logger.debug("Collection '%s' was created concurrently", name)
                return
            raise ProvisioningError(name, f"failed to provision collection '{name}': {e.message}") from e
        logger.info("Created collection '%s'", name)

    async def _bounded(self, name: str, operation: str, awaitable):
        try:
            return await self.manager.run(name, operation, awaitable)
        except StorageError as e:
            logger.error("Provisioning step %s failed for '%s': %s", operation, name, e)
            raise ProvisioningError(name, f"failed to provision collection '{name}': {e.message}") from e
