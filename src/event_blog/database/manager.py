"""
# Database Connection Management

This module owns the **single physical MongoDB connection** used by the Event Blog API.
The `DatabaseManager` (connection supervisor) creates the **Motor** client lazily, on first
use, and memoizes the outcome for the lifetime of the process.

## Connection Lifecycle

```
first get_connection() ──▶ read MONGO_URL ──▶ create client ──▶ ping ──▶ memoize
                                 │                  │             │
                                 ▼                  ▼             ▼
                        ConfigurationError   ConnectivityError (memoized as well)
```

1.  **Instantiation**: no I/O. The manager only stores settings and a client factory.
2.  **First use**: exactly one connection attempt is made, however many coroutines race
    on it. Everybody waiting observes that attempt's outcome.
3.  **Later use**: the memoized client (or the memoized error) is returned immediately.
    A failed attempt is **not** retried automatically.
4.  **Shutdown**: `disconnect()` closes the client.

## Bounded Operations

`run()` wraps a single driver call in the configured operation timeout
(`MONGO_OPERATION_TIMEOUT`, 10 seconds by default), translates driver failures into the
error taxonomy and records timing through the performance logger.

## Usage

```python
manager = DatabaseManager(settings)
database = await manager.get_database()

result = await manager.run(
    "stocks", "delete_one", database["stocks"].delete_one({"stock_id": stock_id})
)
```

## Module Attributes

Attributes:
    db_logger (Logger): Logger for database operations (`[DATABASE]`).
    perf_logger (Logger): Logger for timings (`[DB_PERFORMANCE]`).
    health_logger (Logger): Logger for health checks (`[DB_HEALTH]`).
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from event_blog.config import Settings, settings as default_settings
from event_blog.database.errors import ConfigurationError, ConflictError, ConnectivityError, StorageError
from event_blog.database.single_flight import SingleFlight
from event_blog.managers.logging_manager import get_logger

db_logger = get_logger(prefix="[DATABASE]")
perf_logger = get_logger(prefix="[DB_PERFORMANCE]")
health_logger = get_logger(prefix="[DB_HEALTH]")

T = TypeVar("T")

SENSITIVE_FIELDS = {"password", "password_hash", "token", "secret", "credential"}


class DatabaseManager:
    """
    Connection supervisor for MongoDB.

    Holds the one client shared process-wide. The client is created by `client_factory`
    (the Motor client class unless replaced, e.g. in tests) the first time anybody asks
    for it.

    Attributes:
        settings (`Settings`): Connection endpoint, database name and timeouts.
        client (`Optional[AsyncIOMotorClient]`): `None` until a connection succeeds.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client_factory: Callable[..., AsyncIOMotorClient] = AsyncIOMotorClient,
    ):
        self.settings = settings or default_settings
        self.client: Optional[AsyncIOMotorClient] = None
        self._client_factory = client_factory
        self._connection = SingleFlight("mongo-connection")

    @property
    def connection_attempts(self) -> int:
        return self._connection.attempts

    @property
    def operation_timeout(self) -> float:
        return float(self.settings.MONGO_OPERATION_TIMEOUT)

    async def get_connection(self) -> AsyncIOMotorClient:
        """
        Return the process-wide client, connecting on first use.

        Raises:
            `ConfigurationError`: `MONGO_URL` is not set.
            `ConnectivityError`: The client could not be created or the ping failed.
        """
        return await self._connection.run(self._connect)

    async def get_database(self) -> AsyncIOMotorDatabase:
        client = await self.get_connection()
        return client[self.settings.MONGO_DB_NAME]

    async def _connect(self) -> AsyncIOMotorClient:
        start_time = time.time()
        db_logger.info("Starting MongoDB connection process")

        url = self.settings.MONGO_URL
        if not url:
            db_logger.error("MONGO_URL is not set; refusing to connect")
            raise ConfigurationError("MONGO_URL is not set")

        client = None
        try:
            client = self._client_factory(
                url,
                serverSelectionTimeoutMS=self.settings.MONGO_SERVER_SELECTION_TIMEOUT,
                connectTimeoutMS=self.settings.MONGO_CONNECTION_TIMEOUT,
                uuidRepresentation="standard",
                tz_aware=True,
            )

            ping_start = time.time()
            await asyncio.wait_for(client.admin.command("ping"), timeout=self.operation_timeout)
            ping_duration = time.time() - ping_start
        except (PyMongoError, asyncio.TimeoutError, OSError) as e:
            duration = time.time() - start_time
            perf_logger.warning("Connection attempt failed after %.3fs", duration)
            db_logger.error("Failed to connect to MongoDB: %s", e)
            if client is not None:
                client.close()
            raise ConnectivityError(f"could not connect to MongoDB: {e}") from e

        self.client = client
        total_duration = time.time() - start_time
        perf_logger.info(
            "MongoDB connection established successfully in %.3fs (ping: %.3fs)", total_duration, ping_duration
        )
        db_logger.info("Connected to MongoDB database: %s", self.settings.MONGO_DB_NAME)
        return client

    async def disconnect(self):
        """Close the client if one was created. Safe to call when never connected."""
        if self.client is None:
            db_logger.warning("Disconnect called but no active MongoDB connection found")
            return

        start_time = time.time()
        self.client.close()
        perf_logger.info("MongoDB disconnection completed in %.3fs", time.time() - start_time)
        db_logger.info("Disconnected from MongoDB")

    async def health_check(self) -> bool:
        """Ping the server; `False` when never connected or the ping fails."""
        if self.client is None:
            health_logger.warning("Health check failed: No database client available")
            return False

        start_time = time.time()
        try:
            await asyncio.wait_for(self.client.admin.command("ping"), timeout=self.operation_timeout)
        except (PyMongoError, asyncio.TimeoutError, OSError) as e:
            perf_logger.warning("Database health check failed after %.3fs", time.time() - start_time)
            health_logger.error("Database health check failed: %s", e)
            return False

        perf_logger.debug("Database health check completed in %.3fs", time.time() - start_time)
        return True

    async def run(
        self,
        collection_name: str,
        operation: str,
        awaitable: Awaitable[T],
        step: Optional[str] = None,
        query: Optional[Dict[str, Any]] = None,
    ) -> T:
        """
        Await a single driver call under the operation timeout.

        Raises:
            `ConflictError`: The call violated a unique index.
            `StorageError`: The call timed out or the driver reported a failure.
        """
        start_time = self.log_query_start(collection_name, operation, query)
        try:
            result = await asyncio.wait_for(awaitable, timeout=self.operation_timeout)
        except DuplicateKeyError as e:
            self.log_query_error(collection_name, operation, start_time, e, query)
            raise ConflictError(f"duplicate key in '{collection_name}'") from e
        except asyncio.TimeoutError as e:
            self.log_query_error(collection_name, operation, start_time, e, query)
            raise StorageError(
                operation, f"{operation} on '{collection_name}' timed out after {self.operation_timeout}s", step
            ) from e
        except PyMongoError as e:
            self.log_query_error(collection_name, operation, start_time, e, query)
            raise StorageError(operation, f"{operation} on '{collection_name}' failed: {e}", step) from e

        self.log_query_success(collection_name, operation, start_time)
        return result

    # Database operation logging utilities
    def log_query_start(self, collection_name: str, operation: str, query: Optional[Dict] = None) -> float:
        """Log the start of a database query and return start time for performance tracking"""
        db_logger.debug(
            "Starting %s operation on collection '%s' - Query: %s",
            operation,
            collection_name,
            self._sanitize_query_for_logging(query) if query else {},
        )
        return time.time()

    def log_query_success(self, collection_name: str, operation: str, start_time: float):
        duration = time.time() - start_time
        perf_logger.debug("%s on '%s' completed successfully in %.3fs", operation, collection_name, duration)

    def log_query_error(
        self, collection_name: str, operation: str, start_time: float, error: Exception, query: Optional[Dict] = None
    ):
        """Log database query errors with context and performance metrics"""
        duration = time.time() - start_time
        perf_logger.error("%s on '%s' failed after %.3fs", operation, collection_name, duration)
        db_logger.error(
            "%s operation failed on collection '%s' after %.3fs - Error: %s, Query: %s",
            operation,
            collection_name,
            duration,
            error,
            self._sanitize_query_for_logging(query) if query else {},
        )

    def _sanitize_query_for_logging(self, query: Dict[str, Any]) -> Dict[str, Any]:
        """Sanitize database queries for safe logging by removing sensitive data"""
        if not isinstance(query, dict):
            return {}

        sanitized: Dict[str, Any] = {}
        for key, value in query.items():
            if any(sensitive_field in key.lower() for sensitive_field in SENSITIVE_FIELDS):
                sanitized[key] = "[REDACTED]"
            elif isinstance(value, dict):
                sanitized[key] = self._sanitize_query_for_logging(value)
            else:
                sanitized[key] = value
        return sanitized
