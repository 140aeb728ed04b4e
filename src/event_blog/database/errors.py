"""
Error taxonomy for the persistence core.

Every failure raised by the database layer is an `EventBlogError` subclass carrying the
HTTP status the API layer should answer with:

| Error | Status | Retried automatically |
|-------|--------|-----------------------|
| `ConfigurationError` | 503 | no (fatal) |
| `ConnectivityError` | 503 | no (cached for the process) |
| `ProvisioningError` | 503 | no (cached per collection) |
| `NotFoundError` | 404 | no |
| `ConflictError` | 409 | no |
| `InvalidCredentialsError` | 401 | no |
| `StorageError` | 500 | caller's choice; core operations are re-entrant |
"""

from typing import Optional


class EventBlogError(Exception):
    """Base class for all errors raised by the persistence core."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(EventBlogError):
    """A required environment setting is missing."""

    status_code = 503


class ConnectivityError(EventBlogError):
    """The database connection could not be established or verified."""

    status_code = 503


class ProvisioningError(EventBlogError):
    """Collection or index setup failed."""

    status_code = 503

    def __init__(self, collection: str, message: str):
        super().__init__(message)
        self.collection = collection


class NotFoundError(EventBlogError):
    """A referenced entity does not exist."""

    status_code = 404

    def __init__(self, entity: str, identifier: str):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.identifier = identifier


class ConflictError(EventBlogError):
    """A uniqueness constraint was violated."""

    status_code = 409

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidCredentialsError(EventBlogError):
    """Login email unknown or password mismatch."""

    status_code = 401

    def __init__(self):
        super().__init__("invalid credentials")


class StorageError(EventBlogError):
    """
    A single storage call timed out or failed.

    `step` names the position inside a multi-step sequence (e.g. `"delete_products"`)
    so callers can tell how far a cascading operation got before failing.
    """

    status_code = 500

    def __init__(self, operation: str, message: str, step: Optional[str] = None):
        super().__init__(message)
        self.operation = operation
        self.step = step
