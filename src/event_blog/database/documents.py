"""Conversion of stored documents into the fixed-shape models."""

from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from event_blog.database.errors import StorageError
from event_blog.managers.logging_manager import get_logger

logger = get_logger(prefix="[DATABASE]")

M = TypeVar("M", bound=BaseModel)


def parse_document(
    model: Type[M], document: Dict[str, Any], collection_name: str, operation: str, step: Optional[str] = None
) -> M:
    """
    Build `model` from a stored document.

    Raises:
        `StorageError`: The document does not have the shape of `model`.
    """
    try:
        return model(**document)
    except ValidationError as e:
        logger.error(
            "Malformed document in '%s' (id=%s): %d validation errors",
            collection_name,
            document.get("_id"),
            e.error_count(),
        )
        raise StorageError(operation, f"malformed document in '{collection_name}'", step) from e


def parse_documents(
    model: Type[M], documents: Iterable[Dict[str, Any]], collection_name: str, operation: str = "find"
) -> List[M]:
    return [parse_document(model, document, collection_name, operation) for document in documents]
