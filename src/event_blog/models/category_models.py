"""Category records, create payloads and cascading-delete results."""

from typing import Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    stock_id: uuid.UUID
    category_name: str = Field(..., min_length=1)
    description: Optional[str] = None


class Category(BaseModel):
    """A named category scoped to one stock."""

    category_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    stock_id: str
    category_name: str
    description: Optional[str] = None


class CategoryDeletionResult(BaseModel):
    """Counts reported by a category delete with product nullification."""

    updated_products: int
    deleted_category: int
