"""Stock records, create payloads and cascading-delete results."""

import uuid

from pydantic import BaseModel, ConfigDict, Field


class StockCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    user_id: uuid.UUID
    stock_name: str = Field(..., min_length=1)


class Stock(BaseModel):
    """A user's stock list. Owns the products whose `stock_id` matches."""

    stock_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    stock_name: str


class StockDeletionResult(BaseModel):
    """Counts reported by a cascading stock delete."""

    deleted_stock: int
    deleted_products: int
