"""Product records and create payloads."""

from typing import Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    stock_id: uuid.UUID
    product_name: str = Field(..., min_length=1)
    category: Optional[str] = None
    unit: Optional[str] = None
    product_qty: int

    @field_validator("product_qty")
    @classmethod
    def qty_must_be_provided(cls, v: int) -> int:
        if v == 0:
            raise ValueError("product_qty must be provided")
        return v

    @field_validator("category", "unit")
    @classmethod
    def blank_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class Product(BaseModel):
    """A product in a stock.

    `category` is a free-text label matched by name against the stock's categories,
    not a reference to a category identifier. It is cleared (set to `None`) when the
    matching category is deleted.
    """

    product_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    stock_id: str
    product_name: str
    category: Optional[str] = None
    unit: Optional[str] = None
    product_qty: int
