"""Fixed-shape records stored in, and read back from, the document database."""

from event_blog.models.category_models import Category, CategoryCreate, CategoryDeletionResult
from event_blog.models.event_models import Event, EventCreate
from event_blog.models.product_models import Product, ProductCreate
from event_blog.models.stock_models import Stock, StockCreate, StockDeletionResult
from event_blog.models.user_models import LoginRequest, RegisterRequest, User, UserResponse

__all__ = [
    "Category",
    "CategoryCreate",
    "CategoryDeletionResult",
    "Event",
    "EventCreate",
    "LoginRequest",
    "Product",
    "ProductCreate",
    "RegisterRequest",
    "Stock",
    "StockCreate",
    "StockDeletionResult",
    "User",
    "UserResponse",
]
