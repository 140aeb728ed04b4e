"""HTTP routers of the Event Blog API."""

from event_blog.routes.categories import router as categories_router
from event_blog.routes.events import router as events_router
from event_blog.routes.meta import router as meta_router
from event_blog.routes.products import router as products_router
from event_blog.routes.stocks import router as stocks_router
from event_blog.routes.users import router as users_router

routers = [
    meta_router,
    users_router,
    events_router,
    stocks_router,
    products_router,
    categories_router,
]

__all__ = ["routers"]
