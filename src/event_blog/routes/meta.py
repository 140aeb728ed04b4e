"""
# Meta Routes

- `GET /api` - API name and endpoint catalogue
- `GET /api/health` - liveness plus database ping status
"""

from fastapi import APIRouter, Depends

from event_blog.routes.dependencies import get_services
from event_blog.services import Services

router = APIRouter(prefix="/api", tags=["meta"])

API_NAME = "Event Blog API"

ENDPOINTS = [
    ("GET", "/api/health", "Health check endpoint"),
    ("POST", "/api/register", "Register a new user"),
    ("POST", "/api/login", "Login user with email and password"),
    ("POST", "/api/events", "Create a new event"),
    ("GET", "/api/events", "List events"),
    ("GET", "/api/products", "List products, optionally for one stock"),
    ("PUT", "/api/products", "Create a new product"),
    ("DELETE", "/api/products/{product_id}", "Delete a product"),
    ("GET", "/api/stocks", "List stocks"),
    ("POST", "/api/stocks", "Create a stock"),
    ("DELETE", "/api/stocks/{stock_id}", "Delete a stock and related products"),
    ("GET", "/api/categories", "List categories for a stock"),
    ("POST", "/api/categories", "Create categories in bulk"),
    ("DELETE", "/api/categories/{category_id}", "Delete a category and clear related product categories"),
]


@router.get("")
async def api_index():
    """List available HTTP endpoints for quick discovery."""
    return {
        "name": API_NAME,
        "endpoints": [
            {"method": method, "path": path, "description": description} for method, path, description in ENDPOINTS
        ],
    }


@router.get("/health")
async def health_check(services: Services = Depends(get_services)):
    """Report API status; `database` is `connected` only once a connection exists and answers."""
    database_ok = await services.manager.health_check()
    return {
        "status": "ok",
        "msg": f"{API_NAME} running",
        "database": "connected" if database_ok else "unavailable",
    }
