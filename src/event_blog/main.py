"""
# Event Blog API - Application Entry Point

Builds the FastAPI application, wires the persistence core into it and maps the core's
error taxonomy onto HTTP status codes.

## Lifespan

1.  **Startup**: optionally (`PROVISION_ON_STARTUP`) provisions every collection. A failure
    is logged and the application keeps serving: the failure is memoized by the core and
    every request touching the database answers with it (503).
2.  **Shutdown**: closes the MongoDB client.

Every request is logged by `RequestLoggingMiddleware` (method, path, status, duration).

## Error Mapping

| Error | Status |
|-------|--------|
| `NotFoundError` | 404 |
| `ConflictError` | 409 |
| `InvalidCredentialsError` | 401 |
| `ConfigurationError`, `ConnectivityError`, `ProvisioningError` | 503 |
| `StorageError` | 500 |

## Running

```bash
MONGO_URL=mongodb://localhost:27017 event-blog
# or
uvicorn event_blog.main:app --port 8080
```
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from event_blog.config import Settings, settings as default_settings
from event_blog.database.errors import EventBlogError, StorageError
from event_blog.database.manager import DatabaseManager
from event_blog.managers.logging_manager import get_logger
from event_blog.middleware.request_logging import RequestLoggingMiddleware
from event_blog.routes import routers
from event_blog.services import Services

logger = get_logger(prefix="[Main]")


@asynccontextmanager
async def lifespan(app: FastAPI):
    services: Services = app.state.services

    if services.manager.settings.PROVISION_ON_STARTUP:
        try:
            await services.provisioner.provision_all()
        except EventBlogError as e:
            logger.error("Startup provisioning failed: %s", e)

    yield

    await services.manager.disconnect()


async def event_blog_error_handler(request: Request, exc: EventBlogError) -> JSONResponse:
    content = {"detail": exc.message}
    if isinstance(exc, StorageError) and exc.step:
        content["step"] = exc.step
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=content)


def create_app(settings: Optional[Settings] = None, manager: Optional[DatabaseManager] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use; the process-wide `settings` when omitted.
        manager: Connection supervisor to use; a fresh one built from `settings` when omitted.
    """
    settings = settings or default_settings
    manager = manager or DatabaseManager(settings)

    app = FastAPI(
        title="Event Blog API",
        description="Public HTTP endpoints for the Event Blog backend.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.services = Services.build(manager)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins_list,
        allow_methods=["*"],
        allow_headers=["Origin", "Content-Type", "Accept"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_exception_handler(EventBlogError, event_blog_error_handler)

    for router in routers:
        app.include_router(router)

    return app


app = create_app()


def run():
    uvicorn.run(
        "event_blog.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
    )


if __name__ == "__main__":
    run()
