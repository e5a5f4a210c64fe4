"""
Main entrypoint for the Bookstore API.

This module assembles the FastAPI application, sets up logging,
wires the services to their storage and includes the routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn bookstore_api.app.main:app --reload

Tests call ``create_app`` directly with their own settings and user
store.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router
from .core.config import Settings, settings
from .core.logging_config import setup_logging
from .core.storage import CatalogStore, get_catalog_path
from .services.book_service import BookService
from .services.review_service import ReviewService
from .services.user_service import UserService, UserStore

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTP error as ``{"error": <message>}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are client errors (400)."""
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    location = ".".join(str(part) for part in errors[0].get("loc", ())) if errors else ""
    if location:
        message = f"{location}: {message}"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


def create_app(
    app_settings: Optional[Settings] = None,
    user_store: Optional[UserStore] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module level ``settings``.
    user_store : Optional[UserStore]
        Credential store shared by the user service.  A fresh, empty
        in‑memory store is created when omitted.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version, debug=app_settings.debug)

    catalog = CatalogStore(get_catalog_path(app_settings))
    app.state.settings = app_settings
    app.state.catalog = catalog
    app.state.book_service = BookService(catalog)
    app.state.review_service = ReviewService(catalog)
    app.state.user_service = UserService(user_store if user_store is not None else UserStore(), app_settings)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(router)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Seed the catalog on first run; an existing file is left alone.
        catalog.ensure_exists(app_settings.seed_catalog_path)
        logger.info("Serving catalog from %s", catalog.path)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it.
app = create_app()
