"""
Main entrypoint for the Library API.

This module assembles the FastAPI application, sets up logging and
includes the versioned router.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``, e.g.::

    uvicorn library_api.app.main:app --reload

Store handles and the validation client are opened in the startup
event and closed on shutdown.  Startup fails with
``ConfigurationError`` when ``DATABASE_URL`` or ``API_KEY`` is not
set.

Errors leave the service as ``{"error": "<message>"}``.  Requests for
an unknown path, or a known path with an unsupported method, are
answered with a plain ``Not found`` and status 404.
"""

from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import Settings, settings
from .core.db import open_stores
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router
from .services.contact_validator import ContactValidator


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module level ``settings`` read
        from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version)
    app.state.settings = app_settings
    app.include_router(v1_router)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Routing misses carry the bare status phrase as detail.
        if exc.status_code in (404, 405) and exc.detail == HTTPStatus(exc.status_code).phrase:
            return PlainTextResponse("Not found", status_code=404)
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": "Invalid request body"}, status_code=400)

    @app.on_event("startup")
    async def startup_event() -> None:
        app_settings.require()
        app.state.stores = open_stores(app_settings.database_url, timeout=app_settings.store_timeout)
        app.state.validator = ContactValidator(
            api_key=app_settings.api_key,
            base_url=app_settings.validation_api_url,
            timeout=app_settings.validation_timeout,
        )

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        validator = getattr(app.state, "validator", None)
        if validator is not None:
            await validator.aclose()
        stores = getattr(app.state, "stores", None)
        if stores is not None:
            stores.close()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
