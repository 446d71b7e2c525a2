"""
Main entrypoint for the Crowd Check API.

This module assembles the FastAPI application, sets up logging,
creates the storage and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn crowd_check_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.errors import validation_body
from .api.v1.router import router as v1_router
from .core.config import settings
from .core.logging_config import setup_logging
from .core.store import MemoryEntityStore
from .services.sample_data import seed_sample_data
from .services.storage import CrowdStorage, Storage


logger = logging.getLogger(__name__)


def build_storage() -> CrowdStorage:
    """Create a storage over a fresh in-memory store using ``settings``."""
    return CrowdStorage(
        MemoryEntityStore(),
        history_limit=settings.history_limit,
        dedup_tolerance=settings.dedup_tolerance,
    )


def create_app(storage: Optional[Storage] = None, seed: Optional[bool] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    storage : Optional[Storage]
        Storage the handlers will use.  A new in-memory one is built
        when omitted.
    seed : Optional[bool]
        Whether to load the demo data at startup.  Defaults to
        ``settings.seed_sample_data``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.storage = storage if storage is not None else build_storage()
    should_seed = settings.seed_sample_data if seed is None else seed

    app.include_router(v1_router, prefix="/api/v1")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Answer malformed request data with 400 rather than FastAPI's 422."""
        logger.warning("Invalid request to %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=validation_body("Invalid request data", exc.errors()),
        )

    @app.on_event("startup")
    async def startup_event() -> None:
        if should_seed:
            await seed_sample_data(app.state.storage, seed=settings.sample_data_seed)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
