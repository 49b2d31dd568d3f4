"""
Main entrypoint for the Repertorio API.

This module assembles the FastAPI application: logging, the
repertoire store, error handlers, the song routes and the static
client assets.  ``create_app`` builds and configures the app, which is
instantiated at module import time as ``app``, e.g.::

    uvicorn repertorio_api.app.main:app --reload

Tests call ``create_app`` directly with their own ``Settings`` and
store.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .api.router import router
from .core.config import Settings, resolve_path, settings as default_settings
from .core.errors import RepertoireError
from .core.logging_config import setup_logging
from .core.store import JsonFileStore, RepertoireStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[RepertoireStore] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the module level settings
        read from the environment.
    store : Optional[RepertoireStore]
        Storage backend.  Defaults to a ``JsonFileStore`` on
        ``settings.repertoire_path``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.settings = settings
    app.state.store = store or JsonFileStore(
        resolve_path(settings.repertoire_path), atomic=settings.atomic_writes
    )
    public_dir = resolve_path(settings.public_dir)
    app.state.public_dir = public_dir

    @app.exception_handler(RepertoireError)
    async def repertoire_error_handler(request: Request, exc: RepertoireError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.to_dict())
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Malformed JSON or a body that is not an object.
        detalle = "; ".join(str(error.get("msg")) for error in exc.errors())
        return JSONResponse(status_code=400, content={"error": "Payload inválido", "detalle": detalle})

    app.include_router(router)

    # The mount comes last so the API routes take precedence over files
    # with the same path.
    if public_dir.is_dir():
        app.mount("/", StaticFiles(directory=public_dir), name="public")
    else:
        logger.debug("Public directory %s not found, static assets disabled", public_dir)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
