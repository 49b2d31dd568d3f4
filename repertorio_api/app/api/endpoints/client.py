"""
Client entry point.

Serves ``index.html`` from the configured public directory at ``/``.
The remaining client assets are served by the ``StaticFiles`` mount
installed in ``create_app``.
"""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse

from repertorio_api.app.core.errors import NotFoundError

router = APIRouter()


@router.get("/", include_in_schema=False)
async def index(request: Request) -> FileResponse:
    """Return the client's ``index.html`` (404 when it is not deployed)."""
    index_path = Path(request.app.state.public_dir) / "index.html"
    if not index_path.is_file():
        raise NotFoundError("Cliente no disponible")
    return FileResponse(index_path)
