"""
Top-level router.

Aggregates the endpoint routers.  Song routes keep the ``/canciones``
prefix used by the existing client, so they are mounted without any
version prefix.
"""

from fastapi import APIRouter

from .endpoints import client, songs

router = APIRouter()

router.include_router(client.router, tags=["client"])
router.include_router(songs.router, prefix="/canciones", tags=["canciones"])
