"""
Song endpoints.

CRUD routes over the repertoire under ``/canciones``.  The wire format
uses the field names ``id``, ``titulo``, ``artista`` and ``tono``.
Errors are raised as ``RepertoireError`` subclasses and rendered as
``{"error": ..., "detalle": ...}`` by the application's exception
handler.  Storage faults are relabelled per operation so clients can
tell a failed read from a failed save.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from repertorio_api.app.core.errors import storage_errors
from repertorio_api.app.schemas.song import SongCreate, SongDeleted, SongMessage, SongUpdate, coerce_id
from repertorio_api.app.services.song_service import SongService

router = APIRouter()


def get_song_service(request: Request) -> SongService:
    """Build a service bound to the store configured on the app."""
    return SongService(request.app.state.store)


@router.get("", response_model=List[Any])
async def list_songs(service: SongService = Depends(get_song_service)) -> List[Any]:
    """Return the whole repertoire exactly as stored in the file."""
    with storage_errors("Error leyendo repertorio"):
        return await service.list_songs()


@router.post(
    "",
    response_model=SongMessage,
    status_code=status.HTTP_201_CREATED,
)
async def create_song(
    song_in: Optional[SongCreate] = None,
    service: SongService = Depends(get_song_service),
) -> dict:
    """Add a song; ``titulo``, ``artista`` and ``tono`` are required."""
    with storage_errors("Error guardando canción"):
        song = await service.create_song(song_in)
    return {"message": "Canción agregada", "cancion": song}


@router.put("/{song_id}", response_model=SongMessage)
async def update_song(
    song_id: str,
    song_in: Optional[SongUpdate] = None,
    service: SongService = Depends(get_song_service),
) -> dict:
    """Partially update a song.

    Only the fields present in the body are changed.  Returns HTTP 404
    if no song has the given id.
    """
    with storage_errors("Error actualizando canción"):
        song = await service.update_song(song_id, song_in)
    return {"message": "Canción actualizada", "cancion": song}


@router.delete("/{song_id}", response_model=SongDeleted)
async def delete_song(
    song_id: str,
    id: Optional[str] = Query(None, description="Fallback id when the path segment is not a number"),
    service: SongService = Depends(get_song_service),
) -> dict:
    """Delete a song by id.

    The id is taken from the path; when the path segment is not a
    usable number (or is ``0``) the ``id`` query parameter is used
    instead.  Returns HTTP 404 if no song matched.
    """
    target = coerce_id(song_id) or coerce_id(id)
    with storage_errors("Error eliminando canción"):
        deleted_id = await service.delete_song(target)
    return {"message": "Canción eliminada", "id": deleted_id}
