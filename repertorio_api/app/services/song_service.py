"""
Service layer for the song repertoire.

``SongService`` holds all domain logic: presence validation on create,
id assignment, partial updates and deletion.  It talks to storage only
through the ``RepertoireStore`` interface (``read_all``/``write_all``),
so the same code runs against the JSON file in production and against
an in-memory list in tests.

Every mutating operation reads the full list, changes it and writes the
full list back.  There is no locking between requests.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from repertorio_api.app.core.errors import NotFoundError, ValidationError
from repertorio_api.app.core.store import RepertoireStore, Song
from repertorio_api.app.schemas.song import SONG_FIELDS, SongCreate, SongUpdate, coerce_id, next_id

logger = logging.getLogger(__name__)


class SongService:
    """CRUD operations over the repertoire."""

    def __init__(self, store: RepertoireStore) -> None:
        self.store = store

    async def list_songs(self) -> List[Song]:
        """Return the stored songs unchanged and in file order."""
        return await self.store.read_all()

    async def create_song(self, data: Optional[SongCreate]) -> Song:
        """Append a new song and return it with its assigned id.

        ``titulo``, ``artista`` and ``tono`` must all be present and
        truthy, otherwise ``ValidationError`` is raised before the
        store is touched.
        """
        values = data.model_dump() if data is not None else {}
        if not all(values.get(field) for field in SONG_FIELDS):
            raise ValidationError()

        songs = await self.store.read_all()
        song: Song = {"id": next_id(songs)}
        song.update((field, values[field]) for field in SONG_FIELDS)
        songs.append(song)
        await self.store.write_all(songs)
        logger.info("Created song %s", song["id"])
        return song

    async def update_song(self, song_id: Any, data: Optional[SongUpdate]) -> Song:
        """Overwrite the fields supplied in ``data`` on song ``song_id``.

        Fields missing from the request are left untouched; fields sent
        with an empty or ``null`` value overwrite the stored one.
        Raises ``NotFoundError`` when no song has that id.
        """
        target = coerce_id(song_id)
        changes: Dict[str, Any] = data.model_dump(exclude_unset=True) if data is not None else {}

        songs = await self.store.read_all()
        index = self._find_index(songs, target)
        if index is None:
            raise NotFoundError()

        song = dict(songs[index])
        song.update((field, changes[field]) for field in SONG_FIELDS if field in changes)
        songs[index] = song
        await self.store.write_all(songs)
        logger.info("Updated song %s (%s)", song.get("id"), ", ".join(sorted(changes)) or "no fields")
        return song

    async def delete_song(self, song_id: Any) -> Any:
        """Remove every song whose id equals ``song_id``.

        Returns the numeric id that was removed.  Raises
        ``NotFoundError`` and leaves the file untouched when nothing
        matched.
        """
        target = coerce_id(song_id)
        songs = await self.store.read_all()
        remaining = [song for song in songs if not self._matches(song, target)]
        if len(remaining) == len(songs):
            raise NotFoundError()
        await self.store.write_all(remaining)
        logger.info("Deleted song %s", target)
        return target

    @classmethod
    def _find_index(cls, songs: List[Song], target: Any) -> Optional[int]:
        for index, song in enumerate(songs):
            if cls._matches(song, target):
                return index
        return None

    @staticmethod
    def _matches(song: Any, target: Any) -> bool:
        if target is None or not isinstance(song, dict):
            return False
        return coerce_id(song.get("id")) == target
