"""
Pydantic models and id helpers for song records.

A song is stored and exchanged as ``{id, titulo, artista, tono}``.
The request schemas are deliberately loose: presence of the three
fields is checked by the service (a missing field is a 400 with a
fixed message, not a 422 listing pydantic errors), and values are not
type checked.  Records read from the file are returned as plain
dictionaries, unvalidated, so hand-edited data always lists.
"""

import math
from typing import Any, Dict, Iterable, Optional, Union

from pydantic import BaseModel, Field

SONG_FIELDS = ("titulo", "artista", "tono")

Number = Union[int, float]


class SongCreate(BaseModel):
    """Payload for adding a song; all three fields must be truthy."""

    titulo: Any = Field(None, examples=["Bésame mucho"])
    artista: Any = Field(None, examples=["Consuelo Velázquez"])
    tono: Any = Field(None, examples=["Dm"])


class SongUpdate(BaseModel):
    """Payload for a partial update.

    Only the fields present in the request are applied, including
    empty strings and ``null``.
    """

    titulo: Any = None
    artista: Any = None
    tono: Any = None


class SongMessage(BaseModel):
    """Confirmation for a created or updated song.

    ``cancion`` is the record exactly as stored, keys in file order.
    """

    message: str
    cancion: Dict[str, Any]


class SongDeleted(BaseModel):
    message: str
    id: Any


def coerce_id(value: Any) -> Optional[Number]:
    """Return the numeric value of an id, or ``None`` if it has none.

    Ids arrive as path segments, query parameters or values from the
    file, so strings are parsed the same way numbers are compared:
    surrounding whitespace is ignored, an empty string is ``0`` and
    integral values come back as ``int``.  Digit separators (``"1_0"``)
    and non-finite values never match anything and are reported as
    ``None``.
    """
    if isinstance(value, bool):
        number: float = float(value)
    elif isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    if number.is_integer():
        return int(number)
    return number


def next_id(songs: Iterable[dict]) -> int:
    """Id for a new song: highest existing numeric id plus one.

    Records without a usable id count as 0.  Existing ids are never
    renumbered.  The file keeps no high-water mark, so the maximum is
    taken over the songs that remain.
    """
    highest: Number = 0
    for song in songs:
        song_id = coerce_id(song.get("id")) if isinstance(song, dict) else None
        if song_id is not None and song_id > highest:
            highest = song_id
    return math.floor(highest) + 1
