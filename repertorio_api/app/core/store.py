"""
Persistence for the repertoire.

The whole song list lives in a single JSON file.  Every operation reads
the complete list and, when it mutates something, writes the complete
list back; there are no partial writes and no locking.  Two requests
that modify the repertoire at the same time may therefore lose one of
the updates.

``JsonFileStore`` is the production implementation.  Blocking file
access is delegated to FastAPI's threadpool so the event loop only
yields at file reads and writes.  ``InMemoryStore`` implements the same
interface on top of a Python list and is used by the tests.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from fastapi.concurrency import run_in_threadpool

from .errors import StorageFault

logger = logging.getLogger(__name__)

Song = Dict[str, Any]


class RepertoireStore(Protocol):
    """Read and replace the full list of songs."""

    async def read_all(self) -> List[Song]:
        ...

    async def write_all(self, songs: List[Song]) -> None:
        ...


class JsonFileStore:
    """Repertoire stored as a pretty printed JSON list on disk.

    A missing file is created containing ``[]`` on first read.  A file
    holding only whitespace reads as an empty list, and so does any
    valid JSON document that is not a list.  Content that is not valid
    JSON is reported as a ``StorageFault`` rather than being reset.
    """

    def __init__(self, path: str | os.PathLike, atomic: bool = True) -> None:
        self.path = Path(path)
        self.atomic = atomic

    async def read_all(self) -> List[Song]:
        return await run_in_threadpool(self._read)

    async def write_all(self, songs: List[Song]) -> None:
        await run_in_threadpool(self._write, songs)

    def _read(self) -> List[Song]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("Repertoire file %s not found, creating it", self.path)
            self._write_text("[]")
            return []
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read repertoire file %s: %s", self.path, exc)
            raise StorageFault(detalle=str(exc)) from exc

        if not text.strip():
            return []
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("Repertoire file %s is not valid JSON: %s", self.path, exc)
            raise StorageFault(detalle=str(exc)) from exc
        if not isinstance(data, list):
            logger.warning("Repertoire file %s does not hold a list, treating it as empty", self.path)
            return []
        return data

    def _write(self, songs: List[Song]) -> None:
        try:
            text = json.dumps(songs, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise StorageFault(detalle=str(exc)) from exc
        self._write_text(text)

    def _write_text(self, text: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if self.atomic:
                tmp_path = self.path.with_name(f"{self.path.name}.tmp")
                tmp_path.write_text(text, encoding="utf-8")
                os.replace(tmp_path, self.path)
            else:
                self.path.write_text(text, encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to write repertoire file %s: %s", self.path, exc)
            raise StorageFault(detalle=str(exc)) from exc


class InMemoryStore:
    """List backed store with the same contract as ``JsonFileStore``.

    Songs are deep-copied on the way in and out so callers cannot
    mutate the stored state without calling ``write_all``.
    """

    def __init__(self, songs: Optional[List[Song]] = None) -> None:
        self._songs: List[Song] = copy.deepcopy(songs or [])
        self.writes = 0

    async def read_all(self) -> List[Song]:
        return copy.deepcopy(self._songs)

    async def write_all(self, songs: List[Song]) -> None:
        self._songs = copy.deepcopy(list(songs))
        self.writes += 1
