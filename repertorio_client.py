"""Repertorio API client.

A thin wrapper around the song endpoints of the repertoire service,
built on ``requests``.  It is meant for scripts and tooling that need
to read or edit the repertoire without talking HTTP by hand:

* :meth:`RepertorioAPI.list_songs` – return every song.
* :meth:`RepertorioAPI.add_song` – add a song and get it back with its id.
* :meth:`RepertorioAPI.update_song` – change some fields of a song.
* :meth:`RepertorioAPI.delete_song` – remove a song.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a
dictionary with ``status_code`` and ``message``.  The message is built
from the ``error`` and ``detalle`` fields of the service's JSON error
body.

The client supports optional authentication via an API key which is
sent in the ``Authorization`` header, for deployments that put the
service behind an authenticating proxy.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

SONGS_PATH = "/canciones"

Error = Dict[str, Any]


class RepertorioAPI:
    """Client for the repertoire service."""

    def __init__(
        self,
        *,
        base_url: str = "http://localhost:3000",
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:3000``.
            api_key: Optional API key sent as ``Bearer <api_key>``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds for each request.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the service.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/canciones``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = self._error_message(exc.response) if exc.response is not None else ""
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text
        if not isinstance(body, dict):
            return str(body)
        message = body.get("error") or body.get("detail") or ""
        if body.get("detalle"):
            message = f"{message}: {body['detalle']}" if message else str(body["detalle"])
        return message or str(body)

    # ------------------------------------------------------------------
    # Song operations
    # ------------------------------------------------------------------
    def list_songs(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve the whole repertoire.

        Returns:
            A tuple ``(songs, error)``.  ``songs`` is empty on failure.
        """
        data, error = self._request("GET", SONGS_PATH)
        if error:
            return [], error
        return (data if isinstance(data, list) else []), None

    def add_song(self, titulo: str, artista: str, tono: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Add a song.

        Returns:
            A tuple ``(song, error)``; ``song`` includes the assigned ``id``.
        """
        payload = {"titulo": titulo, "artista": artista, "tono": tono}
        data, error = self._request("POST", SONGS_PATH, json_body=payload)
        if error:
            return None, error
        return (data or {}).get("cancion"), None

    def update_song(self, song_id: Any, **fields: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Update the given fields (``titulo``, ``artista``, ``tono``) of a song.

        Fields that are not passed keep their stored values.

        Returns:
            A tuple ``(song, error)`` with the updated song.
        """
        data, error = self._request("PUT", f"{SONGS_PATH}/{song_id}", json_body=fields)
        if error:
            return None, error
        return (data or {}).get("cancion"), None

    def delete_song(self, song_id: Any) -> Tuple[bool, Optional[Error]]:
        """Delete a song.

        Returns:
            A tuple ``(success, error)``.
        """
        data, error = self._request("DELETE", f"{SONGS_PATH}/{song_id}")
        if error:
            return False, error
        return data is not None, None
