"""
Application error taxonomy.

Every failure that the API reports to clients is raised as a subclass
of ``RepertoireError``.  Each subclass fixes the HTTP status code it
maps to; the ``error`` text is what clients see in the ``error`` field
of the JSON response, while ``detalle`` carries the underlying
diagnostic message (only storage faults set it).

The exception handler installed by ``create_app`` turns these into
JSON responses, so endpoints and services simply raise.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional


class RepertoireError(Exception):
    """Base class for errors reported through the HTTP API."""

    status_code: int = 500
    default_error: str = "Error interno"

    def __init__(self, error: Optional[str] = None, detalle: Optional[str] = None) -> None:
        self.error = error or self.default_error
        self.detalle = detalle
        super().__init__(self.error if detalle is None else f"{self.error}: {detalle}")

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.detalle is not None:
            body["detalle"] = self.detalle
        return body


class ValidationError(RepertoireError):
    """A required field is missing from a create payload."""

    status_code = 400
    default_error = "Faltan campos: titulo, artista, tono"


class NotFoundError(RepertoireError):
    """No song exists with the requested id."""

    status_code = 404
    default_error = "Canción no encontrada"


class StorageFault(RepertoireError):
    """Reading, parsing or writing the backing file failed."""

    status_code = 500
    default_error = "Error de almacenamiento"


@contextmanager
def storage_errors(message: str) -> Iterator[None]:
    """Relabel any ``StorageFault`` raised inside the block.

    The store does not know which operation it is serving, so endpoints
    wrap their service call in this context manager to give the fault
    an operation specific ``error`` text, e.g.
    ``"Error guardando canción"``.  The ``detalle`` is kept as is.
    """
    try:
        yield
    except StorageFault as exc:
        exc.error = message
        raise
