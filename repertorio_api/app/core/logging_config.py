"""
Logging setup for the repertoire service.

Everything logs through the standard ``logging`` module with
``logging.getLogger(__name__)``.  ``setup_logging`` is called by
``create_app`` with the ``LOG_LEVEL`` and ``LOG_FILE`` settings; the
first call wins, later calls (one per app built in the tests) leave the
handlers alone.

Uvicorn installs its own handlers on the ``uvicorn`` loggers, so only
the root logger is configured here.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _build_handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    return handlers


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Send application logs to the console and, optionally, a file.

    ``level`` is a level name such as ``"debug"`` or ``"INFO"``; an
    unknown name means ``INFO``.  ``logfile`` may be relative to the
    working directory and its parent directory is created if needed.
    ``logger`` defaults to the root logger.  Nothing happens when it
    already has handlers.
    """
    target = logger or logging.getLogger()
    if target.handlers:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(logfile):
        handler.setFormatter(formatter)
        target.addHandler(handler)
    target.setLevel(getattr(logging, level.upper(), logging.INFO))
