"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with no configuration at all: it listens on port 3000
and keeps the repertoire in ``repertorio.json`` next to the package.
"""

import os
from dataclasses import dataclass
from pathlib import Path


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Repertorio API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG", "false")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file.  When empty only the console handler
    # is installed.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path of the JSON file holding the song list.  Relative paths are
    # resolved against the project root by ``resolve_path``.
    repertoire_path: str = os.getenv("REPERTORIO_PATH", "repertorio.json")

    # Directory with the client assets; ``index.html`` inside it is
    # served at ``/``.
    public_dir: str = os.getenv("PUBLIC_DIR", "public")

    # Write to a temporary file and rename it over the repertoire file
    # instead of truncating it in place.
    atomic_writes: bool = _env_flag("ATOMIC_WRITES", "true")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))


def resolve_path(value: str) -> Path:
    """Resolve ``value`` relative to the project root unless absolute."""
    path = Path(value)
    if path.is_absolute():
        return path
    base_dir = Path(__file__).resolve().parent.parent.parent.parent  # project root
    return (base_dir / path).resolve()


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
