"""Pytest fixtures for the repertoire service.

Every test gets its own repertoire file (or in-memory store) so tests
never touch the project's ``repertorio.json``.
"""

from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from repertorio_api.app.core.config import settings
from repertorio_api.app.core.store import InMemoryStore, JsonFileStore
from repertorio_api.app.main import create_app


@pytest.fixture
def repertoire_path(tmp_path):
    """Path of a repertoire file that does not exist yet."""
    return tmp_path / "repertorio.json"


@pytest.fixture
def app_settings(tmp_path, repertoire_path):
    return replace(
        settings,
        repertoire_path=str(repertoire_path),
        public_dir=str(tmp_path / "public"),
    )


@pytest.fixture
def file_store(repertoire_path):
    return JsonFileStore(repertoire_path)


@pytest.fixture
def client(app_settings):
    """Client for an app backed by the temporary repertoire file."""
    return TestClient(create_app(app_settings))


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def memory_client(app_settings, memory_store):
    """Client for an app backed by an in-memory store."""
    return TestClient(create_app(app_settings, store=memory_store))
