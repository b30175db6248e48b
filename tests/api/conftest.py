"""Fixtures for API tests: the app wired with the local collaborators."""

import pytest
from fastapi.testclient import TestClient

from rag_notes.api import create_app
from rag_notes.config import Settings


@pytest.fixture
def make_client():
    """Build a client for an app with the local collaborators and given overrides."""

    def _make(**overrides) -> TestClient:
        settings = Settings(_env_file=None, embedding_dimension=256, **overrides)
        return TestClient(create_app(settings))

    return _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def container(client):
    return client.app.state.container
