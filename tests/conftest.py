"""Shared fixtures: both store implementations and an HTTP client factory."""
import pytest
from fastapi.testclient import TestClient

from blueprints_api.blueprints.models import Blueprint, Point
from blueprints_api.blueprints.persistence.memory import InMemoryBlueprintPersistence
from blueprints_api.blueprints.persistence.sql import SqlBlueprintPersistence
from blueprints_api.config import Settings
from blueprints_api.main import create_app


def pts(*coords):
    return [Point(x=x, y=y) for x, y in coords]


@pytest.fixture
def memory_store():
    return InMemoryBlueprintPersistence()


@pytest.fixture
def sql_store(tmp_path):
    store = SqlBlueprintPersistence.from_url(f"sqlite:///{tmp_path / 'blueprints.db'}")
    yield store
    store.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Runs the test once per store implementation."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def house():
    return Blueprint(author="ana", name="house", points=pts((0, 0), (10, 0), (10, 10)))


@pytest.fixture
def make_client():
    def _make(filter_name="identity", persistence=None, **overrides):
        settings = Settings(filter_name=filter_name, **overrides)
        app = create_app(settings=settings, persistence=persistence or InMemoryBlueprintPersistence())
        return TestClient(app)
    return _make
