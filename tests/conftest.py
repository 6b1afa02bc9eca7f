import pytest
from fastapi.testclient import TestClient

from recipe_importer.app.core.config import get_settings
from recipe_importer.app.main import create_app
from recipe_importer.app.services.debug_dump import DebugDumpService


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    monkeypatch.setenv("RECIPE_DEBUG_DUMP_ENABLED", "false")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def dump_dir(tmp_path):
    return tmp_path / "imports"


@pytest.fixture
def dump(dump_dir):
    return DebugDumpService(enabled=True, base_dir=dump_dir)
