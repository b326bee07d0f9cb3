"""Pytest fixtures shared by the soil data tests."""

from datetime import datetime, timedelta
from uuid import uuid4

import duckdb
import pytest
from fastapi.testclient import TestClient

from backend.api.app import app
from backend.db.deps import DB_ENV_VAR, get_db_path, open_connection
from backend.db.repository import DuckDBPlotStore, DuckDBSoilDataRepository, ensure_schema
from backend.services.soil_data import SoilDataService

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0)


@pytest.fixture
def connection():
    """In-memory DuckDB with the soil data schema applied."""
    conn = duckdb.connect(":memory:")
    ensure_schema(conn)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def plots(connection):
    return DuckDBPlotStore(connection)


@pytest.fixture
def repository(connection):
    return DuckDBSoilDataRepository(connection)


@pytest.fixture
def service(repository, plots):
    return SoilDataService(repository, plots)


@pytest.fixture
def plot(plots):
    return plots.insert(uuid4(), "North Field")


def _make_row(plot_id, hours_ago=0, **overrides):
    """A complete soil_data row as the service would hand it to the repository."""
    row = {
        "id": uuid4(),
        "plot_id": plot_id,
        "moisture": 30.0,
        "ph": 6.5,
        "temperature": 18.0,
        "timestamp": BASE_TIME - timedelta(hours=hours_ago),
    }
    row.update(overrides)
    return row


@pytest.fixture
def db_file(tmp_path, monkeypatch):
    """Point the API at a fresh DuckDB file for the duration of a test."""
    path = tmp_path / "soildata.duckdb"
    monkeypatch.setenv(DB_ENV_VAR, str(path))
    get_db_path.cache_clear()
    yield path
    get_db_path.cache_clear()


@pytest.fixture
def api_plot(db_file):
    conn = open_connection(db_file)
    try:
        return DuckDBPlotStore(conn).insert(uuid4(), "Greenhouse A")
    finally:
        conn.close()


@pytest.fixture
def client(db_file):
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_row():
    return _make_row
