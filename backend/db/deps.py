"""Database dependencies for FastAPI routes."""

from collections.abc import Generator
from functools import lru_cache
from pathlib import Path
import os

import duckdb
from fastapi import Depends, HTTPException, status

from backend.db.repository import DuckDBPlotStore, DuckDBSoilDataRepository, ensure_schema
from backend.services import logger
from backend.services.soil_data import SoilDataService

DB_ENV_VAR = "SOILDATA_DB_PATH"
DEFAULT_DB_PATH = Path("data/soildata.duckdb")


@lru_cache(maxsize=1)
def get_db_path() -> Path:
    """Resolve the DuckDB path from the environment, falling back to the default."""
    env_override = os.environ.get(DB_ENV_VAR)
    if env_override:
        return Path(env_override).expanduser()
    return DEFAULT_DB_PATH.expanduser()


def open_connection(db_path: Path | None = None) -> duckdb.DuckDBPyConnection:
    """Open the DuckDB file, creating it and its schema when missing."""
    path = db_path or get_db_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    connection = duckdb.connect(str(path))
    ensure_schema(connection)
    return connection


def get_duckdb() -> Generator[duckdb.DuckDBPyConnection, None, None]:
    """Yield a DuckDB connection for the duration of a request."""
    db_path = get_db_path()
    try:
        connection = open_connection(db_path)
    except (OSError, duckdb.Error) as exc:
        logger.error("Could not open DuckDB at %s: %s", db_path, exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=(
                f"DuckDB database at {db_path} is unavailable. "
                f"Set {DB_ENV_VAR} to override the location."
            ),
        ) from exc

    try:
        yield connection
    finally:
        connection.close()


def get_soil_data_service(
    connection: duckdb.DuckDBPyConnection = Depends(get_duckdb),
) -> SoilDataService:
    """Wire the DuckDB-backed stores into the service for one request."""
    return SoilDataService(
        repository=DuckDBSoilDataRepository(connection),
        plots=DuckDBPlotStore(connection),
    )
