"""DuckDB persistence for soil data measurements and plot lookups."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Protocol
from uuid import UUID

import duckdb

from backend.models.query import Pagination, SoilDataFilter
from backend.models.soil_data import PlotSummary, SoilData

SCHEMA_FILE = Path(__file__).with_name("schema.sql")

SELECT_COLUMNS = (
    "SELECT s.id, s.plot_id, s.moisture, s.ph, s.temperature, s.\"timestamp\", "
    "p.id AS plot_ref, p.name AS plot_name "
    "FROM soil_data s LEFT JOIN plots p ON p.id = s.plot_id "
)

# Columns a partial update may touch, mapped to their SQL placeholders.
UPDATABLE_COLUMNS = {
    "plot_id": "CAST(? AS UUID)",
    "moisture": "?",
    "ph": "?",
    "temperature": "?",
    "timestamp": "?",
}

RANGE_FILTERS = (
    ("s.\"timestamp\"", "from_date", "to_date"),
    ("s.moisture", "min_moisture", "max_moisture"),
    ("s.ph", "min_ph", "max_ph"),
    ("s.temperature", "min_temperature", "max_temperature"),
)


class SoilDataRepository(Protocol):
    """Persistence capability the service depends on."""

    def list(self, query_filter: SoilDataFilter, pagination: Pagination) -> tuple[list[SoilData], int]: ...

    def get_by_id(self, record_id: UUID) -> SoilData | None: ...

    def insert(self, record: Mapping[str, Any]) -> SoilData: ...

    def update(self, record_id: UUID, changes: Mapping[str, Any]) -> SoilData | None: ...

    def delete(self, record_id: UUID) -> bool: ...

    def bulk_insert(self, records: Sequence[Mapping[str, Any]]) -> list[SoilData]: ...


class PlotStore(Protocol):
    """Read access to plots, which this service references but does not own."""

    def exists_by_id(self, plot_id: UUID) -> bool: ...

    def get_minimal_projection(self, plot_id: UUID) -> PlotSummary | None: ...

    def list_minimal(self) -> list[PlotSummary]: ...


def ensure_schema(connection: duckdb.DuckDBPyConnection) -> None:
    """Execute the schema SQL file; every statement is idempotent."""
    sql = SCHEMA_FILE.read_text(encoding="utf-8")
    connection.execute(sql)


def _to_float(value: Any) -> float:
    if isinstance(value, Decimal):
        return float(value)
    return value


def _to_uuid(value: Any) -> UUID:
    if isinstance(value, UUID):
        return value
    return UUID(str(value))


def _row_to_model(row: Sequence[Any]) -> SoilData:
    """Convert a joined DuckDB tuple into a Pydantic model."""
    record_id, plot_id, moisture, ph, temperature, timestamp, plot_ref, plot_name = row
    plot = None
    if plot_ref is not None:
        plot = PlotSummary(id=_to_uuid(plot_ref), name=plot_name)
    return SoilData(
        id=_to_uuid(record_id),
        plot_id=_to_uuid(plot_id),
        moisture=_to_float(moisture),
        ph=_to_float(ph),
        temperature=_to_float(temperature),
        timestamp=timestamp.replace(tzinfo=timezone.utc),
        plot=plot,
    )


def build_where_clause(query_filter: SoilDataFilter) -> tuple[str, list[Any]]:
    """Translate a filter into a WHERE clause and its positional parameters."""
    conditions: list[str] = []
    parameters: list[Any] = []

    if query_filter.plot_id is not None:
        conditions.append("s.plot_id = CAST(? AS UUID)")
        parameters.append(str(query_filter.plot_id))

    for column, lower_key, upper_key in RANGE_FILTERS:
        lower = getattr(query_filter, lower_key)
        upper = getattr(query_filter, upper_key)
        if lower is not None:
            conditions.append(f"{column} >= ?")
            parameters.append(lower)
        if upper is not None:
            conditions.append(f"{column} <= ?")
            parameters.append(upper)

    where_clause = f"WHERE {' AND '.join(conditions)} " if conditions else ""
    return where_clause, parameters


class DuckDBSoilDataRepository:
    """Soil data records stored in the ``soil_data`` table."""

    def __init__(self, connection: duckdb.DuckDBPyConnection):
        self.connection = connection

    def list(self, query_filter: SoilDataFilter, pagination: Pagination) -> tuple[list[SoilData], int]:
        """Return one page of matches, newest first, plus the total match count.

        Order among rows with equal timestamps is not guaranteed.
        """
        where_clause, parameters = build_where_clause(query_filter)

        select_sql = (
            SELECT_COLUMNS
            + where_clause
            + "ORDER BY s.\"timestamp\" DESC "
            "LIMIT ? OFFSET ?"
        )
        select_params = [*parameters, pagination.limit, pagination.offset]
        rows = self.connection.execute(select_sql, select_params).fetchall()

        count_sql = f"SELECT COUNT(*) FROM soil_data s {where_clause}"
        total = self.connection.execute(count_sql, parameters).fetchone()[0]

        return [_row_to_model(row) for row in rows], total

    def get_by_id(self, record_id: UUID) -> SoilData | None:
        row = self.connection.execute(
            SELECT_COLUMNS + "WHERE s.id = CAST(? AS UUID)",
            [str(record_id)],
        ).fetchone()
        if row is None:
            return None
        return _row_to_model(row)

    def _insert_row(self, record: Mapping[str, Any]) -> None:
        self.connection.execute(
            "INSERT INTO soil_data (id, plot_id, moisture, ph, temperature, \"timestamp\") "
            "VALUES (CAST(? AS UUID), CAST(? AS UUID), ?, ?, ?, ?)",
            [
                str(record["id"]),
                str(record["plot_id"]),
                record["moisture"],
                record["ph"],
                record["temperature"],
                record["timestamp"],
            ],
        )

    def insert(self, record: Mapping[str, Any]) -> SoilData:
        self._insert_row(record)
        return self.get_by_id(record["id"])

    def update(self, record_id: UUID, changes: Mapping[str, Any]) -> SoilData | None:
        assignments: list[str] = []
        parameters: list[Any] = []
        for column, value in changes.items():
            if column not in UPDATABLE_COLUMNS:
                raise KeyError(f"Column {column!r} cannot be updated")
            quoted = f'"{column}"' if column == "timestamp" else column
            assignments.append(f"{quoted} = {UPDATABLE_COLUMNS[column]}")
            parameters.append(str(value) if column == "plot_id" else value)

        if not assignments:
            return self.get_by_id(record_id)

        updated = self.connection.execute(
            f"UPDATE soil_data SET {', '.join(assignments)} "
            "WHERE id = CAST(? AS UUID) RETURNING id",
            [*parameters, str(record_id)],
        ).fetchone()
        if updated is None:
            return None
        return self.get_by_id(record_id)

    def delete(self, record_id: UUID) -> bool:
        deleted = self.connection.execute(
            "DELETE FROM soil_data WHERE id = CAST(? AS UUID) RETURNING id",
            [str(record_id)],
        ).fetchone()
        return deleted is not None

    def bulk_insert(self, records: Sequence[Mapping[str, Any]]) -> list[SoilData]:
        """Insert every record in one transaction; a failure persists none of them."""
        self.connection.begin()
        try:
            for record in records:
                self._insert_row(record)
        except Exception:
            self.connection.rollback()
            raise
        self.connection.commit()
        return [self.get_by_id(record["id"]) for record in records]


class DuckDBPlotStore:
    """Plot lookups against the ``plots`` table."""

    def __init__(self, connection: duckdb.DuckDBPyConnection):
        self.connection = connection

    def exists_by_id(self, plot_id: UUID) -> bool:
        row = self.connection.execute(
            "SELECT 1 FROM plots WHERE id = CAST(? AS UUID)",
            [str(plot_id)],
        ).fetchone()
        return row is not None

    def get_minimal_projection(self, plot_id: UUID) -> PlotSummary | None:
        row = self.connection.execute(
            "SELECT id, name FROM plots WHERE id = CAST(? AS UUID)",
            [str(plot_id)],
        ).fetchone()
        if row is None:
            return None
        return PlotSummary(id=_to_uuid(row[0]), name=row[1])

    def list_minimal(self) -> list[PlotSummary]:
        rows = self.connection.execute("SELECT id, name FROM plots ORDER BY name").fetchall()
        return [PlotSummary(id=_to_uuid(row[0]), name=row[1]) for row in rows]

    def insert(self, plot_id: UUID, name: str) -> PlotSummary:
        """Register a plot; used by seeding and tests, not by the API."""
        self.connection.execute(
            "INSERT INTO plots (id, name) VALUES (CAST(? AS UUID), ?)",
            [str(plot_id), name],
        )
        return PlotSummary(id=plot_id, name=name)
