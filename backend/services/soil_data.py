"""CRUD orchestration for soil data measurements."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

import duckdb

from backend.db.repository import PlotStore, SoilDataRepository
from backend.errors import NotFoundError, UnexpectedFailure
from backend.models.pagination import Page
from backend.models.query import SoilDataQuery, to_utc_naive
from backend.models.soil_data import SoilData, SoilDataCreate, SoilDataUpdate
from backend.services import logger
from backend.services.validation import validate_measurement

MEASUREMENT = "Soil data"
PLOT = "Plot"


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


@contextmanager
def datastore_errors(operation: str, record_id: Any = None) -> Iterator[None]:
    """Log datastore faults with context and re-raise them without details."""
    try:
        yield
    except duckdb.Error as exc:
        logger.exception(
            "Datastore failure while %s soil data (id=%s)", operation, record_id
        )
        raise UnexpectedFailure(operation, record_id) from exc


class SoilDataService:
    """Validates requests and hands them to the repository.

    Each call either completes fully or raises before anything is written:
    ``NotFoundError`` for a missing record or plot, ``ValidationFailure`` for a
    field outside its domain, ``UnexpectedFailure`` for datastore faults.
    """

    def __init__(self, repository: SoilDataRepository, plots: PlotStore):
        self.repository = repository
        self.plots = plots

    def list(self, query: SoilDataQuery) -> Page[SoilData]:
        with datastore_errors("fetching"):
            records, total = self.repository.list(query.filter, query.pagination)
        logger.info("Retrieved %s of %s soil data records", len(records), total)
        return Page[SoilData](
            data=records,
            total=total,
            page=query.pagination.page,
            limit=query.pagination.limit,
        )

    def get(self, record_id: UUID) -> SoilData:
        with datastore_errors("fetching", record_id):
            record = self.repository.get_by_id(record_id)
        if record is None:
            logger.warning("Soil data with ID %s not found", record_id)
            raise NotFoundError(MEASUREMENT, record_id)
        return record

    def _require_plot(self, plot_id: UUID) -> None:
        if not self.plots.exists_by_id(plot_id):
            logger.warning("Plot with ID %s not found", plot_id)
            raise NotFoundError(PLOT, plot_id)

    def _prepare(self, payload: SoilDataCreate) -> dict[str, Any]:
        """Validate a create payload and turn it into a complete row."""
        values = payload.model_dump()
        self._require_plot(payload.plot_id)
        validate_measurement(values)
        values["id"] = uuid4()
        values["timestamp"] = to_utc_naive(payload.timestamp) or utc_now()
        return values

    def create(self, payload: SoilDataCreate) -> SoilData:
        with datastore_errors("creating"):
            record = self.repository.insert(self._prepare(payload))
        logger.info("Created soil data record with ID %s", record.id)
        return record

    def update(self, record_id: UUID, payload: SoilDataUpdate) -> SoilData:
        """Apply a partial update.

        Only supplied fields are validated; the plot is looked up only when
        ``plotId`` is supplied and differs from the stored one.
        """
        changes = payload.changes()
        with datastore_errors("updating", record_id):
            current = self.repository.get_by_id(record_id)
            if current is None:
                logger.warning("Soil data with ID %s not found", record_id)
                raise NotFoundError(MEASUREMENT, record_id)

            validate_measurement(changes, partial=True)
            if "plot_id" in changes and changes["plot_id"] != current.plot_id:
                self._require_plot(changes["plot_id"])
            if "timestamp" in changes:
                changes["timestamp"] = to_utc_naive(changes["timestamp"])

            updated = self.repository.update(record_id, changes)

        if updated is None:
            # deleted between the lookup and the write
            raise NotFoundError(MEASUREMENT, record_id)
        logger.info("Updated soil data record with ID %s", record_id)
        return updated

    def delete(self, record_id: UUID) -> None:
        with datastore_errors("deleting", record_id):
            deleted = self.repository.delete(record_id)
        if not deleted:
            logger.warning("Soil data with ID %s not found", record_id)
            raise NotFoundError(MEASUREMENT, record_id)
        logger.info("Deleted soil data record with ID %s", record_id)

    def bulk_create(self, payloads: Sequence[SoilDataCreate]) -> list[SoilData]:
        """Validate the whole batch, then persist it as one transaction."""
        with datastore_errors("bulk creating"):
            rows = [self._prepare(payload) for payload in payloads]
            records = self.repository.bulk_insert(rows)
        logger.info("Bulk created %s soil data records", len(records))
        return records
