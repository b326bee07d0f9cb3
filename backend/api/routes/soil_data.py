"""API routes for soil data measurements."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, status

from backend.db.deps import get_soil_data_service
from backend.models.pagination import Page
from backend.models.query import resolve_query
from backend.models.soil_data import DeleteConfirmation, SoilData, SoilDataCreate, SoilDataUpdate
from backend.services.soil_data import SoilDataService

router = APIRouter()


@router.get("", response_model=Page[SoilData])
def list_soil_data(
    plot_id: UUID | None = Query(None, alias="plotId", description="Only readings for this plot"),
    from_date: datetime | None = Query(None, alias="fromDate", description="Earliest timestamp (inclusive)"),
    to_date: datetime | None = Query(None, alias="toDate", description="Latest timestamp (inclusive)"),
    min_moisture: float | None = Query(None, alias="minMoisture"),
    max_moisture: float | None = Query(None, alias="maxMoisture"),
    min_ph: float | None = Query(None, alias="minPh"),
    max_ph: float | None = Query(None, alias="maxPh"),
    min_temperature: float | None = Query(None, alias="minTemperature"),
    max_temperature: float | None = Query(None, alias="maxTemperature"),
    page: int | None = Query(None, description="1-based page number; defaults to 1"),
    limit: int | None = Query(None, description="Page size; defaults to 50, capped at 1000"),
    service: SoilDataService = Depends(get_soil_data_service),
) -> Page[SoilData]:
    """Return soil data measurements, newest first, one page at a time."""
    query = resolve_query(
        plot_id=plot_id,
        from_date=from_date,
        to_date=to_date,
        min_moisture=min_moisture,
        max_moisture=max_moisture,
        min_ph=min_ph,
        max_ph=max_ph,
        min_temperature=min_temperature,
        max_temperature=max_temperature,
        page=page,
        limit=limit,
    )
    return service.list(query)


@router.get("/{record_id}", response_model=SoilData)
def get_soil_data(
    record_id: UUID,
    service: SoilDataService = Depends(get_soil_data_service),
) -> SoilData:
    return service.get(record_id)


@router.post("", response_model=SoilData, status_code=status.HTTP_201_CREATED)
def create_soil_data(
    payload: SoilDataCreate,
    service: SoilDataService = Depends(get_soil_data_service),
) -> SoilData:
    return service.create(payload)


@router.post("/bulk", response_model=list[SoilData], status_code=status.HTTP_201_CREATED)
def bulk_create_soil_data(
    payloads: list[SoilDataCreate] = Body(...),
    service: SoilDataService = Depends(get_soil_data_service),
) -> list[SoilData]:
    """Create many measurements at once; any invalid entry rejects the whole batch."""
    return service.bulk_create(payloads)


@router.put("/{record_id}", response_model=SoilData)
def update_soil_data(
    record_id: UUID,
    payload: SoilDataUpdate,
    service: SoilDataService = Depends(get_soil_data_service),
) -> SoilData:
    return service.update(record_id, payload)


@router.delete("/{record_id}", response_model=DeleteConfirmation)
def delete_soil_data(
    record_id: UUID,
    service: SoilDataService = Depends(get_soil_data_service),
) -> DeleteConfirmation:
    service.delete(record_id)
    return DeleteConfirmation(message="Soil data measurement deleted successfully")
