"""Read-only plot lookups for client selectors."""

from fastapi import APIRouter, Depends

from backend.db.deps import get_duckdb
from backend.db.repository import DuckDBPlotStore
from backend.models.soil_data import PlotSummary

router = APIRouter()


@router.get("", response_model=list[PlotSummary])
def list_plots(connection = Depends(get_duckdb)) -> list[PlotSummary]:
    """Return every plot as ``{id, name}``, ordered by name."""
    return DuckDBPlotStore(connection).list_minimal()
