"""Pydantic schemas representing soil data measurements."""

from datetime import datetime
from uuid import UUID

from pydantic import UUID4, BaseModel, ConfigDict, Field


class PlotSummary(BaseModel):
    """Minimal projection of a plot, attached to measurements for display."""

    id: UUID
    name: str


class SoilDataCreate(BaseModel):
    """Payload for a new measurement.

    ``timestamp`` is optional; the server stamps the creation time when it is
    missing.
    """

    model_config = ConfigDict(populate_by_name=True)

    plot_id: UUID4 = Field(..., alias="plotId")
    moisture: float = Field(..., description="Soil moisture percentage (0-100)", examples=[45.67])
    ph: float = Field(..., alias="pH", description="Soil pH level (0-14)", examples=[7.2])
    temperature: float = Field(..., description="Soil temperature in Celsius (-50-100)", examples=[23.5])
    timestamp: datetime | None = None


class SoilDataUpdate(BaseModel):
    """Partial update; only the fields sent by the client are applied."""

    model_config = ConfigDict(populate_by_name=True)

    plot_id: UUID4 | None = Field(None, alias="plotId")
    moisture: float | None = None
    ph: float | None = Field(None, alias="pH")
    temperature: float | None = None
    timestamp: datetime | None = None

    def changes(self) -> dict:
        """Fields explicitly supplied with a non-null value."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class SoilData(BaseModel):
    """A stored soil measurement tied to a plot."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    plot_id: UUID = Field(..., alias="plotId")
    moisture: float
    ph: float = Field(..., alias="pH")
    temperature: float
    timestamp: datetime
    plot: PlotSummary | None = None


class DeleteConfirmation(BaseModel):
    message: str
