"""Exception taxonomy for soil data operations."""

from typing import Any


class SoilDataError(Exception):
    """Base class for errors raised by the soil data service."""


class NotFoundError(SoilDataError):
    """Raised when a measurement or its referenced plot does not exist."""

    def __init__(self, entity: str, record_id: Any):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} with ID {record_id} not found")


class ValidationFailure(SoilDataError):
    """Raised when a payload breaks a field invariant."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"detail": str(self), "field": self.field}


class RangeViolation(ValidationFailure):
    """A numeric value outside its closed domain."""

    def __init__(self, field: str, lower: float, upper: float, value: float):
        self.lower = lower
        self.upper = upper
        self.value = value
        super().__init__(field, f"{field} must be between {lower:g} and {upper:g}, got {value:g}")

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["bounds"] = [self.lower, self.upper]
        return payload


class PrecisionViolation(ValidationFailure):
    """A numeric value with more decimal places than the column stores."""

    def __init__(self, field: str, places: int, value: float):
        self.places = places
        self.value = value
        super().__init__(field, f"{field} allows at most {places} decimal places, got {value}")

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["places"] = self.places
        return payload


class UnexpectedFailure(SoilDataError):
    """Datastore or infrastructure fault; details stay in the logs."""

    def __init__(self, operation: str, record_id: Any = None):
        self.operation = operation
        self.record_id = record_id
        super().__init__(f"Error {operation} soil data")


__all__ = [
    "NotFoundError",
    "PrecisionViolation",
    "RangeViolation",
    "SoilDataError",
    "UnexpectedFailure",
    "ValidationFailure",
]
