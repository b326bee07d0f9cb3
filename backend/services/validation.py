"""Field invariants enforced before a measurement is written."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping

from backend.errors import PrecisionViolation, RangeViolation, ValidationFailure


@dataclass(frozen=True)
class FieldDomain:
    """Closed interval and decimal precision allowed for a numeric field."""

    label: str
    lower: float
    upper: float
    places: int

    def check(self, value: float) -> None:
        if value < self.lower or value > self.upper:
            raise RangeViolation(self.label, self.lower, self.upper, value)
        if decimal_places(value) > self.places:
            raise PrecisionViolation(self.label, self.places, value)


FIELD_DOMAINS: dict[str, FieldDomain] = {
    "moisture": FieldDomain("moisture", 0, 100, 2),
    "ph": FieldDomain("pH", 0, 14, 2),
    "temperature": FieldDomain("temperature", -50, 100, 1),
}


def decimal_places(value: float) -> int:
    exponent = Decimal(str(value)).as_tuple().exponent
    if not isinstance(exponent, int):
        # NaN and infinities carry a string exponent
        return 0
    return max(0, -exponent)


def validate_measurement(values: Mapping[str, Any], partial: bool = False) -> None:
    """Raise on the first numeric field that breaks its domain.

    With ``partial`` set only the fields present in ``values`` are checked;
    otherwise a missing numeric field is itself an error.
    """
    for name, domain in FIELD_DOMAINS.items():
        if name not in values or values[name] is None:
            if partial:
                continue
            raise ValidationFailure(domain.label, f"{domain.label} is required")
        value = values[name]
        if value != value:
            raise RangeViolation(domain.label, domain.lower, domain.upper, value)
        domain.check(value)
