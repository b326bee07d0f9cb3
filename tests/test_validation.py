import math

import pytest

from backend.errors import PrecisionViolation, RangeViolation, ValidationFailure
from backend.services.validation import decimal_places, validate_measurement


def valid(**overrides):
    values = {"moisture": 45.67, "ph": 7.2, "temperature": 23.5}
    values.update(overrides)
    return values


def test_valid_measurement_passes():
    validate_measurement(valid())


@pytest.mark.parametrize(
    "field,value",
    [("moisture", 0), ("moisture", 100), ("ph", 0), ("ph", 14), ("temperature", -50), ("temperature", 100)],
)
def test_bounds_are_inclusive(field, value):
    validate_measurement(valid(**{field: value}))


@pytest.mark.parametrize(
    "field,value,label,bounds",
    [
        ("moisture", -0.01, "moisture", (0, 100)),
        ("moisture", 150, "moisture", (0, 100)),
        ("ph", 14.01, "pH", (0, 14)),
        ("temperature", -50.1, "temperature", (-50, 100)),
    ],
)
def test_out_of_range_raises(field, value, label, bounds):
    with pytest.raises(RangeViolation) as excinfo:
        validate_measurement(valid(**{field: value}))
    assert excinfo.value.field == label
    assert (excinfo.value.lower, excinfo.value.upper) == bounds
    assert excinfo.value.to_dict()["bounds"] == list(bounds)


def test_nan_is_a_range_violation():
    with pytest.raises(RangeViolation):
        validate_measurement(valid(ph=math.nan))


def test_too_many_decimal_places():
    with pytest.raises(PrecisionViolation) as excinfo:
        validate_measurement(valid(moisture=45.678))
    assert excinfo.value.places == 2

    with pytest.raises(PrecisionViolation):
        validate_measurement(valid(temperature=23.55))


def test_partial_checks_only_present_fields():
    validate_measurement({"temperature": -12.5}, partial=True)
    with pytest.raises(RangeViolation):
        validate_measurement({"moisture": 150}, partial=True)


def test_missing_field_on_full_validation():
    values = valid()
    del values["ph"]
    with pytest.raises(ValidationFailure):
        validate_measurement(values)


def test_decimal_places():
    assert decimal_places(7) == 0
    assert decimal_places(7.2) == 1
    assert decimal_places(45.67) == 2
    assert decimal_places(100.0) == 1
