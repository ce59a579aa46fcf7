"""
Tests for output modes and response projection.
"""

import json

import pytest

from growthsheet.errors import EmptyResultError, ValidationError
from growthsheet.projection import (
    AGE_FIELDS,
    SDS_CENTILE_FIELDS,
    AgeMode,
    SdsCentileMode,
    column_labels,
    parse_calculation,
    project_decimal_age,
    project_sds_centile,
)


@pytest.mark.parametrize(
    "mode, expected",
    [
        (SdsCentileMode.BOTH, [[-0.2, -0.5, 42.1, 30.9]]),
        (SdsCentileMode.SDS, [[-0.2, -0.5]]),
        (SdsCentileMode.CENTILES, [[42.1, 30.9]]),
    ],
)
def test_project_sds_centile(calculation, mode, expected):
    assert project_sds_centile(calculation, mode) == expected


@pytest.mark.parametrize(
    "mode, expected",
    [
        (AgeMode.BOTH, [[0.7748117727583846, 0.6406570841889117]]),
        (AgeMode.CHRON, [[0.7748117727583846]]),
        (AgeMode.CORR, [[0.6406570841889117]]),
    ],
)
def test_project_decimal_age(calculation, mode, expected):
    assert project_decimal_age(calculation, mode) == expected


def test_absent_values_project_to_none():
    results = {"measurement_calculated_values": {"chronological_sds": 1.5}}
    assert project_sds_centile(results, SdsCentileMode.SDS) == [[None, 1.5]]


def test_parse_calculation_requires_calculated_values():
    with pytest.raises(EmptyResultError):
        parse_calculation(json.dumps({"detail": "Subscription key missing"}))
    with pytest.raises(EmptyResultError):
        parse_calculation("null")
    with pytest.raises(EmptyResultError):
        parse_calculation('{"measurement_calculated_values": null}')


def test_parse_calculation_malformed_json_propagates():
    with pytest.raises(json.JSONDecodeError):
        parse_calculation("<html>502 Bad Gateway</html>")


def test_missing_measurement_dates_is_empty_result():
    with pytest.raises(EmptyResultError):
        project_decimal_age({"measurement_calculated_values": {}}, AgeMode.BOTH)


def test_mapping_tables_cover_every_mode():
    assert set(SDS_CENTILE_FIELDS) == set(SdsCentileMode)
    assert set(AGE_FIELDS) == set(AgeMode)
    assert column_labels(AgeMode.CORR) == ("corrected_decimal_age",)


def test_mode_from_label():
    assert SdsCentileMode.from_label("centiles") is SdsCentileMode.CENTILES
    assert AgeMode.from_label(AgeMode.CHRON) is AgeMode.CHRON
    assert SdsCentileMode.options() == ["both", "sds", "centiles"]
    with pytest.raises(ValidationError):
        AgeMode.from_label("centile")
