"""
Output modes and response projection.

The growth API answers with a nested JSON record. Each public function
picks a fixed, ordered subset of its numbers according to an output mode;
the tables below are the only place that ordering is defined.
"""

from __future__ import annotations

import json
import typing
from enum import Enum

from .errors import EmptyResultError, ValidationError

Row = typing.List[typing.Optional[float]]
Table = typing.List[Row]


class SdsCentileMode(Enum):
    """
    What `sds_centile` returns: SDS and centiles, SDS only or centiles only.
    """
    BOTH = "both"
    SDS = "sds"
    CENTILES = "centiles"

    @classmethod
    def options(cls) -> list[str]:
        return [m.value for m in cls]

    @classmethod
    def from_label(cls, label: typing.Union[str, "SdsCentileMode"]) -> "SdsCentileMode":
        if isinstance(label, cls):
            return label
        try:
            return cls(label)
        except ValueError:
            raise ValidationError(
                f"Unknown SDS/centile output mode: {label!r}", field="data_to_return"
            )


class AgeMode(Enum):
    """
    What `corrected_decimal_age` returns: both ages, chronological or corrected.
    """
    BOTH = "both"
    CHRON = "chron"
    CORR = "corr"

    @classmethod
    def options(cls) -> list[str]:
        return [m.value for m in cls]

    @classmethod
    def from_label(cls, label: typing.Union[str, "AgeMode"]) -> "AgeMode":
        if isinstance(label, cls):
            return label
        try:
            return cls(label)
        except ValueError:
            raise ValidationError(
                f"Unknown decimal age output mode: {label!r}", field="data_to_return"
            )


# Field names under `measurement_calculated_values`, in output order
SDS_CENTILE_FIELDS: dict[SdsCentileMode, tuple[str, ...]] = {
    SdsCentileMode.BOTH: (
        "corrected_sds",
        "chronological_sds",
        "corrected_centile",
        "chronological_centile",
    ),
    SdsCentileMode.SDS: ("corrected_sds", "chronological_sds"),
    SdsCentileMode.CENTILES: ("corrected_centile", "chronological_centile"),
}

# Field names under `measurement_dates`, in output order
AGE_FIELDS: dict[AgeMode, tuple[str, ...]] = {
    AgeMode.BOTH: ("chronological_decimal_age", "corrected_decimal_age"),
    AgeMode.CHRON: ("chronological_decimal_age",),
    AgeMode.CORR: ("corrected_decimal_age",),
}


def parse_calculation(text: str) -> dict[str, typing.Any]:
    """
    Decode a calculation response.

    Malformed JSON propagates as `json.JSONDecodeError`. A well-formed body
    without `measurement_calculated_values` is an empty result whatever the
    HTTP status was.
    """
    results = json.loads(text)
    if not isinstance(results, dict) or results.get("measurement_calculated_values") is None:
        raise EmptyResultError("Null returned from API")
    return results


def _select(group: typing.Mapping[str, typing.Any], fields: tuple[str, ...]) -> Row:
    return [group.get(name) for name in fields]


def project_sds_centile(
    results: typing.Mapping[str, typing.Any], mode: SdsCentileMode = SdsCentileMode.BOTH
) -> Table:
    """
    e.g. mode BOTH -> [[corrected_sds, chronological_sds, corrected_centile, chronological_centile]]
    """
    values = results.get("measurement_calculated_values")
    if not isinstance(values, dict):
        raise EmptyResultError("Null returned from API")
    return [_select(values, SDS_CENTILE_FIELDS[mode])]


def project_decimal_age(
    results: typing.Mapping[str, typing.Any], mode: AgeMode = AgeMode.BOTH
) -> Table:
    """
    e.g. mode BOTH -> [[chronological_decimal_age, corrected_decimal_age]]
    """
    dates = results.get("measurement_dates")
    if not isinstance(dates, dict):
        raise EmptyResultError("No measurement dates returned from API")
    return [_select(dates, AGE_FIELDS[mode])]


def column_labels(mode: typing.Union[SdsCentileMode, AgeMode]) -> tuple[str, ...]:
    """Column headers matching the projected row for `mode`."""
    if isinstance(mode, SdsCentileMode):
        return SDS_CENTILE_FIELDS[mode]
    return AGE_FIELDS[mode]
