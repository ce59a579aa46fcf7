"""
Measurement request model.

Defines the MeasurementRequest dataclass, the canonical unit POSTed to the
growth API, and the helpers that build it from loosely typed caller input
(spreadsheet cells, click options, pandas rows).
"""

from __future__ import annotations

import json
import numbers
import re
import typing
from dataclasses import dataclass, field
from datetime import date, datetime

from .errors import ValidationError

_ISO_DATE_PREFIX = re.compile(r"^(\d{4}-\d{2}-\d{2})")

# Order of keys in the JSON body
PAYLOAD_KEYS = (
    "birth_date",
    "observation_date",
    "sex",
    "gestation_weeks",
    "gestation_days",
    "measurement_method",
    "observation_value",
)


@dataclass(frozen=True)
class MeasurementRequest:
    """
    One validated measurement, ready to be sent to the growth API.

    Attributes:
        birth_date: ISO date string 'YYYY-MM-DD'.
        observation_date: ISO date string 'YYYY-MM-DD'.
        gestation_weeks: Completed weeks of gestation at birth.
        gestation_days: Additional days of gestation at birth.
        sex: 'male' or 'female'.
        measurement_method: One of 'height', 'weight', 'ofc', 'bmi'.
        observation_value: The measured value.
        primary_api_key: Subscription key; sent as a header, never in the body.
    """

    birth_date: str
    observation_date: str
    gestation_weeks: int | float
    gestation_days: int | float
    sex: str
    measurement_method: str
    observation_value: int | float
    primary_api_key: str | None = field(default=None, repr=False)

    def to_payload(self) -> dict[str, typing.Any]:
        return {key: getattr(self, key) for key in PAYLOAD_KEYS}

    def to_json(self) -> str:
        """Serialize the payload; identical requests give identical text."""
        return json.dumps(self.to_payload(), separators=(",", ":"))


def to_iso_date(value: typing.Any, field_name: str = "date") -> str:
    """
    Render a date-like value as 'YYYY-MM-DD'.

    Datetimes (including pandas.Timestamp) lose their time of day without
    any timezone conversion. Strings must start with an ISO calendar date.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        m = _ISO_DATE_PREFIX.match(value.strip())
        if m:
            try:
                return date.fromisoformat(m.group(1)).isoformat()
            except ValueError:
                pass
    raise ValidationError(f"{field_name} {value!r} is not a valid date", field=field_name)


def _plain_number(value: typing.Any) -> int | float:
    # numpy scalars and numeric strings are not JSON serializable as-is
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            return float(text)
    if isinstance(value, numbers.Integral):
        return int(value)
    return float(value)


def build_request(
    birth_date: typing.Any,
    observation_date: typing.Any,
    gestation_weeks: typing.Any,
    gestation_days: typing.Any,
    sex: str,
    measurement_method: str,
    observation_value: typing.Any,
    primary_api_key: str | None = None,
) -> MeasurementRequest:
    """
    Assemble a MeasurementRequest from inputs that already passed validation.
    """
    return MeasurementRequest(
        birth_date=to_iso_date(birth_date, "birth_date"),
        observation_date=to_iso_date(observation_date, "observation_date"),
        gestation_weeks=_plain_number(gestation_weeks),
        gestation_days=_plain_number(gestation_days),
        sex=sex,
        measurement_method=measurement_method,
        observation_value=_plain_number(observation_value),
        primary_api_key=primary_api_key,
    )
