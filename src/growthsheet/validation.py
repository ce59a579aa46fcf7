"""
Input validation for the growth functions.

Checks run in a fixed order and stop at the first failure, so the caller
always sees a single message naming the offending input.
"""

from __future__ import annotations

import math
import numbers
import typing

from .errors import ValidationError

SEXES = ("male", "female")
MEASUREMENT_METHODS = ("height", "weight", "ofc", "bmi")


def _is_missing(value: typing.Any) -> bool:
    # pandas hands us NaN / NaT for empty cells
    if value is None:
        return True
    try:
        return bool(value != value)
    except (TypeError, ValueError):
        return False


def is_number(value: typing.Any) -> bool:
    """
    True for finite ints/floats (bools excluded) and strings that parse as one.
    """
    if isinstance(value, bool) or value is None:
        return False
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, numbers.Real):
        return False
    try:
        return math.isfinite(float(value))
    except (OverflowError, ValueError):
        # ints beyond float range cannot travel as JSON numbers
        return False


def _quote_options(options: typing.Sequence[str]) -> str:
    quoted = [f'"{o}"' for o in options]
    if len(quoted) == 1:
        return quoted[0]
    return ", ".join(quoted[:-1]) + f", or {quoted[-1]}"


def validate_inputs(
    birth_date: typing.Any,
    observation_date: typing.Any,
    gestation_weeks: typing.Any,
    gestation_days: typing.Any,
    sex: typing.Any,
    measurement_method: typing.Any,
    observation_value: typing.Any,
    data_to_return: typing.Any,
    data_to_return_options: typing.Sequence[str],
    primary_api_key: typing.Any,
) -> None:
    """
    Validate the arguments of a growth function; returns nothing on success.

    Raises:
        ValidationError: for the first failing check, in this order:
            birth_date, observation_date, gestation weeks/days, sex,
            measurement_method, observation_value, primary_api_key,
            data_to_return.
    """
    if _is_missing(birth_date):
        raise ValidationError("birth_date is null", field="birth_date")

    if _is_missing(observation_date):
        raise ValidationError("observation_date is null", field="observation_date")

    if not is_number(gestation_weeks) or not is_number(gestation_days):
        raise ValidationError("The gestations are not numbers", field="gestation")

    if sex not in SEXES:
        raise ValidationError(
            f'{sex!r} is not a correct sex. Must be one of "male" or "female"',
            field="sex",
        )

    if measurement_method not in MEASUREMENT_METHODS:
        raise ValidationError(
            f"{measurement_method!r} is not a correct measurement method",
            field="measurement_method",
        )

    if not is_number(observation_value):
        raise ValidationError(
            f"{observation_value!r} is not a number.", field="observation_value"
        )

    if primary_api_key is None:
        raise ValidationError("primary_api_key is null", field="primary_api_key")

    if data_to_return not in data_to_return_options:
        raise ValidationError(
            f"{data_to_return!r} can only be {_quote_options(data_to_return_options)}",
            field="data_to_return",
        )
