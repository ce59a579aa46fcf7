"""
Spreadsheet-callable growth functions.

Each function validates its arguments, POSTs one calculation request to the
growth API and projects the answer to a single-row table (a list holding one
list), which is what a spreadsheet cell range expects back.

Control flow for every call:
    validate_inputs -> build_request -> Transport.post -> parse_calculation -> project_*
"""

from __future__ import annotations

import logging
import typing
from enum import Enum

from . import transport as _transport
from .projection import (
    AgeMode,
    SdsCentileMode,
    Table,
    parse_calculation,
    project_decimal_age,
    project_sds_centile,
)
from .request import MeasurementRequest, build_request
from .transport import RequestsTransport, Transport, build_headers
from .validation import validate_inputs


class Reference(Enum):
    """Growth reference families served by the API on the same calculation contract."""
    UK_WHO = "uk-who"
    TURNER = "turner"
    TRISOMY_21 = "trisomy-21"

    @classmethod
    def from_label(cls, label: typing.Union[str, "Reference"]) -> "Reference":
        if isinstance(label, cls):
            return label
        if not isinstance(label, str):
            raise ValueError(f"Unknown growth reference: {label!r}")
        key = label.strip().lower().replace("_", "-")
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown growth reference: {label!r}")


def endpoint_for(reference: Reference) -> str:
    return f"{_transport.API_BASE_URL}/{reference.value}/calculation"


UK_WHO_CALCULATION_URL = endpoint_for(Reference.UK_WHO)


def _mode_label(data_to_return: typing.Any) -> typing.Any:
    # blank spreadsheet cells arrive as None; enum members are accepted too
    if data_to_return is None:
        return "both"
    if isinstance(data_to_return, Enum):
        return data_to_return.value
    return data_to_return


def _calculate(
    url: str, request: MeasurementRequest, transport: typing.Optional[Transport]
) -> dict[str, typing.Any]:
    if transport is None:
        transport = RequestsTransport()
    text = transport.post(url, request.to_json(), build_headers(request.primary_api_key))
    return parse_calculation(text)


def _evaluate(
    url: str,
    mode_cls: typing.Type[typing.Union[SdsCentileMode, AgeMode]],
    project: typing.Callable[[dict, typing.Any], Table],
    birth_date,
    observation_date,
    gestation_weeks,
    gestation_days,
    sex,
    measurement_method,
    observation_value,
    data_to_return,
    primary_api_key,
    transport: typing.Optional[Transport],
) -> Table:
    label = _mode_label(data_to_return)
    validate_inputs(
        birth_date,
        observation_date,
        gestation_weeks,
        gestation_days,
        sex,
        measurement_method,
        observation_value,
        label,
        mode_cls.options(),
        primary_api_key,
    )
    mode = mode_cls.from_label(label)
    request = build_request(
        birth_date,
        observation_date,
        gestation_weeks,
        gestation_days,
        sex,
        measurement_method,
        observation_value,
        primary_api_key,
    )
    logging.debug(f"{mode_cls.__name__} request {request!r} mode={mode.value}")
    return project(_calculate(url, request, transport), mode)


def uk_who_sds_centile(
    birth_date,
    observation_date,
    gestation_weeks,
    gestation_days,
    sex,
    measurement_method,
    observation_value,
    data_to_return="both",
    primary_api_key=None,
    *,
    transport: typing.Optional[Transport] = None,
) -> Table:
    """
    SDS and/or centile of a measurement against the UK-WHO reference.

    Parameters
    ----------
    birth_date, observation_date : date, datetime or 'YYYY-MM-DD' str
    gestation_weeks, gestation_days : int
    sex : str
        'male' or 'female'.
    measurement_method : str
        'height', 'weight', 'ofc' or 'bmi'.
    observation_value : float
    data_to_return : str, optional
        'both' (default), 'sds' or 'centiles'.
    primary_api_key : str
        Subscription key, passed through as a request header.
    transport : Transport, optional
        Defaults to a new `RequestsTransport`.

    Returns
    -------
    list of list
        'both'     -> [[corrected_sds, chronological_sds, corrected_centile, chronological_centile]]
        'sds'      -> [[corrected_sds, chronological_sds]]
        'centiles' -> [[corrected_centile, chronological_centile]]

    Raises
    ------
    ValidationError
        Bad input; nothing is sent.
    TransportError
        The POST failed.
    EmptyResultError
        The API returned no calculated values.
    """
    return _evaluate(
        UK_WHO_CALCULATION_URL,
        SdsCentileMode,
        project_sds_centile,
        birth_date,
        observation_date,
        gestation_weeks,
        gestation_days,
        sex,
        measurement_method,
        observation_value,
        data_to_return,
        primary_api_key,
        transport,
    )


def uk_who_corrected_decimal_age(
    birth_date,
    observation_date,
    gestation_weeks,
    gestation_days,
    sex,
    measurement_method,
    observation_value,
    data_to_return="both",
    primary_api_key=None,
    *,
    transport: typing.Optional[Transport] = None,
) -> Table:
    """
    Chronological and/or gestation-corrected decimal age (UK-WHO endpoint).

    `data_to_return` is 'both' (default), 'chron' or 'corr':
        'both'  -> [[chronological_decimal_age, corrected_decimal_age]]
        'chron' -> [[chronological_decimal_age]]
        'corr'  -> [[corrected_decimal_age]]

    Other arguments and errors as for `uk_who_sds_centile`.
    """
    return _evaluate(
        UK_WHO_CALCULATION_URL,
        AgeMode,
        project_decimal_age,
        birth_date,
        observation_date,
        gestation_weeks,
        gestation_days,
        sex,
        measurement_method,
        observation_value,
        data_to_return,
        primary_api_key,
        transport,
    )


def sds_centile(
    birth_date,
    observation_date,
    gestation_weeks,
    gestation_days,
    sex,
    measurement_method,
    observation_value,
    data_to_return="both",
    primary_api_key=None,
    *,
    reference: typing.Union[str, Reference] = Reference.UK_WHO,
    transport: typing.Optional[Transport] = None,
) -> Table:
    """Like `uk_who_sds_centile`, against any `Reference`."""
    url = endpoint_for(Reference.from_label(reference))
    return _evaluate(
        url,
        SdsCentileMode,
        project_sds_centile,
        birth_date,
        observation_date,
        gestation_weeks,
        gestation_days,
        sex,
        measurement_method,
        observation_value,
        data_to_return,
        primary_api_key,
        transport,
    )


def corrected_decimal_age(
    birth_date,
    observation_date,
    gestation_weeks,
    gestation_days,
    sex,
    measurement_method,
    observation_value,
    data_to_return="both",
    primary_api_key=None,
    *,
    reference: typing.Union[str, Reference] = Reference.UK_WHO,
    transport: typing.Optional[Transport] = None,
) -> Table:
    """Like `uk_who_corrected_decimal_age`, against any `Reference`."""
    url = endpoint_for(Reference.from_label(reference))
    return _evaluate(
        url,
        AgeMode,
        project_decimal_age,
        birth_date,
        observation_date,
        gestation_weeks,
        gestation_days,
        sex,
        measurement_method,
        observation_value,
        data_to_return,
        primary_api_key,
        transport,
    )
