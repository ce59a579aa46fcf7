"""
growthsheet: spreadsheet-style growth functions backed by the RCPCH growth API.
"""

from .errors import EmptyResultError, GrowthSheetError, TransportError, ValidationError
from .functions import (
    Reference,
    corrected_decimal_age,
    sds_centile,
    uk_who_corrected_decimal_age,
    uk_who_sds_centile,
)
from .projection import AgeMode, SdsCentileMode
from .request import MeasurementRequest, build_request
from .transport import RequestsTransport, Transport
from .validation import validate_inputs

__all__ = [
    "AgeMode",
    "EmptyResultError",
    "GrowthSheetError",
    "MeasurementRequest",
    "Reference",
    "RequestsTransport",
    "SdsCentileMode",
    "Transport",
    "TransportError",
    "ValidationError",
    "build_request",
    "corrected_decimal_age",
    "sds_centile",
    "uk_who_corrected_decimal_age",
    "uk_who_sds_centile",
    "validate_inputs",
]
