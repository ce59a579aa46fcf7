"""
Error taxonomy.

Every failure of a growth calculation is terminal for that invocation and is
raised as one of the distinct kinds below, so callers (and the CLI) can tell
bad input, a broken network and an empty answer apart.
"""


class GrowthSheetError(RuntimeError):
    """Base class for all growthsheet failures."""


class ValidationError(GrowthSheetError, ValueError):
    """
    Raised before any network call when an input is missing or out of domain.

    Attributes:
        field: Name of the input whose check failed (e.g. 'sex', 'gestation').
    """

    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.field = field


class TransportError(GrowthSheetError):
    """Raised when the POST to the growth API itself fails (DNS, refused, TLS, ...)."""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class EmptyResultError(GrowthSheetError):
    """Raised when the API answers without any calculated values."""
