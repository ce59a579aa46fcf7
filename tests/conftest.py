import json
import os

import pytest

from growthsheet.errors import TransportError
from growthsheet.transport import Transport


class FakeTransport(Transport):
    """
    Stand-in for the growth API: records every POST and replies with a fixed
    body, or raises `error` if one is given.
    """

    def __init__(self, response_text: str = "{}", error: Exception | None = None):
        self.response_text = response_text
        self.error = error
        self.calls: list[dict] = []

    def post(self, url, body, headers):
        self.calls.append({"url": url, "body": body, "headers": headers})
        if self.error is not None:
            raise self.error
        return self.response_text


@pytest.fixture(scope="session")
def fpath_test_dir() -> str:
    """
    Path to `tests/data/` folder.
    """
    return os.path.join(os.path.dirname(__file__), "data")


@pytest.fixture(scope="session")
def calculation_text(fpath_test_dir: str) -> str:
    """
    A UK-WHO calculation response as returned by the API.
    """
    with open(os.path.join(fpath_test_dir, "uk_who_calculation.json"), encoding="utf-8") as f:
        return f.read()


@pytest.fixture
def calculation(calculation_text: str) -> dict:
    return json.loads(calculation_text)


@pytest.fixture
def fake_transport(calculation_text: str) -> FakeTransport:
    return FakeTransport(calculation_text)


@pytest.fixture
def failing_transport() -> FakeTransport:
    return FakeTransport(
        error=TransportError("Request to https://example.test failed: refused", url="https://example.test")
    )


@pytest.fixture
def valid_inputs() -> dict:
    """
    Keyword arguments for a valid growth function call.
    """
    return {
        "birth_date": "2020-04-12",
        "observation_date": "2021-01-20",
        "gestation_weeks": 34,
        "gestation_days": 2,
        "sex": "male",
        "measurement_method": "height",
        "observation_value": 70.2,
        "primary_api_key": "test-key",
    }
