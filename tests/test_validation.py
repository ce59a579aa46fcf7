"""
Tests for validate_inputs.

Checks fire in a fixed order and the first failure wins, so each case below
breaks exactly one argument (or two, to pin the ordering).
"""

import math

import pytest

from growthsheet.errors import ValidationError
from growthsheet.validation import is_number, validate_inputs

SDS_OPTIONS = ["both", "sds", "centiles"]


def make_args(**overrides):
    args = {
        "birth_date": "2020-04-12",
        "observation_date": "2021-01-20",
        "gestation_weeks": 40,
        "gestation_days": 0,
        "sex": "female",
        "measurement_method": "weight",
        "observation_value": 9.8,
        "data_to_return": "both",
        "data_to_return_options": SDS_OPTIONS,
        "primary_api_key": "key",
    }
    args.update(overrides)
    return args


def test_valid_inputs_pass_silently():
    assert validate_inputs(**make_args()) is None


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"birth_date": None}, "birth_date"),
        ({"observation_date": None}, "observation_date"),
        ({"gestation_weeks": "forty"}, "gestation"),
        ({"gestation_days": None}, "gestation"),
        ({"sex": "Male"}, "sex"),
        ({"sex": "other"}, "sex"),
        ({"measurement_method": "length"}, "measurement_method"),
        ({"observation_value": "heavy"}, "observation_value"),
        ({"observation_value": math.nan}, "observation_value"),
        ({"gestation_weeks": 10**400}, "gestation"),
        ({"observation_value": 10**400}, "observation_value"),
        ({"primary_api_key": None}, "primary_api_key"),
        ({"data_to_return": "foo"}, "data_to_return"),
        ({"data_to_return": "chron"}, "data_to_return"),
    ],
)
def test_each_check_names_its_field(overrides, field):
    with pytest.raises(ValidationError) as excinfo:
        validate_inputs(**make_args(**overrides))
    assert excinfo.value.field == field


def test_first_failing_check_wins():
    """With both sex and method wrong, sex is reported."""
    with pytest.raises(ValidationError) as excinfo:
        validate_inputs(**make_args(sex="boy", measurement_method="length", primary_api_key=None))
    assert excinfo.value.field == "sex"
    assert str(excinfo.value) == "'boy' is not a correct sex. Must be one of \"male\" or \"female\""


def test_mode_message_lists_caller_options():
    with pytest.raises(ValidationError) as excinfo:
        validate_inputs(
            **make_args(data_to_return="sds", data_to_return_options=["both", "chron", "corr"])
        )
    assert str(excinfo.value) == "'sds' can only be \"both\", \"chron\", or \"corr\""


def test_pandas_missing_date_counts_as_null():
    pd = pytest.importorskip("pandas")
    with pytest.raises(ValidationError) as excinfo:
        validate_inputs(**make_args(observation_date=pd.NaT))
    assert str(excinfo.value) == "observation_date is null"


def test_is_number_truth_table():
    for ok in [0, 3, 9.8, "40", " 2.5 "]:
        assert is_number(ok) is True
    for bad in [None, True, "", "x", math.nan, math.inf, "1e400", 10**400, [1]]:
        assert is_number(bad) is False
