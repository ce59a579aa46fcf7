"""
Tests for load_sheets_as_tables / normalize_headers.
"""

import os

import pandas as pd

from growthsheet.loader import load_sheets_as_tables, normalize_headers


def test_normalize_headers_renames_common_spellings():
    df = pd.DataFrame(columns=["DOB", "Clinic Date", "Method", "Value (kg)", "Gender", "Gestation Weeks"])
    assert list(normalize_headers(df).columns) == [
        "birth_date",
        "observation_date",
        "measurement_method",
        "observation_value",
        "sex",
        "gestation_weeks",
    ]


def test_csv_loads_as_single_table(fpath_test_dir):
    tables = load_sheets_as_tables(os.path.join(fpath_test_dir, "measurements.csv"))
    assert list(tables) == ["measurements"]
    df = tables["measurements"]
    assert list(df.index) == ["P001", "P002", "P003"]
    assert {"birth_date", "observation_date", "observation_value"} <= set(df.columns)


def test_xlsx_loads_every_sheet(tmp_path):
    path = tmp_path / "clinic.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame({"ID": ["A1"], "Date of Birth": ["2020-01-01"]}).to_excel(
            writer, sheet_name="heights", index=False
        )
        pd.DataFrame({"ID": ["B1"], "Measurement Date": ["2021-01-01"]}).to_excel(
            writer, sheet_name="weights", index=False
        )
    tables = load_sheets_as_tables(str(path))
    assert list(tables) == ["heights", "weights"]
    assert list(tables["heights"].columns) == ["birth_date"]
    assert list(tables["weights"].columns) == ["observation_date"]
