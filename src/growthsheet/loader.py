import pathlib

import pandas as pd

# Common header spellings → function argument names
RENAME_MAP = {
    "dob": "birth_date",
    "date_of_birth": "birth_date",
    "birth": "birth_date",
    "clinic_date": "observation_date",
    "measurement_date": "observation_date",
    "date_of_observation": "observation_date",
    "weeks": "gestation_weeks",
    "gestation_week": "gestation_weeks",
    "days": "gestation_days",
    "gestation_day": "gestation_days",
    "gender": "sex",
    "method": "measurement_method",
    "measurement": "measurement_method",
    "value": "observation_value",
    "measurement_value": "observation_value",
}


def normalize_headers(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalize headers to snake_case lowercase and apply RENAME_MAP.
    Units in brackets are dropped, e.g. "Observation Value (cm)" → "observation_value".
    """
    df = df.copy()
    df.columns = (
        df.columns.astype(str)
        .str.strip()
        .str.replace(r"\s*\(.*?\)", "", regex=True)  # drop any "(…)"
        .str.replace(r"[\s\-]+", "_", regex=True)  # spaces/dashes → underscore
        .str.replace(":", "", regex=False)  # drop colons
        .str.lower()
    )
    return df.rename(
        columns={orig: target for orig, target in RENAME_MAP.items() if orig in df.columns}
    )


def load_sheets_as_tables(workbook_path: str) -> dict[str, pd.DataFrame]:
    """
    Read each worksheet (or a single CSV file) into a DataFrame:
      - first row = header
      - first column = index (patient / row identifier)
      - headers normalized via `normalize_headers`
    A CSV file yields one table keyed by the file stem.
    """
    path = pathlib.Path(workbook_path)
    if path.suffix.lower() == ".csv":
        return {path.stem: normalize_headers(pd.read_csv(path, header=0, index_col=0))}

    excel = pd.ExcelFile(path, engine="openpyxl")
    tables: dict[str, pd.DataFrame] = {}

    for sheet_name in excel.sheet_names:
        df = pd.read_excel(
            excel, sheet_name=sheet_name, header=0, index_col=0, engine="openpyxl"
        )
        tables[sheet_name] = normalize_headers(df)

    return tables
