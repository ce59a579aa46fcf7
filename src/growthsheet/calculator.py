"""
Row-wise evaluation of a growth function over a table of measurements.

Each row is an independent invocation: a failing row is recorded in the
notepad and leaves its result cells empty, the remaining rows still run.
"""

import logging
import typing

import pandas as pd
from stairval.notepad import Notepad

from .errors import GrowthSheetError
from .functions import Reference, corrected_decimal_age, sds_centile
from .projection import AgeMode, SdsCentileMode, column_labels
from .transport import Transport

# Columns (after loader renaming) that every measurement sheet must provide
INPUT_COLUMNS = (
    "birth_date",
    "observation_date",
    "gestation_weeks",
    "gestation_days",
    "sex",
    "measurement_method",
    "observation_value",
)

OPERATIONS = {
    "sds-centile": (sds_centile, SdsCentileMode),
    "decimal-age": (corrected_decimal_age, AgeMode),
}


class SheetCalculator:
    def __init__(
        self,
        operation: str = "sds-centile",
        data_to_return: str = "both",
        primary_api_key: typing.Optional[str] = None,
        reference: typing.Union[str, Reference] = Reference.UK_WHO,
        transport: typing.Optional[Transport] = None,
    ):
        """
        - operation: 'sds-centile' or 'decimal-age'
        - data_to_return: output mode of that operation, checked up front
        - transport: None means each row opens its own `RequestsTransport`
        """
        if operation not in OPERATIONS:
            raise ValueError(
                f"Unknown operation {operation!r}; expected one of {sorted(OPERATIONS)}"
            )
        self.operation = operation
        self._function, mode_cls = OPERATIONS[operation]
        self.mode = mode_cls.from_label(data_to_return)
        self.primary_api_key = primary_api_key
        self.reference = Reference.from_label(reference)
        self._transport = transport

    @property
    def result_columns(self) -> tuple[str, ...]:
        return column_labels(self.mode)

    @staticmethod
    def _cell(value: typing.Any, column: str) -> typing.Any:
        # empty cells → None; whole-number gestations read as floats → int
        if not isinstance(value, (list, tuple)) and pd.isna(value):
            return None
        if column.startswith("gestation_") and isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            return value.strip()
        return value

    def apply(self, sheet_name: str, df: pd.DataFrame, notepad: Notepad) -> pd.DataFrame:
        """
        Return a copy of `df` with one extra column per projected field.
        Missing input columns are reported and the sheet is returned unchanged.
        """
        missing = set(INPUT_COLUMNS) - set(df.columns)
        if missing:
            notepad.add_error(f"Sheet {sheet_name!r}: missing required columns: {sorted(missing)}")
            return df.copy()

        labels = self.result_columns
        rows: list[list] = []
        for index, row in df.iterrows():
            args = {column: self._cell(row[column], column) for column in INPUT_COLUMNS}
            try:
                table = self._function(
                    **args,
                    data_to_return=self.mode,
                    primary_api_key=self.primary_api_key,
                    reference=self.reference,
                    transport=self._transport,
                )
            except (GrowthSheetError, ValueError) as exception:
                notepad.add_error(f"Sheet {sheet_name!r}, row {index}: {exception}")
                rows.append([None] * len(labels))
                continue
            rows.append(table[0])

        logging.info(f"Sheet {sheet_name!r}: evaluated {len(rows)} rows with {self.operation}")
        out = df.copy()
        for position, label in enumerate(labels):
            out[label] = pd.to_numeric(pd.Series([r[position] for r in rows], index=df.index, dtype=object))
        return out

    def apply_all(self, tables: dict[str, pd.DataFrame], notepad: Notepad) -> dict[str, pd.DataFrame]:
        """
        Evaluate every sheet that carries the input columns; other sheets are
        skipped with a warning.
        """
        results: dict[str, pd.DataFrame] = {}
        for sheet_name, df in tables.items():
            if not set(INPUT_COLUMNS) & set(df.columns):
                notepad.add_warning(f"Skipping sheet {sheet_name!r}: no measurement columns")
                continue
            results[sheet_name] = self.apply(sheet_name, df, notepad)
        return results
