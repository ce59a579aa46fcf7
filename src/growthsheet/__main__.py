"""
Command-line interface for growthsheet.

Single measurements are computed with `sds-centile` / `decimal-age`; whole
workbooks (or CSV files) are evaluated row by row with `process-excel`.
"""

import logging
import pathlib
import sys
import typing
from datetime import datetime

import click
import pandas as pd
from stairval.notepad import create_notepad

from .calculator import OPERATIONS, SheetCalculator
from .errors import GrowthSheetError
from .functions import Reference, corrected_decimal_age, sds_centile
from .loader import load_sheets_as_tables
from .projection import AgeMode, SdsCentileMode, column_labels

REFERENCE_CHOICES = [r.value for r in Reference]


def _configure_logging(verbose_logging: bool, log_file_path: typing.Optional[str]) -> None:
    handlers: list[logging.Handler] = []
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path, mode="a", encoding="utf-8"))
    if verbose_logging:
        handlers.append(logging.StreamHandler(sys.stderr))
    if handlers:
        logging.basicConfig(
            level=logging.DEBUG if verbose_logging else logging.INFO,
            format="%(asctime)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
        )


@click.group()
@click.option("--verbose-logging", is_flag=True, help="Also emit debug logs to stderr")
@click.option(
    "--log-file-path",
    type=click.Path(dir_okay=False, writable=True),
    help="Append timestamped logs to this file",
)
def main(verbose_logging: bool, log_file_path: typing.Optional[str]):
    """growthsheet: SDS, centiles and decimal ages from the RCPCH growth API."""
    _configure_logging(verbose_logging, log_file_path)


def measurement_options(f):
    """Options shared by the single-measurement commands."""
    date_type = click.DateTime(formats=["%Y-%m-%d"])
    options = [
        click.option("-b", "--birth-date", required=True, type=date_type, help="YYYY-MM-DD"),
        click.option("-o", "--observation-date", required=True, type=date_type, help="YYYY-MM-DD"),
        click.option("--gestation-weeks", default=40, show_default=True, type=float),
        click.option("--gestation-days", default=0, show_default=True, type=float),
        click.option("-s", "--sex", required=True, help="male or female"),
        click.option("-m", "--measurement-method", required=True, help="height, weight, ofc or bmi"),
        click.option("-v", "--observation-value", required=True, type=float),
        click.option("-r", "--reference", default="uk-who", show_default=True, type=click.Choice(REFERENCE_CHOICES)),
        click.option("--api-key", envvar="RCPCH_API_KEY", help="subscription key (or set RCPCH_API_KEY)"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _whole(value: float) -> typing.Union[int, float]:
    return int(value) if float(value).is_integer() else value


def _run_single(function, mode_cls, data_to_return: str, api_key, reference, **measurement):
    measurement["gestation_weeks"] = _whole(measurement["gestation_weeks"])
    measurement["gestation_days"] = _whole(measurement["gestation_days"])
    try:
        table = function(
            **measurement,
            data_to_return=data_to_return,
            primary_api_key=api_key,
            reference=reference,
        )
    except GrowthSheetError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    labels = column_labels(mode_cls.from_label(data_to_return))
    click.echo("\t".join(labels))
    click.echo("\t".join("" if v is None else str(v) for v in table[0]))


@main.command(name="sds-centile")
@measurement_options
@click.option("-d", "--data-to-return", default="both", show_default=True, help="both, sds or centiles")
def sds_centile_command(data_to_return: str, api_key, reference, **measurement):
    """
    Print corrected/chronological SDS and centiles for one measurement.
    """
    _run_single(sds_centile, SdsCentileMode, data_to_return, api_key, reference, **measurement)


@main.command(name="decimal-age")
@measurement_options
@click.option("-d", "--data-to-return", default="both", show_default=True, help="both, chron or corr")
def decimal_age_command(data_to_return: str, api_key, reference, **measurement):
    """
    Print chronological and/or gestation-corrected decimal age for one measurement.
    """
    _run_single(corrected_decimal_age, AgeMode, data_to_return, api_key, reference, **measurement)


@main.command(name="process-excel")
@click.option(
    "-e",
    "--excel-path",
    "excel_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="path to the Excel workbook or CSV file",
)
@click.option(
    "--operation",
    default="sds-centile",
    show_default=True,
    type=click.Choice(sorted(OPERATIONS)),
)
@click.option("-d", "--data-to-return", default="both", show_default=True, help="output mode of the operation")
@click.option("-r", "--reference", default="uk-who", show_default=True, type=click.Choice(REFERENCE_CHOICES))
@click.option("--api-key", envvar="RCPCH_API_KEY", help="subscription key (or set RCPCH_API_KEY)")
@click.option(
    "--output-dir",
    default="growthsheet_output",
    show_default=True,
    type=click.Path(file_okay=False),
    help="results are written to <output-dir>/<timestamp>/<input stem>.xlsx",
)
def process_excel(
    excel_file: str,
    operation: str,
    data_to_return: str,
    reference: str,
    api_key: typing.Optional[str],
    output_dir: str,
):
    """
    Evaluate an operation on every row of every measurement sheet and write
    the input sheets back with the result columns appended.
    """
    try:
        calculator = SheetCalculator(
            operation=operation,
            data_to_return=data_to_return,
            primary_api_key=api_key,
            reference=reference,
        )
    except GrowthSheetError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logging.info(f"Beginning {operation} of '{excel_file}'")
    tables = load_sheets_as_tables(excel_file)
    logging.debug(f"Loaded sheets: {list(tables.keys())}")

    notepad = create_notepad("growthsheet")
    results = calculator.apply_all(tables, notepad)
    _report_issues(notepad)

    if not results:
        click.echo("No measurement sheets found.", err=True)
        sys.exit(1)

    out_path = _prepare_output_dir(output_dir) / f"{pathlib.Path(excel_file).stem}.xlsx"
    _write_results(results, out_path)
    rows = sum(len(df) for df in results.values())
    click.echo(f"Wrote {rows} rows from {len(results)} sheets to {out_path}")


def _report_issues(notepad):
    # if there were errors, show them
    if notepad.has_errors(include_subsections=True):
        click.echo("Errors found while calculating:")
        for err in notepad.errors():
            click.echo(f"- {err.message}")
    # show any warnings but keep going
    if notepad.has_warnings(include_subsections=True):
        click.echo("Warnings found while calculating:")
        for w in notepad.warnings():
            click.echo(f"- {w.message}")


def _prepare_output_dir(output_dir: str) -> pathlib.Path:
    # use YYYY-MM-DD_HH-MM-SS for human-readable timestamps
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    out = pathlib.Path(output_dir) / timestamp
    out.mkdir(parents=True, exist_ok=True)
    return out


def _write_results(results: dict[str, pd.DataFrame], out_path: pathlib.Path) -> None:
    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        for sheet_name, df in results.items():
            df.to_excel(writer, sheet_name=sheet_name[:31])


if __name__ == "__main__":
    main()
