"""
Command-line interface for cmolabel.

Reads candidate and existing sample tables (CSV or Excel), labels every
candidate per patient and reports the results. Also exposes the label
comparison and the specimen-type abbreviation lookup.
"""

import logging
import sys
import typing

import click
import pandas as pd

from .batch import LabelingResult, label_samples
from .errors import CmoLabelError
from .generator import DefaultLabelGenerator, requires_label_update, resolve_specimen_type_abbreviation
from .loader import load_sheets_as_tables
from .mapper import AuditEntry, DefaultMapper

RESULT_COLUMNS = ["primary_id", "patient_id", "cmo_label", "previous_label", "requires_update", "error"]


@click.group()
def main():
    """cmolabel: generate and compare CMO sample labels."""
    pass


@main.command(name="label-samples")
@click.argument(
    "table_paths",
    nargs=-1,
    type=click.Path(exists=True, dir_okay=False),
)
@click.option("-r", "--request-id", default=None, help="request id for rows that do not name one")
@click.option(
    "-o",
    "--output-csv",
    "output_csv",
    type=click.Path(dir_okay=False, writable=True),
    help="write the results to this CSV file instead of printing them",
)
@click.option(
    "--strict-history/--no-strict-history",
    default=False,
    envvar="CMOLABEL_STRICT_HISTORY",
    help="Treat unparsable existing labels as errors (default: warn and skip).",
)
@click.option("--verbose-logging", is_flag=True, help="Also emit debug logs to stderr")
@click.option(
    "--log-file-path",
    type=click.Path(dir_okay=False, writable=True),
    help="Append timestamped logs to this file",
)
def label_samples_command(
    table_paths: tuple[str, ...],
    request_id: typing.Optional[str],
    output_csv: typing.Optional[str],
    strict_history: bool,
    verbose_logging: bool,
    log_file_path: typing.Optional[str],
):
    """
    Label the 'samples' table using the 'existing' table as patient history.
    Tables are worksheets of an Excel workbook or CSV files named after the table.
    """
    if not table_paths:
        click.echo("No input files specified.", err=True)
        sys.exit(1)

    _configure_logging(verbose_logging, log_file_path)

    # 1) Load every table from every file
    tables: dict[str, pd.DataFrame] = {}
    for table_path in table_paths:
        logging.info(f"Reading tables from '{table_path}'")
        try:
            tables.update(load_sheets_as_tables(table_path))
        except Exception as e:
            logging.error(f"Failed to read '{table_path}': {e}")
            click.echo(f"Error: failed to read '{table_path}': {e}", err=True)
            sys.exit(1)
    logging.debug(f"Loaded tables: {list(tables.keys())}")

    # 2) Map rows to samples, collecting issues
    audit: list[AuditEntry] = []
    candidates, existing = DefaultMapper(request_id=request_id).apply_mapping(tables, audit)

    # 3) Label
    generator = DefaultLabelGenerator(strict_history=strict_history)
    results = label_samples(candidates, existing, generator, audit)

    # 4) Report
    _report_issues(audit)
    frame = results_to_frame(results)
    if output_csv:
        frame.to_csv(output_csv, index=False)
        click.echo(f"Wrote {len(frame)} results to {output_csv}")
    elif not frame.empty:
        click.echo(frame.to_string(index=False))

    failed = sum(1 for result in results if result.error)
    click.echo(f"Labeled {len(results) - failed} of {len(results)} samples")


@main.command(name="compare-labels")
@click.argument("new_label")
@click.argument("existing_label")
def compare_labels(new_label: str, existing_label: str):
    """Report whether NEW_LABEL differs materially from EXISTING_LABEL."""
    try:
        changed = requires_label_update(new_label, existing_label)
    except CmoLabelError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo("update required" if changed else "no update required")


@main.command(name="resolve-abbreviation")
@click.option("--specimen-type", default=None, help="e.g. Xenograft, cfDNA, Exosome")
@click.option("--sample-origin", default=None, help="e.g. Plasma, Urine")
@click.option("--sample-class", default=None, help="e.g. Primary, Metastasis")
def resolve_abbreviation(
    specimen_type: typing.Optional[str],
    sample_origin: typing.Optional[str],
    sample_class: typing.Optional[str],
):
    """Print the specimen-type letter a sample would get."""
    try:
        click.echo(resolve_specimen_type_abbreviation(specimen_type, sample_origin, sample_class))
    except CmoLabelError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


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


def _report_issues(audit: list[AuditEntry]):
    # if there were errors, show them
    errors = [entry for entry in audit if entry.level == "error"]
    if errors:
        click.echo("Errors found while labeling:")
        for entry in errors:
            click.echo(click.style(f"- [{entry.step}] {entry.sheet}: {entry.message}", fg="red"))
    # show any warnings but keep going
    warnings = [entry for entry in audit if entry.level in ("warn", "warning")]
    if warnings:
        click.echo("Warnings found while labeling:")
        for entry in warnings:
            click.echo(click.style(f"- [{entry.step}] {entry.sheet}: {entry.message}", fg="yellow"))


def results_to_frame(results: typing.Sequence[LabelingResult]) -> pd.DataFrame:
    return pd.DataFrame(
        [[getattr(result, column) for column in RESULT_COLUMNS] for result in results],
        columns=RESULT_COLUMNS,
    )


if __name__ == "__main__":
    main()
