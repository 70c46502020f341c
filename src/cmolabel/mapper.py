"""
Map loaded tables to sample objects.

Tables are recognized by name (plus common aliases):
- 'samples'  : candidate samples to label, one `SampleManifest` per row
- 'existing' : previously labeled samples, one `LabeledSample` per row

Problems are recorded as `AuditEntry` items instead of aborting, so one bad
row never blocks the rest of the table.
"""

import abc
import typing

from collections import namedtuple
from dataclasses import dataclass

import pandas as pd

from .sample import (
    NA_TO_EXTRACT_FIELD,
    NORMALIZED_PATIENT_ID_FIELD,
    RECIPE_FIELD,
    SAMPLE_TYPE_FIELD,
    LabeledSample,
    SampleManifest,
)

AuditEntry = namedtuple("AuditEntry", ["step", "sheet", "message", "level"])

# Minimal columns (after renaming) each table must provide
SAMPLE_KEY_COLUMNS = {"primary_id", "cmo_patient_id"}
EXISTING_KEY_COLUMNS = {"primary_id", "cmo_patient_id", "cmo_label"}

# Columns copied into the free-form attribute map → attribute key
ATTRIBUTE_COLUMNS = {
    "recipe": RECIPE_FIELD,
    "na_to_extract": NA_TO_EXTRACT_FIELD,
    "sample_type": SAMPLE_TYPE_FIELD,
    "normalized_patient_id": NORMALIZED_PATIENT_ID_FIELD,
}

# Friendly aliases → reduces friction while keeping behavior explicit
KNOWN_TABLE_ALIASES: dict[str, set[str]] = {
    "samples": {"samples", "sample", "manifest", "candidates", "new"},
    "existing": {"existing", "existing_samples", "history", "labeled", "labels"},
}


@dataclass
class TypedTables:
    """
    Explicit, typed access to the loaded tables.
    Either field can be `None`, meaning the table was not provided.
    """
    samples: typing.Optional[pd.DataFrame]
    existing: typing.Optional[pd.DataFrame]


def _cell(row: pd.Series, column: str) -> typing.Optional[str]:
    """Trimmed cell text, or None for missing/NaN/blank cells."""
    value = row.get(column)
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    text = str(value).strip()
    return text or None


class TableMapper(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def apply_mapping(
        self, tables: dict[str, pd.DataFrame], audit: list[AuditEntry]
    ) -> tuple[list[SampleManifest], list[LabeledSample]]:
        raise NotImplementedError


class DefaultMapper(TableMapper):
    def __init__(self, request_id: typing.Optional[str] = None):
        """
        `request_id` fills in the request for rows that do not name one
        (cell-line labels embed it).
        """
        self.request_id = request_id

    def apply_mapping(
        self, tables: dict[str, pd.DataFrame], audit: list[AuditEntry]
    ) -> tuple[list[SampleManifest], list[LabeledSample]]:
        """
        Process:
        1) choose the named tables
        2) check required columns
        3) map rows to candidate and existing samples
        """
        typed_tables = self.choose_named_tables(tables, audit)
        candidates = self._map_samples_table(typed_tables.samples, audit)
        existing = self._map_existing_table(typed_tables.existing, audit)
        return candidates, existing

    def choose_named_tables(self, tables: dict[str, pd.DataFrame], audit: list[AuditEntry]) -> TypedTables:
        """Prefer explicit table names (plus common aliases)."""

        def by_alias(kind: str) -> typing.Optional[pd.DataFrame]:
            aliases = KNOWN_TABLE_ALIASES[kind]
            for table_name, df in tables.items():
                if table_name.strip().casefold() in aliases:
                    return df
            return None

        selected = TypedTables(samples=by_alias("samples"), existing=by_alias("existing"))

        # Hard-minimum: something to label
        if selected.samples is None:
            audit.append(AuditEntry("choose-tables", "-", "Missing required table: 'samples'.", "error"))
        if selected.existing is None:
            audit.append(AuditEntry("choose-tables", "-", "No 'existing' table; every patient starts at 001.", "info"))

        return selected

    def parse_sample_row(self, row: pd.Series, sheet_name: str, audit: list[AuditEntry]) -> typing.Optional[SampleManifest]:
        """Build a SampleManifest from one row; None if the row lacks a primary id."""
        primary_id = _cell(row, "primary_id")
        if primary_id is None:
            audit.append(AuditEntry("map-samples", sheet_name, f"Row {row.name}: missing primary id", "error"))
            return None

        attributes = {
            key: value
            for column, key in ATTRIBUTE_COLUMNS.items()
            if (value := _cell(row, column)) is not None
        }
        return SampleManifest(
            igo_id=primary_id,
            cmo_patient_id=_cell(row, "cmo_patient_id"),
            specimen_type=_cell(row, "specimen_type"),
            sample_origin=_cell(row, "sample_origin"),
            cmo_sample_class=_cell(row, "sample_class"),
            investigator_sample_id=_cell(row, "investigator_sample_id"),
            igo_request_id=_cell(row, "request_id") or self.request_id,
            cmo_sample_id_fields=attributes,
        )

    @staticmethod
    def parse_existing_row(row: pd.Series, sheet_name: str, audit: list[AuditEntry]) -> typing.Optional[LabeledSample]:
        """Build a LabeledSample from one row; None if it has no label to learn from."""
        label = _cell(row, "cmo_label")
        if label is None:
            audit.append(AuditEntry("map-existing", sheet_name, f"Row {row.name}: no label, skipped", "warning"))
            return None
        patient_id = _cell(row, "cmo_patient_id")
        if patient_id is None:
            audit.append(AuditEntry("map-existing", sheet_name, f"Row {row.name}: label {label!r} has no patient id, skipped", "warning"))
            return None
        return LabeledSample(
            cmo_label=label,
            primary_id=_cell(row, "primary_id"),
            patient_id=patient_id,
        )

    def _map_samples_table(self, df: typing.Optional[pd.DataFrame], audit: list[AuditEntry]) -> list[SampleManifest]:
        if df is None:
            return []
        missing = sorted(SAMPLE_KEY_COLUMNS - set(df.columns))
        if missing:
            audit.append(AuditEntry("map-samples", "samples", f"missing required columns: {missing}", "error"))
            return []

        records: list[SampleManifest] = []
        for _, row in df.iterrows():
            sample = self.parse_sample_row(row, "samples", audit)
            if sample is not None:
                records.append(sample)
        return records

    def _map_existing_table(self, df: typing.Optional[pd.DataFrame], audit: list[AuditEntry]) -> list[LabeledSample]:
        if df is None:
            return []
        missing = sorted(EXISTING_KEY_COLUMNS - set(df.columns))
        if missing:
            audit.append(AuditEntry("map-existing", "existing", f"missing required columns: {missing}", "error"))
            return []

        records: list[LabeledSample] = []
        for _, row in df.iterrows():
            sample = self.parse_existing_row(row, "existing", audit)
            if sample is not None:
                records.append(sample)
        return records
