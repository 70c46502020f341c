import pathlib

import pandas as pd

# Columns that need renaming → target sample fields
RENAME_MAP = {
    # candidate (manifest) columns
    "igo_id": "primary_id",
    "sample_id": "primary_id",
    "patient_id": "cmo_patient_id",
    "cmo_sample_class": "sample_class",
    "igo_request_id": "request_id",
    "nucleic_acid": "na_to_extract",
    # existing-sample columns
    "cmo_sample_name": "cmo_label",
    "label": "cmo_label",
}

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


def normalize_headers(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalize headers to snake_case lowercase and apply RENAME_MAP.
    camelCase headers ('cmoPatientId') are split before lowercasing.
    """
    df.columns = (
        df.columns.astype(str)
        .str.strip()
        .str.replace(r"\s*\(.*?\)", "", regex=True)  # drop any "(…)"
        .str.replace(r"(?<=[a-z0-9])(?=[A-Z])", "_", regex=True)  # camelCase → camel_Case
        .str.replace(r"[\s\-]+", "_", regex=True)  # spaces/hyphens → underscore
        .str.replace(":", "", regex=False)  # drop colons
        .str.lower()
    )
    # apply specific renames (e.g. "igo_id" → "primary_id")
    return df.rename(
        columns={orig: target for orig, target in RENAME_MAP.items() if orig in df.columns}
    )


def load_sheets_as_tables(path: str) -> dict[str, pd.DataFrame]:
    """
    Read a workbook or delimited file into DataFrames keyed by table name:
      - Excel: one table per worksheet, keyed by sheet name
      - CSV/TSV: a single table keyed by the file stem
    Every cell is read as text so identifiers keep their leading zeros.
    """
    file_path = pathlib.Path(path)
    tables: dict[str, pd.DataFrame] = {}

    if file_path.suffix.lower() in EXCEL_SUFFIXES:
        excel = pd.ExcelFile(file_path, engine="openpyxl")
        for sheet_name in excel.sheet_names:
            df = pd.read_excel(excel, sheet_name=sheet_name, header=0, dtype=str, engine="openpyxl")
            tables[sheet_name] = normalize_headers(df)
    else:
        separator = "\t" if file_path.suffix.lower() in {".tsv", ".tab"} else ","
        df = pd.read_csv(file_path, sep=separator, header=0, dtype=str)
        tables[file_path.stem] = normalize_headers(df)

    return tables
