"""
CMO label value types, parser and formatter.

A standard label looks like `C-1235-X001-d01`:

    C-<patient>-<type letter><3-digit sample counter>-<d|r><nucleic-acid counter>

Historical labels may omit the nucleic-acid counter (`C-1235-X001-d`); it
then counts as 1. Cell-line labels (`JH123-12345T`) carry no counters and are
only recognized so counter scans can skip them.
"""

from __future__ import annotations

import re
import typing
from dataclasses import dataclass, replace

from .abbreviations import NUCLEIC_ACID_LETTERS, SAMPLE_TYPE_LETTERS
from .errors import CounterOverflow, LabelParseFailure

CMO_LABEL_PREFIX = "C"
CMO_LABEL_SEPARATOR = "-"
SAMPLE_COUNTER_PADDING = 3
NUCLEIC_ACID_COUNTER_PADDING = 2

_ALNUM = re.compile(r"[A-Za-z0-9]+")
_PATIENT_ID = re.compile(r"C-[A-Za-z0-9]+")
_DIGITS = re.compile(r"[0-9]*")
# example: JH123-12345T, JH_1-5432P (request ids are stored without - or _)
_CELL_LINE_LABEL = re.compile(r"[A-Za-z0-9_.]+-[A-Za-z0-9]+")


def pad_counter(value: int, width: int) -> str:
    """Left-pad a counter with zeros to exactly `width` digits."""
    text = str(value).rjust(width, "0")
    if len(text) > width:
        raise CounterOverflow(value, width)
    return text


def is_valid_patient_id(patient_id: typing.Any) -> bool:
    """True when `patient_id` can head a label that parses back (`C-<alnum>`)."""
    return isinstance(patient_id, str) and bool(_PATIENT_ID.fullmatch(patient_id))


@dataclass(frozen=True)
class CmoLabel:
    """
    Structured form of a standard CMO label.

    Attributes:
        patient_id: CMO patient id including its prefix (e.g. 'C-1235').
        sample_type_abbreviation: Specimen-type letter.
        sample_counter: Patient-scoped sample counter.
        nucleic_acid_abbreviation: 'd' or 'r'.
        nucleic_acid_counter: Patient/letter-scoped counter, None if the label omitted it.
    """

    patient_id: str
    sample_type_abbreviation: str
    sample_counter: int
    nucleic_acid_abbreviation: str
    nucleic_acid_counter: typing.Optional[int] = 1

    def __post_init__(self) -> None:
        if not isinstance(self.patient_id, str) or not self.patient_id.strip():
            raise ValueError(f"Invalid patient ID: {self.patient_id!r}")
        if self.sample_type_abbreviation not in SAMPLE_TYPE_LETTERS:
            raise ValueError(f"Invalid sample type abbreviation: {self.sample_type_abbreviation!r}")
        if self.nucleic_acid_abbreviation.lower() not in NUCLEIC_ACID_LETTERS:
            raise ValueError(f"Invalid nucleic acid abbreviation: {self.nucleic_acid_abbreviation!r}")
        if not isinstance(self.sample_counter, int) or self.sample_counter < 0:
            raise ValueError(f"sample_counter must be a non-negative integer, got {self.sample_counter!r}")
        if len(str(self.sample_counter)) > SAMPLE_COUNTER_PADDING:
            raise CounterOverflow(self.sample_counter, SAMPLE_COUNTER_PADDING)
        counter = self.nucleic_acid_counter
        if counter is not None and (not isinstance(counter, int) or counter < 0):
            raise ValueError(f"nucleic_acid_counter must be a non-negative integer, got {counter!r}")

    @property
    def effective_nucleic_acid_counter(self) -> int:
        """The nucleic-acid counter with an omitted field read as 1."""
        return 1 if self.nucleic_acid_counter is None else self.nucleic_acid_counter

    @property
    def padded_sample_counter(self) -> str:
        return pad_counter(self.sample_counter, SAMPLE_COUNTER_PADDING)

    @property
    def padded_nucleic_acid_counter(self) -> str:
        # no fixed width: the parser accepts any number of digits here
        if self.nucleic_acid_counter is None:
            return ""
        return str(self.nucleic_acid_counter).rjust(NUCLEIC_ACID_COUNTER_PADDING, "0")

    def with_next_nucleic_acid_counter(self) -> "CmoLabel":
        return replace(self, nucleic_acid_counter=self.effective_nucleic_acid_counter + 1)

    @classmethod
    def parse(cls, text: str) -> "CmoLabel":
        """Raising counterpart of `parse_cmo_label`."""
        parsed = parse_cmo_label(text)
        if isinstance(parsed, UnparsableLabel):
            raise LabelParseFailure([text], parsed.reason)
        return parsed

    def __str__(self) -> str:
        return format_cmo_label(
            self.patient_id,
            self.sample_type_abbreviation,
            self.padded_sample_counter,
            self.nucleic_acid_abbreviation,
            self.padded_nucleic_acid_counter,
        )


@dataclass(frozen=True)
class CellLineLabel:
    """Counter-free label used for cell-line specimens."""

    investigator_sample_id: str
    request_id: str

    def __str__(self) -> str:
        formatted_request_id = self.request_id.replace("-", "").replace("_", "")
        return f"{self.investigator_sample_id}{CMO_LABEL_SEPARATOR}{formatted_request_id}"


SampleLabel = typing.Union[CmoLabel, CellLineLabel]


@dataclass(frozen=True)
class UnparsableLabel:
    """Parse-failure variant returned by `parse_cmo_label`."""

    raw: typing.Any
    reason: str


def format_cmo_label(
    patient_id: str,
    sample_type_abbreviation: str,
    padded_sample_counter: str,
    nucleic_acid_abbreviation: str,
    padded_nucleic_acid_counter: str,
) -> str:
    return (
        f"{patient_id}{CMO_LABEL_SEPARATOR}{sample_type_abbreviation}{padded_sample_counter}"
        f"{CMO_LABEL_SEPARATOR}{nucleic_acid_abbreviation}{padded_nucleic_acid_counter}"
    )


def parse_cmo_label(text: typing.Any) -> typing.Union[CmoLabel, UnparsableLabel]:
    """
    Decompose a label into its fields.

    Returns an `UnparsableLabel` (never raises) when the text does not follow
    `C-<alnum>-<TYPE><ddd>-<d|r><digits*>`.
    """
    if not isinstance(text, str):
        return UnparsableLabel(text, "label is not a string")
    parts = text.split(CMO_LABEL_SEPARATOR)
    if len(parts) != 4:
        return UnparsableLabel(text, "expected 4 hyphen-separated fields")
    prefix, patient, sample_part, nucleic_part = parts

    if prefix != CMO_LABEL_PREFIX:
        return UnparsableLabel(text, f"label must start with {CMO_LABEL_PREFIX + CMO_LABEL_SEPARATOR!r}")
    if not _ALNUM.fullmatch(patient):
        return UnparsableLabel(text, f"patient id {patient!r} is not alphanumeric")

    type_letter, sample_digits = sample_part[:1], sample_part[1:]
    if type_letter not in SAMPLE_TYPE_LETTERS:
        return UnparsableLabel(text, f"unknown sample type abbreviation {type_letter!r}")
    if len(sample_digits) != SAMPLE_COUNTER_PADDING or not _DIGITS.fullmatch(sample_digits):
        return UnparsableLabel(text, f"sample counter {sample_digits!r} is not 3 digits")

    acid_letter, acid_digits = nucleic_part[:1], nucleic_part[1:]
    if acid_letter not in NUCLEIC_ACID_LETTERS:
        return UnparsableLabel(text, f"unknown nucleic acid abbreviation {acid_letter!r}")
    if not _DIGITS.fullmatch(acid_digits):
        return UnparsableLabel(text, f"nucleic acid counter {acid_digits!r} is not numeric")

    return CmoLabel(
        patient_id=f"{prefix}{CMO_LABEL_SEPARATOR}{patient}",
        sample_type_abbreviation=type_letter,
        sample_counter=int(sample_digits),
        nucleic_acid_abbreviation=acid_letter,
        nucleic_acid_counter=int(acid_digits) if acid_digits else None,
    )


def is_cell_line_label(text: typing.Any) -> bool:
    """True for `<investigator id>-<request id>` labels; used only to skip them when scanning history."""
    return isinstance(text, str) and bool(_CELL_LINE_LABEL.fullmatch(text))
