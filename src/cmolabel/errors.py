"""
Error kinds raised by the label generation core.

All of them subclass ValueError so batch callers can keep catching
(ValueError, TypeError) per row the same way they do for record validation.
"""

from __future__ import annotations

import typing


class CmoLabelError(ValueError):
    """Base class for every failure raised by cmolabel."""


class UnresolvedAbbreviation(CmoLabelError):
    """
    No rule in a fallback chain produced an abbreviation letter.

    Attributes:
        kind: Which abbreviation failed ('sample type' or 'nucleic acid').
        values: The raw input values the chain was evaluated against.
    """

    def __init__(self, kind: str, values: typing.Mapping[str, typing.Any]):
        self.kind = kind
        self.values = dict(values)
        rendered = ", ".join(f"{k}={v!r}" for k, v in self.values.items())
        super().__init__(f"Could not resolve {kind} abbreviation from {rendered}")


class LabelParseFailure(CmoLabelError):
    """One or more label strings do not match the CMO label pattern."""

    def __init__(self, labels: typing.Sequence[typing.Any], reason: str = ""):
        self.labels = list(labels)
        self.reason = reason
        rendered = ", ".join(repr(label) for label in self.labels)
        message = f"Label(s) do not meet CMO label requirements: {rendered}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class MissingRequiredField(CmoLabelError):
    """A field needed to build the label is absent on the candidate sample."""

    def __init__(self, field: str, sample_id: typing.Optional[str] = None):
        self.field = field
        self.sample_id = sample_id
        where = f" on sample {sample_id!r}" if sample_id else ""
        super().__init__(f"Missing required field {field!r}{where}")


class InvalidPatientId(CmoLabelError):
    """The CMO patient id would produce a label that does not parse back."""

    def __init__(self, patient_id: typing.Any, sample_id: typing.Optional[str] = None):
        self.patient_id = patient_id
        self.sample_id = sample_id
        where = f" on sample {sample_id!r}" if sample_id else ""
        super().__init__(f"Invalid CMO patient id {patient_id!r}{where}; expected 'C-<alphanumeric>'")


class CounterOverflow(CmoLabelError):
    """A counter no longer fits the fixed width of its label field."""

    def __init__(self, value: int, width: int):
        self.value = value
        self.width = width
        super().__init__(f"Counter {value} does not fit in {width} digits")
