"""
CMO label generation.

`DefaultLabelGenerator` orchestrates the pieces:
1) cell-line samples short-circuit to the counter-free label,
2) otherwise resolve the specimen-type and nucleic-acid letters,
3) resolve the sample and nucleic-acid counters from the patient's history,
4) assemble the label.

It also answers whether a regenerated label differs materially from the
stored one, and reports (without raising) why a sample cannot be labeled.

The generator keeps no state between calls. Callers must serialize
generation per patient: two calls working from the same history snapshot
will hand out the same counters.
"""

from __future__ import annotations

import abc
import logging
import typing
from dataclasses import dataclass, field

from .cellline import generate_cell_line_label, is_cell_line_sample
from .counters import resolve_nucleic_acid_counter, resolve_sample_counter
from .errors import InvalidPatientId, LabelParseFailure, MissingRequiredField
from .label import (
    CmoLabel,
    SampleLabel,
    UnparsableLabel,
    is_cell_line_label,
    is_valid_patient_id,
    parse_cmo_label,
)
from .resolver import (
    NUCLEIC_ACID_KIND,
    SAMPLE_TYPE_KIND,
    nucleic_acid_resolution,
    resolve_nucleic_acid_abbreviation,
    resolve_specimen_type_abbreviation as _resolve_specimen_type_abbreviation,
    specimen_type_resolution,
)
from .sample import LabeledRecord, SpecimenDescriptor

logger = logging.getLogger(__name__)

# (field name, accessor) pairs compared by requires_label_update, in order
_MATERIAL_FIELDS: tuple[tuple[str, typing.Callable[[CmoLabel], str]], ...] = (
    ("CMO patient ID", lambda label: label.patient_id),
    ("Sample type abbreviation", lambda label: label.sample_type_abbreviation),
    ("Nucleic acid abbreviation", lambda label: label.nucleic_acid_abbreviation),
)


@dataclass
class SampleStatus:
    """
    Whether a label can be generated for a sample.

    Attributes:
        validation_status: True when every check passed.
        validation_report: Failed check name -> explanation.
    """

    validation_status: bool = True
    validation_report: dict[str, str] = field(default_factory=dict)

    def add_failure(self, check: str, message: str) -> None:
        self.validation_report[check] = message
        self.validation_status = False


class LabelGenerator(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def generate_label(
        self, candidate: SpecimenDescriptor, existing_samples: typing.Sequence[LabeledRecord]
    ) -> SampleLabel:
        raise NotImplementedError

    @abc.abstractmethod
    def requires_label_update(
        self, new_label: typing.Union[str, CmoLabel], existing_label: typing.Union[str, CmoLabel]
    ) -> bool:
        raise NotImplementedError


class DefaultLabelGenerator(LabelGenerator):
    def __init__(self, strict_history: bool = False):
        """
        - False: unparsable labels in the patient history are skipped with a warning
        - True : unparsable labels in the patient history raise LabelParseFailure
        """
        self.strict_history = strict_history

    def generate_label(
        self, candidate: SpecimenDescriptor, existing_samples: typing.Sequence[LabeledRecord]
    ) -> SampleLabel:
        """
        Build the label for `candidate` given every labeled sample of the same patient.

        Raises MissingRequiredField, InvalidPatientId, UnresolvedAbbreviation,
        CounterOverflow, or (strict history only) LabelParseFailure.
        """
        if is_cell_line_sample(candidate):
            label = generate_cell_line_label(candidate)
            logger.debug(f"Sample {candidate.primary_id!r} is a cell line; labeled {label}")
            return label

        if not candidate.patient_id:
            raise MissingRequiredField("patient_id", candidate.primary_id)
        if not is_valid_patient_id(candidate.patient_id):
            raise InvalidPatientId(candidate.patient_id, candidate.primary_id)
        if not candidate.primary_id:
            raise MissingRequiredField("primary_id")

        sample_type_abbreviation = _resolve_specimen_type_abbreviation(
            candidate.specimen_type, candidate.sample_origin, candidate.clinical_sample_class
        )
        nucleic_acid_abbreviation = resolve_nucleic_acid_abbreviation(
            candidate.nucleic_acid_sample_type, candidate.recipe, candidate.na_to_extract
        )

        existing_samples = list(existing_samples)
        label = CmoLabel(
            patient_id=candidate.patient_id,
            sample_type_abbreviation=sample_type_abbreviation,
            sample_counter=resolve_sample_counter(
                candidate.primary_id, existing_samples, self.strict_history
            ),
            nucleic_acid_abbreviation=nucleic_acid_abbreviation,
            nucleic_acid_counter=resolve_nucleic_acid_counter(
                nucleic_acid_abbreviation, existing_samples, self.strict_history
            ),
        )
        logger.debug(
            f"Generated label {label} for sample {candidate.primary_id!r} "
            f"from {len(existing_samples)} existing sample(s)"
        )
        return label

    def requires_label_update(
        self, new_label: typing.Union[str, CmoLabel], existing_label: typing.Union[str, CmoLabel]
    ) -> bool:
        """
        Compare two labels generated for the same physical specimen.

        Only the patient id, specimen-type letter and nucleic-acid letter matter;
        counters are ignored. Both labels must parse.
        """
        parsed_new = self._as_cmo_label(new_label)
        parsed_existing = self._as_cmo_label(existing_label)
        if isinstance(parsed_new, UnparsableLabel) or isinstance(parsed_existing, UnparsableLabel):
            raise LabelParseFailure(
                [str(new_label), str(existing_label)],
                "new and/or existing label cannot be compared",
            )

        for field_name, accessor in _MATERIAL_FIELDS:
            if accessor(parsed_new).casefold() != accessor(parsed_existing).casefold():
                logger.info(
                    f"{field_name} differs between new label {str(new_label)!r} and "
                    f"existing label {str(existing_label)!r}; label update required"
                )
                return True
        return False

    def generate_sample_status(
        self, candidate: SpecimenDescriptor, existing_samples: typing.Sequence[LabeledRecord] = ()
    ) -> SampleStatus:
        """Run the checks label generation depends on and report every failure."""
        status = SampleStatus()

        if is_cell_line_sample(candidate):
            if not candidate.investigator_sample_id:
                status.add_failure("investigator sample id", "required to label a cell line sample")
            if not candidate.request_id:
                status.add_failure("request id", "required to label a cell line sample")
            return status

        if not candidate.patient_id:
            status.add_failure("cmo patient id", "missing")
        elif not is_valid_patient_id(candidate.patient_id):
            status.add_failure("cmo patient id", f"{candidate.patient_id!r} does not match 'C-<alphanumeric>'")
        if not candidate.primary_id:
            status.add_failure("primary id", "missing")

        if not specimen_type_resolution(
            candidate.specimen_type, candidate.sample_origin, candidate.clinical_sample_class
        ).is_resolved:
            status.add_failure(
                f"{SAMPLE_TYPE_KIND} abbreviation",
                "could not resolve based on specimen type, sample origin, or sample class",
            )

        acid = nucleic_acid_resolution(
            candidate.nucleic_acid_sample_type, candidate.recipe, candidate.na_to_extract
        )
        if not acid.is_resolved:
            status.add_failure(
                f"{NUCLEIC_ACID_KIND} abbreviation",
                "could not resolve based on sample type or naToExtract",
            )
        elif acid.source == "sample_type_default":
            logger.debug(
                f"Nucleic acid for sample {candidate.primary_id!r} defaulted to "
                f"{acid.letter!r} from sample type {candidate.nucleic_acid_sample_type!r}"
            )

        if self.strict_history:
            for sample in existing_samples:
                parsed = parse_cmo_label(sample.cmo_label)
                if isinstance(parsed, UnparsableLabel) and not is_cell_line_label(sample.cmo_label):
                    status.add_failure(
                        f"existing label {sample.cmo_label!r}", parsed.reason
                    )
        return status

    @staticmethod
    def increment_nucleic_acid_counter(label: typing.Union[str, CmoLabel]) -> str:
        """Return `label` with its nucleic-acid counter raised by one."""
        parsed = label if isinstance(label, CmoLabel) else CmoLabel.parse(label)
        return str(parsed.with_next_nucleic_acid_counter())

    @staticmethod
    def _as_cmo_label(label: typing.Union[str, CmoLabel]) -> typing.Union[CmoLabel, UnparsableLabel]:
        # objects go through their text form, the same as stored labels
        text = str(label) if isinstance(label, CmoLabel) else label
        return parse_cmo_label(text)


_DEFAULT_GENERATOR = DefaultLabelGenerator()


def generate_label(
    candidate: SpecimenDescriptor, existing_samples: typing.Sequence[LabeledRecord]
) -> SampleLabel:
    return _DEFAULT_GENERATOR.generate_label(candidate, existing_samples)


def requires_label_update(
    new_label: typing.Union[str, CmoLabel], existing_label: typing.Union[str, CmoLabel]
) -> bool:
    return _DEFAULT_GENERATOR.requires_label_update(new_label, existing_label)


def generate_sample_status(
    candidate: SpecimenDescriptor, existing_samples: typing.Sequence[LabeledRecord] = ()
) -> SampleStatus:
    return _DEFAULT_GENERATOR.generate_sample_status(candidate, existing_samples)


def increment_nucleic_acid_counter(label: typing.Union[str, CmoLabel]) -> str:
    return DefaultLabelGenerator.increment_nucleic_acid_counter(label)


def resolve_specimen_type_abbreviation(
    specimen_type: typing.Optional[str],
    sample_origin: typing.Optional[str],
    sample_class: typing.Optional[str],
) -> str:
    """Standalone specimen-type lookup for validation and reporting callers."""
    return _resolve_specimen_type_abbreviation(specimen_type, sample_origin, sample_class)


__all__ = [
    "DefaultLabelGenerator",
    "LabelGenerator",
    "SampleStatus",
    "generate_label",
    "generate_sample_status",
    "increment_nucleic_acid_counter",
    "requires_label_update",
    "resolve_specimen_type_abbreviation",
]
