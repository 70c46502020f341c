"""
Counter resolution over a patient's labeled samples.

- The sample counter is scoped to the patient and shared by every specimen type.
- The nucleic-acid counter is scoped to the patient and the nucleic-acid letter.

Cell-line labels never take part in either scan. Labels that do not parse are
skipped with a warning, or raise LabelParseFailure when `strict` is set.
"""

from __future__ import annotations

import logging
import typing

from .errors import LabelParseFailure
from .label import CmoLabel, UnparsableLabel, is_cell_line_label, parse_cmo_label
from .sample import LabeledRecord, same_primary_id

logger = logging.getLogger(__name__)


def iter_parsed_labels(
    existing_samples: typing.Iterable[LabeledRecord], strict: bool = False
) -> typing.Iterator[CmoLabel]:
    """Yield the parsed labels of `existing_samples`, skipping cell-line labels."""
    for sample in existing_samples:
        label = sample.cmo_label
        if is_cell_line_label(label):
            continue
        parsed = parse_cmo_label(label)
        if isinstance(parsed, UnparsableLabel):
            if strict:
                raise LabelParseFailure([label], parsed.reason)
            logger.warning(
                f"Skipping label {label!r} of sample {sample.primary_id!r}: {parsed.reason}"
            )
            continue
        yield parsed


def next_sample_counter(existing_samples: typing.Sequence[LabeledRecord], strict: bool = False) -> int:
    """Max parsed sample counter plus one (0 + 1 when nothing parses)."""
    counters = [label.sample_counter for label in iter_parsed_labels(existing_samples, strict)]
    return max(counters, default=0) + 1


def resolve_sample_counter(
    primary_id: typing.Optional[str],
    existing_samples: typing.Sequence[LabeledRecord],
    strict: bool = False,
) -> int:
    """
    Counter for the candidate's sample slot.

    The same physical specimen (matched by primary id) keeps its counter;
    anything else gets the next counter for the patient.
    """
    if not existing_samples:
        return 1

    for sample in existing_samples:
        if not same_primary_id(sample.primary_id, primary_id):
            continue
        parsed = parse_cmo_label(sample.cmo_label)
        if isinstance(parsed, CmoLabel):
            logger.debug(
                f"Reusing sample counter {parsed.sample_counter} from {sample.cmo_label!r} "
                f"for primary id {primary_id!r}"
            )
            return parsed.sample_counter

    return next_sample_counter(existing_samples, strict)


def resolve_nucleic_acid_counter(
    nucleic_acid_abbreviation: str,
    existing_samples: typing.Sequence[LabeledRecord],
    strict: bool = False,
) -> int:
    """Next counter among labels sharing the nucleic-acid letter (1 when none do)."""
    wanted = nucleic_acid_abbreviation.casefold()
    counters = [
        label.effective_nucleic_acid_counter
        for label in iter_parsed_labels(existing_samples, strict)
        if label.nucleic_acid_abbreviation.casefold() == wanted
    ]
    return max(counters, default=0) + 1
