"""
Label a batch of candidate samples.

Candidates are grouped by patient and labeled one at a time within each
patient; every new label is folded back into that patient's history before
the next candidate is labeled, so two candidates never share a counter.
A failing candidate is recorded and the batch moves on.
"""

from __future__ import annotations

import logging
import typing
from collections import defaultdict
from dataclasses import dataclass

from .errors import CmoLabelError
from .generator import DefaultLabelGenerator
from .label import CmoLabel
from .mapper import AuditEntry
from .sample import LabeledRecord, LabeledSample, SpecimenDescriptor, same_primary_id

logger = logging.getLogger(__name__)


@dataclass
class LabelingResult:
    """
    Outcome of labeling one candidate.

    Attributes:
        primary_id: The candidate's primary id.
        patient_id: The candidate's CMO patient id.
        cmo_label: The generated label, None when generation failed.
        previous_label: Label already stored for the same primary id, if any.
        requires_update: Whether the new label differs materially from `previous_label`
            (None when there is nothing to compare).
        error: Failure message when generation failed.
    """

    primary_id: typing.Optional[str]
    patient_id: typing.Optional[str]
    cmo_label: typing.Optional[str] = None
    previous_label: typing.Optional[str] = None
    requires_update: typing.Optional[bool] = None
    error: typing.Optional[str] = None


def group_history_by_patient(
    existing_samples: typing.Iterable[LabeledSample],
) -> dict[str, list[LabeledRecord]]:
    history: dict[str, list[LabeledRecord]] = defaultdict(list)
    for sample in existing_samples:
        history[sample.patient_id].append(sample)
    return history


def _find_by_primary_id(
    history: typing.Sequence[LabeledRecord], primary_id: typing.Optional[str]
) -> typing.Optional[int]:
    for index, sample in enumerate(history):
        if same_primary_id(sample.primary_id, primary_id):
            return index
    return None


def label_samples(
    candidates: typing.Sequence[SpecimenDescriptor],
    existing_samples: typing.Iterable[LabeledSample],
    generator: DefaultLabelGenerator,
    audit: list[AuditEntry],
) -> list[LabelingResult]:
    """Label every candidate; results come back in candidate order."""
    history = group_history_by_patient(existing_samples)
    results: list[LabelingResult] = []

    for candidate in candidates:
        result = LabelingResult(primary_id=candidate.primary_id, patient_id=candidate.patient_id)
        results.append(result)
        patient_history = history[candidate.patient_id]
        match = _find_by_primary_id(patient_history, candidate.primary_id)
        if match is not None:
            result.previous_label = patient_history[match].cmo_label

        try:
            label = generator.generate_label(candidate, patient_history)
        except CmoLabelError as e:
            result.error = str(e)
            audit.append(AuditEntry("generate-label", str(candidate.primary_id), str(e), "error"))
            logger.error(f"Could not label sample {candidate.primary_id!r}: {e}")
            continue

        new_label = str(label)
        if result.previous_label is None:
            result.cmo_label = new_label
            patient_history.append(
                LabeledSample(new_label, candidate.primary_id, candidate.patient_id)
            )
            continue

        try:
            if isinstance(label, CmoLabel):
                result.requires_update = generator.requires_label_update(label, result.previous_label)
            else:
                result.requires_update = new_label != result.previous_label
        except CmoLabelError as e:
            # stored label is not comparable (e.g. it was a cell-line label); replace it
            audit.append(AuditEntry("compare-labels", str(candidate.primary_id), str(e), "warning"))
            result.requires_update = True

        if result.requires_update:
            result.cmo_label = new_label
            patient_history[match] = LabeledSample(new_label, candidate.primary_id, candidate.patient_id)
        else:
            result.cmo_label = result.previous_label
    return results
