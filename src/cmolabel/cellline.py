"""Cell-line specimens receive a counter-free `INVESTIGATOR_ID-REQUESTID` label."""

from __future__ import annotations

from .enums import SpecimenType
from .errors import MissingRequiredField
from .label import CellLineLabel
from .sample import NORMALIZED_PATIENT_ID_FIELD, SpecimenDescriptor

REDACTED_PATIENT_ID = "MRN_REDACTED"


def is_cell_line_sample(sample: SpecimenDescriptor) -> bool:
    """
    A sample is a cell line when its specimen type is 'CellLine' and it carries
    a usable (non-blank, non-redacted) normalized patient id.
    """
    specimen_type = sample.specimen_type
    if not isinstance(specimen_type, str):
        return False
    if specimen_type.strip().casefold() != SpecimenType.CELLLINE.value.casefold():
        return False
    normalized_patient_id = sample.attributes.get(NORMALIZED_PATIENT_ID_FIELD)
    if not isinstance(normalized_patient_id, str) or not normalized_patient_id.strip():
        return False
    return normalized_patient_id.strip().casefold() != REDACTED_PATIENT_ID.casefold()


def generate_cell_line_label(sample: SpecimenDescriptor) -> CellLineLabel:
    if not sample.investigator_sample_id:
        raise MissingRequiredField("investigator_sample_id", sample.primary_id)
    if not sample.request_id:
        raise MissingRequiredField("request_id", sample.primary_id)
    return CellLineLabel(
        investigator_sample_id=sample.investigator_sample_id,
        request_id=sample.request_id,
    )
