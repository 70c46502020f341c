import pytest
from cmolabel.cellline import generate_cell_line_label, is_cell_line_sample
from cmolabel.errors import MissingRequiredField
from cmolabel.sample import SampleManifest, SampleMetadata


def cell_line_manifest(**overrides) -> SampleManifest:
    values = dict(
        igo_id="4324_1",
        cmo_patient_id="C-1235",
        specimen_type="CellLine",
        investigator_sample_id="JH123",
        igo_request_id="5432_P",
        cmo_sample_id_fields={"normalizedPatientId": "MRN123"},
    )
    values.update(overrides)
    return SampleManifest(**values)


def test_cell_line_detection_is_case_insensitive():
    assert is_cell_line_sample(cell_line_manifest())
    assert is_cell_line_sample(cell_line_manifest(specimen_type="cellline"))


@pytest.mark.parametrize("normalized_patient_id", [None, "", "   ", "MRN_REDACTED", "mrn_redacted"])
def test_cell_line_requires_usable_normalized_patient_id(normalized_patient_id):
    fields = {} if normalized_patient_id is None else {"normalizedPatientId": normalized_patient_id}
    assert not is_cell_line_sample(cell_line_manifest(cmo_sample_id_fields=fields))


def test_other_specimen_types_are_not_cell_lines():
    assert not is_cell_line_sample(cell_line_manifest(specimen_type="XenograftDerivedCellLine"))
    assert not is_cell_line_sample(cell_line_manifest(specimen_type=None))
    assert not is_cell_line_sample(cell_line_manifest(cmo_sample_id_fields=None))


def test_detection_is_idempotent():
    sample = cell_line_manifest()
    assert is_cell_line_sample(sample) == is_cell_line_sample(sample)
    generate_cell_line_label(sample)
    assert is_cell_line_sample(sample)


def test_persisted_record_shape_is_detected_too():
    record = SampleMetadata(
        primary_id="4324_1",
        sample_class="CellLine",  # persisted records keep the specimen type here
        investigator_sample_id="JH123",
        igo_request_id="5432_P",
        cmo_sample_id_fields={"normalizedPatientId": "MRN123"},
    )
    assert is_cell_line_sample(record)
    assert str(generate_cell_line_label(record)) == "JH123-5432P"


def test_missing_fields_raise():
    with pytest.raises(MissingRequiredField) as exc_info:
        generate_cell_line_label(cell_line_manifest(investigator_sample_id=None))
    assert exc_info.value.field == "investigator_sample_id"
    with pytest.raises(MissingRequiredField):
        generate_cell_line_label(cell_line_manifest(igo_request_id=""))
