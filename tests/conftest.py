import pytest

from cmolabel.sample import LabeledSample, SampleManifest


@pytest.fixture(scope="session")
def cmo_patient_id() -> str:
    return "C-1235"


@pytest.fixture
def make_manifest(cmo_patient_id):
    """
    Build a SampleManifest the way intake manifests arrive:
    specimen type on the sample, nucleic acid in the attribute map.
    """

    def _make(igo_id: str, specimen_type: str, na_to_extract: str = "DNA", **kwargs) -> SampleManifest:
        fields = {"naToExtract": na_to_extract}
        fields.update(kwargs.pop("fields", {}))
        return SampleManifest(
            igo_id=igo_id,
            cmo_patient_id=kwargs.pop("cmo_patient_id", cmo_patient_id),
            specimen_type=specimen_type,
            cmo_sample_id_fields=fields,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_labeled(cmo_patient_id):
    """Build a previously labeled sample for the shared test patient."""

    def _make(primary_id: str, label: str) -> LabeledSample:
        return LabeledSample(cmo_label=label, primary_id=primary_id, patient_id=cmo_patient_id)

    return _make
