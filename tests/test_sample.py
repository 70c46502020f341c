from cmolabel.sample import LabeledSample, SampleManifest, SampleMetadata, SpecimenDescriptor


def test_both_shapes_expose_the_same_descriptor_fields():
    fields = {"naToExtract": "RNA", "recipe": "RNASeq", "sampleType": "Pooled Library"}
    manifest = SampleManifest(
        igo_id="4324",
        cmo_patient_id="C-1235",
        specimen_type="Organoid",
        sample_origin="Tissue",
        cmo_sample_class="Primary",
        investigator_sample_id="inv1",
        igo_request_id="5432_P",
        cmo_sample_id_fields=fields,
    )
    record = SampleMetadata(
        primary_id="4324",
        cmo_patient_id="C-1235",
        sample_class="Organoid",
        sample_origin="Tissue",
        sample_type="Primary",
        investigator_sample_id="inv1",
        igo_request_id="5432_P",
        cmo_sample_id_fields=fields,
    )
    for sample in (manifest, record):
        assert isinstance(sample, SpecimenDescriptor)
        assert sample.primary_id == "4324"
        assert sample.patient_id == "C-1235"
        assert sample.specimen_type == "Organoid"
        assert sample.clinical_sample_class == "Primary"
        assert sample.request_id == "5432_P"
        assert sample.nucleic_acid_sample_type == "Pooled Library"
        assert sample.recipe == "RNASeq"
        assert sample.na_to_extract == "RNA"


def test_missing_attribute_map_reads_as_empty():
    sample = SampleManifest(igo_id="1", cmo_sample_id_fields=None)
    assert sample.attributes == {}
    assert sample.na_to_extract is None


def test_metadata_converts_to_labeled_sample():
    record = SampleMetadata(primary_id="1", cmo_patient_id="C-1", cmo_sample_name="C-1-X001-d01")
    assert record.cmo_label == "C-1-X001-d01"
    assert record.to_labeled_sample() == LabeledSample("C-1-X001-d01", "1", "C-1")
