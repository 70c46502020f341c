"""
Tests for batch labeling: per-patient sequencing and isolation of failures.
"""

from cmolabel.batch import label_samples
from cmolabel.generator import DefaultLabelGenerator
from cmolabel.sample import LabeledSample


def test_candidates_of_one_patient_get_distinct_counters(make_manifest):
    audit = []
    candidates = [
        make_manifest("1", "Xenograft", "DNA"),
        make_manifest("2", "Xenograft", "DNA"),
        make_manifest("3", "Organoid", "RNA"),
    ]
    results = label_samples(candidates, [], DefaultLabelGenerator(), audit)
    assert [r.cmo_label for r in results] == ["C-1235-X001-d01", "C-1235-X002-d02", "C-1235-G003-r01"]
    assert all(r.requires_update is None for r in results)
    assert audit == []


def test_patients_are_counted_independently(make_manifest):
    candidates = [
        make_manifest("1", "Xenograft", cmo_patient_id="C-1"),
        make_manifest("2", "Xenograft", cmo_patient_id="C-2"),
    ]
    existing = [LabeledSample("C-2-X007-d03", "9", "C-2")]
    results = label_samples(candidates, existing, DefaultLabelGenerator(), [])
    assert [r.cmo_label for r in results] == ["C-1-X001-d01", "C-2-X008-d04"]


def test_failure_does_not_block_other_samples(make_manifest):
    audit = []
    candidates = [
        make_manifest("bad", "Resection", "Protein"),
        make_manifest("good", "Xenograft", "DNA"),
    ]
    results = label_samples(candidates, [], DefaultLabelGenerator(), audit)
    assert results[0].cmo_label is None
    assert "Could not resolve" in results[0].error
    assert results[1].cmo_label == "C-1235-X001-d01"
    assert [e.sheet for e in audit if e.level == "error"] == ["bad"]


def test_relabeling_keeps_stored_label_when_change_is_immaterial(make_manifest, make_labeled):
    existing = [make_labeled("4324_1", "C-1235-G001-d01"), make_labeled("4324_2", "C-1235-G002-d02")]
    results = label_samples([make_manifest("4324_1", "Organoid", "DNA")], existing, DefaultLabelGenerator(), [])
    result = results[0]
    assert result.previous_label == "C-1235-G001-d01"
    assert result.requires_update is False
    assert result.cmo_label == "C-1235-G001-d01"


def test_relabeling_replaces_label_when_change_is_material(make_manifest, make_labeled):
    existing = [make_labeled("4324_1", "C-1235-G001-d01"), make_labeled("4324_2", "C-1235-G002-d02")]
    candidates = [
        make_manifest("4324_1", "Organoid", "RNA"),
        make_manifest("4324_3", "Organoid", "RNA"),
    ]
    results = label_samples(candidates, existing, DefaultLabelGenerator(), [])
    assert results[0].requires_update is True
    assert results[0].cmo_label == "C-1235-G001-r01"
    # the replaced label is part of the history for the next candidate
    assert results[1].cmo_label == "C-1235-G003-r02"


def test_malformed_patient_id_never_repeats_a_label(make_manifest):
    audit = []
    candidates = [
        make_manifest("1", "PDX", cmo_patient_id="1235"),
        make_manifest("2", "PDX", cmo_patient_id="1235"),
    ]
    results = label_samples(candidates, [], DefaultLabelGenerator(), audit)
    assert [r.cmo_label for r in results] == [None, None]
    assert all("1235" in r.error for r in results)
    assert [entry.level for entry in audit] == ["error", "error"]


def test_primary_id_match_is_case_insensitive(make_manifest, make_labeled):
    existing = [make_labeled("ABC_1", "C-1235-X001-d01")]
    results = label_samples([make_manifest("abc_1", "Xenograft")], existing, DefaultLabelGenerator(), [])
    assert results[0].previous_label == "C-1235-X001-d01"
    assert results[0].requires_update is False
