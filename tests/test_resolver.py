"""
Tests for the specimen-type and nucleic-acid fallback chains.
"""

import pytest
from cmolabel.errors import UnresolvedAbbreviation
from cmolabel.resolver import (
    nucleic_acid_resolution,
    resolve_nucleic_acid_abbreviation,
    resolve_specimen_type_abbreviation,
    specimen_type_resolution,
)


@pytest.mark.parametrize(
    "specimen_type, expected",
    [
        ("PDX", "X"),
        ("Xenograft", "X"),
        ("XenograftDerivedCellLine", "X"),
        ("Organoid", "G"),
    ],
)
def test_specimen_type_maps_directly(specimen_type, expected):
    # the sample class is ignored once the specimen type maps
    assert resolve_specimen_type_abbreviation(specimen_type, "Plasma", "Normal") == expected


@pytest.mark.parametrize(
    "origin, expected",
    [("Urine", "U"), ("Cerebrospinal Fluid", "S"), ("Plasma", "L"), ("Whole Blood", "L")],
)
def test_cfdna_uses_origin_letter(origin, expected):
    assert resolve_specimen_type_abbreviation("cfDNA", origin, "Primary") == expected


def test_cfdna_with_other_origin_falls_back_to_sample_class():
    assert resolve_specimen_type_abbreviation("cfDNA", "Tissue", "Metastasis") == "M"
    resolution = specimen_type_resolution("cfDNA", None, "Normal")
    assert resolution.letter == "N"
    assert resolution.source == "sample_class"


def test_exosome_uses_origin_letter_or_default():
    assert resolve_specimen_type_abbreviation("Exosome", "Urine", None) == "U"
    assert resolve_specimen_type_abbreviation("Exosome", "Tissue", "Normal") == "T"
    assert resolve_specimen_type_abbreviation("Exosome", None, None) == "T"


@pytest.mark.parametrize(
    "sample_class, expected",
    [
        ("Unknown Tumor", "T"),
        ("Local Recurrence", "R"),
        ("Primary", "P"),
        ("Recurrence", "R"),
        ("Metastasis", "M"),
        ("Normal", "N"),
        ("Adjacent Normal", "N"),
        ("Adjacent Tissue", "T"),
    ],
)
def test_sample_class_fallback(sample_class, expected):
    assert resolve_specimen_type_abbreviation("Biopsy", "Tissue", sample_class) == expected
    assert resolve_specimen_type_abbreviation("not a specimen type", None, sample_class) == expected


def test_unresolved_specimen_type_raises_with_raw_values():
    with pytest.raises(UnresolvedAbbreviation) as exc_info:
        resolve_specimen_type_abbreviation("Resection", "Tissue", "Benign")
    assert exc_info.value.kind == "sample type"
    assert exc_info.value.values == {
        "specimen_type": "Resection",
        "sample_origin": "Tissue",
        "sample_class": "Benign",
    }
    assert not specimen_type_resolution("Resection", "Tissue", "Benign").is_resolved


@pytest.mark.parametrize(
    "sample_type, recipe, expected",
    [
        ("Pooled Library", "RNASeq", "r"),
        ("Pooled Library", "rnaseq", "r"),
        ("Pooled Library", "WholeExomeSequencing", "d"),
        ("Pooled Library", None, "d"),
        ("DNA", None, "d"),
        ("cfDNA", None, "d"),
        ("DNA Library", None, "d"),
        ("RNA", None, "r"),
    ],
)
def test_nucleic_acid_from_sample_type(sample_type, recipe, expected):
    # naToExtract must not override a recognized sample type
    assert resolve_nucleic_acid_abbreviation(sample_type, recipe, "RNA" if expected == "d" else "DNA") == expected


def test_recognized_sample_type_defaults_to_dna():
    resolution = nucleic_acid_resolution("Tissue", None, "RNA")
    assert resolution.letter == "d"
    assert resolution.source == "sample_type_default"


@pytest.mark.parametrize(
    "na_to_extract, expected",
    [("DNA", "d"), ("DNA and RNA", "d"), ("cfDNA", "d"), ("RNA", "r")],
)
def test_nucleic_acid_falls_back_to_na_to_extract(na_to_extract, expected):
    resolution = nucleic_acid_resolution(None, None, na_to_extract)
    assert resolution.letter == expected
    assert resolution.source == "na_to_extract"
    assert resolve_nucleic_acid_abbreviation("garbage", None, na_to_extract) == expected


def test_unresolved_nucleic_acid_is_explicit():
    resolution = nucleic_acid_resolution("garbage", None, "Protein")
    assert not resolution.is_resolved
    assert resolution.source == "unresolved"
    with pytest.raises(UnresolvedAbbreviation) as exc_info:
        resolve_nucleic_acid_abbreviation("garbage", None, "Protein")
    assert exc_info.value.kind == "nucleic acid"
    assert exc_info.value.values["na_to_extract"] == "Protein"
