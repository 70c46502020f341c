import pytest
from cmolabel.enums import NucleicAcid, SampleClass, SampleOrigin, SampleType, SpecimenType


def test_from_label_matches_values_and_names():
    """Canonical values and enum names both resolve, ignoring case and separators."""
    assert SpecimenType.from_label("Xenograft") is SpecimenType.XENOGRAFT
    assert SpecimenType.from_label("XENOGRAFT_DERIVED_CELLLINE") is SpecimenType.XENOGRAFT_DERIVED_CELLLINE
    assert SpecimenType.from_label("XenograftDerivedCellLine") is SpecimenType.XENOGRAFT_DERIVED_CELLLINE
    assert SampleOrigin.from_label("whole blood") is SampleOrigin.WHOLE_BLOOD
    assert SampleOrigin.from_label("WHOLE_BLOOD") is SampleOrigin.WHOLE_BLOOD
    assert SampleClass.from_label(" Adjacent Normal ") is SampleClass.ADJACENT_NORMAL
    assert SampleType.from_label("pooled library") is SampleType.POOLED_LIBRARY
    assert NucleicAcid.from_label("DNA and RNA") is NucleicAcid.DNA_AND_RNA
    assert NucleicAcid.from_label("cfdna") is NucleicAcid.CFDNA


@pytest.mark.parametrize("label", [None, "", "   ", "Sometimes", float("nan"), 3])
def test_from_label_unknown_never_raises(label):
    """Anything unrecognized is the explicit UNKNOWN member."""
    for enum_cls in (SpecimenType, SampleOrigin, SampleClass, SampleType, NucleicAcid):
        member = enum_cls.from_label(label)
        assert member is enum_cls.UNKNOWN
        assert not member.is_known


def test_cdna_is_not_confused_with_cfdna():
    assert SampleType.from_label("cDNA") is SampleType.CDNA
    assert SampleType.from_label("cfDNA") is SampleType.CFDNA
