"""
Static abbreviation tables for CMO labels.

These mappings are process-wide constants; they are read-only views so
nothing downstream can mutate them.
"""

from types import MappingProxyType

from .enums import SampleClass, SampleOrigin, SpecimenType

# Specimen types that map to a letter on their own
SPECIMEN_TYPE_ABBREVIATIONS = MappingProxyType({
    SpecimenType.PDX: "X",
    SpecimenType.XENOGRAFT: "X",
    SpecimenType.XENOGRAFT_DERIVED_CELLLINE: "X",
    SpecimenType.ORGANOID: "G",
})

# Used for cfDNA (only these origins) and exosome specimens
SAMPLE_ORIGIN_ABBREVIATIONS = MappingProxyType({
    SampleOrigin.URINE: "U",
    SampleOrigin.CEREBROSPINAL_FLUID: "S",
    SampleOrigin.PLASMA: "L",
    SampleOrigin.WHOLE_BLOOD: "L",
})

KNOWN_CFDNA_SAMPLE_ORIGINS = frozenset(SAMPLE_ORIGIN_ABBREVIATIONS)

SAMPLE_ORIGIN_ABBREVIATION_DEFAULT = "T"

SAMPLE_CLASS_ABBREVIATIONS = MappingProxyType({
    SampleClass.UNKNOWN_TUMOR: "T",
    SampleClass.LOCAL_RECURRENCE: "R",
    SampleClass.PRIMARY: "P",
    SampleClass.RECURRENCE: "R",
    SampleClass.METASTASIS: "M",
    SampleClass.NORMAL: "N",
    SampleClass.ADJACENT_NORMAL: "N",
    SampleClass.ADJACENT_TISSUE: "T",
})

# Every letter a well-formed label may carry in its specimen-type position
SAMPLE_TYPE_LETTERS = frozenset("NTRMLUPSGX")

DNA_ABBREVIATION = "d"
RNA_ABBREVIATION = "r"
NUCLEIC_ACID_LETTERS = frozenset({DNA_ABBREVIATION, RNA_ABBREVIATION})

# Recipe that turns a pooled library into an RNA sample
RNA_SEQ_RECIPE = "RNASeq"
