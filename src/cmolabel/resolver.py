"""
Abbreviation resolvers.

Both resolvers walk a fallback chain and report which rule fired through an
`AbbreviationResolution`, so a letter that was defaulted can be told apart
from one that was mapped directly, and an unresolved outcome is explicit.
The raising `resolve_*` functions are what label generation uses.
"""

from __future__ import annotations

import typing
from dataclasses import dataclass

from .abbreviations import (
    DNA_ABBREVIATION,
    KNOWN_CFDNA_SAMPLE_ORIGINS,
    RNA_ABBREVIATION,
    RNA_SEQ_RECIPE,
    SAMPLE_CLASS_ABBREVIATIONS,
    SAMPLE_ORIGIN_ABBREVIATION_DEFAULT,
    SAMPLE_ORIGIN_ABBREVIATIONS,
    SPECIMEN_TYPE_ABBREVIATIONS,
)
from .enums import NucleicAcid, SampleClass, SampleOrigin, SampleType, SpecimenType
from .errors import UnresolvedAbbreviation

SAMPLE_TYPE_KIND = "sample type"
NUCLEIC_ACID_KIND = "nucleic acid"


@dataclass(frozen=True)
class AbbreviationResolution:
    """
    Outcome of an abbreviation fallback chain.

    Attributes:
        letter: The resolved letter, or None when no rule matched.
        source: Name of the rule that produced the letter, 'unresolved' otherwise.
    """

    letter: typing.Optional[str]
    source: str

    @property
    def is_resolved(self) -> bool:
        return self.letter is not None


UNRESOLVED = AbbreviationResolution(letter=None, source="unresolved")


def specimen_type_resolution(
    specimen_type: typing.Optional[str],
    sample_origin: typing.Optional[str],
    sample_class: typing.Optional[str],
) -> AbbreviationResolution:
    """
    Resolution order (first match wins):
    1) specimen type maps directly (PDX/xenograft -> X, organoid -> G)
    2) cfDNA from a known cfDNA origin -> origin letter
    3) exosome -> origin letter, or 'T' when the origin is not in the table
    4) sample class mapping
    """
    specimen = SpecimenType.from_label(specimen_type)
    origin = SampleOrigin.from_label(sample_origin)

    if specimen in SPECIMEN_TYPE_ABBREVIATIONS:
        return AbbreviationResolution(SPECIMEN_TYPE_ABBREVIATIONS[specimen], "specimen_type")
    if specimen is SpecimenType.CFDNA and origin in KNOWN_CFDNA_SAMPLE_ORIGINS:
        return AbbreviationResolution(SAMPLE_ORIGIN_ABBREVIATIONS[origin], "sample_origin")
    if specimen is SpecimenType.EXOSOME:
        return AbbreviationResolution(
            SAMPLE_ORIGIN_ABBREVIATIONS.get(origin, SAMPLE_ORIGIN_ABBREVIATION_DEFAULT),
            "sample_origin",
        )

    letter = SAMPLE_CLASS_ABBREVIATIONS.get(SampleClass.from_label(sample_class))
    if letter is None:
        return UNRESOLVED
    return AbbreviationResolution(letter, "sample_class")


def resolve_specimen_type_abbreviation(
    specimen_type: typing.Optional[str],
    sample_origin: typing.Optional[str],
    sample_class: typing.Optional[str],
) -> str:
    """Return the specimen-type letter or raise UnresolvedAbbreviation."""
    resolution = specimen_type_resolution(specimen_type, sample_origin, sample_class)
    if not resolution.is_resolved:
        raise UnresolvedAbbreviation(
            SAMPLE_TYPE_KIND,
            {
                "specimen_type": specimen_type,
                "sample_origin": sample_origin,
                "sample_class": sample_class,
            },
        )
    return resolution.letter


def nucleic_acid_resolution(
    sample_type: typing.Optional[str],
    recipe: typing.Optional[str],
    na_to_extract: typing.Optional[str],
) -> AbbreviationResolution:
    """
    Resolve the d/r letter from the sample type first and `naToExtract` second.

    A recognized sample type without a specific rule defaults to 'd'
    (source 'sample_type_default'). An unrecognized sample type falls through
    to `naToExtract`; if that is unrecognized too the result is UNRESOLVED.
    """
    parsed_type = SampleType.from_label(sample_type)
    if parsed_type is SampleType.POOLED_LIBRARY:
        is_rna = isinstance(recipe, str) and recipe.strip().casefold() == RNA_SEQ_RECIPE.casefold()
        return AbbreviationResolution(RNA_ABBREVIATION if is_rna else DNA_ABBREVIATION, "sample_type")
    if parsed_type in (SampleType.DNA, SampleType.CFDNA, SampleType.DNA_LIBRARY):
        return AbbreviationResolution(DNA_ABBREVIATION, "sample_type")
    if parsed_type is SampleType.RNA:
        return AbbreviationResolution(RNA_ABBREVIATION, "sample_type")
    if parsed_type.is_known:
        return AbbreviationResolution(DNA_ABBREVIATION, "sample_type_default")

    nucleic_acid = NucleicAcid.from_label(na_to_extract)
    if nucleic_acid in (NucleicAcid.DNA, NucleicAcid.DNA_AND_RNA, NucleicAcid.CFDNA):
        return AbbreviationResolution(DNA_ABBREVIATION, "na_to_extract")
    if nucleic_acid is NucleicAcid.RNA:
        return AbbreviationResolution(RNA_ABBREVIATION, "na_to_extract")
    return UNRESOLVED


def resolve_nucleic_acid_abbreviation(
    sample_type: typing.Optional[str],
    recipe: typing.Optional[str],
    na_to_extract: typing.Optional[str],
) -> str:
    """Return the nucleic-acid letter or raise UnresolvedAbbreviation."""
    resolution = nucleic_acid_resolution(sample_type, recipe, na_to_extract)
    if not resolution.is_resolved:
        raise UnresolvedAbbreviation(
            NUCLEIC_ACID_KIND,
            {"sample_type": sample_type, "recipe": recipe, "na_to_extract": na_to_extract},
        )
    return resolution.letter
