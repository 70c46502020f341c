"""
Closed vocabularies used to resolve label abbreviations.

Every enumeration carries an explicit UNKNOWN member; `from_label` never
raises, it returns UNKNOWN for blank, missing or unrecognized input.
"""

import re
import typing
from enum import Enum

_SEPARATORS = re.compile(r"[\s_\-]+")


def _normalize(label: str) -> str:
    return _SEPARATORS.sub("", label.strip()).casefold()


class _LabelledEnum(Enum):
    """Enum whose values are the canonical labels used in sample metadata."""

    @classmethod
    def from_label(cls, label: typing.Any):
        """
        Match `label` against member values and names.

        Case is ignored, as are spaces, hyphens and underscores, so
        'Whole Blood', 'WHOLE_BLOOD' and 'whole-blood' all map to the same member.
        """
        if not isinstance(label, str) or not label.strip():
            return cls.UNKNOWN
        key = _normalize(label)
        for member in cls:
            if member.value is None:
                continue
            if key == _normalize(member.value) or key == _normalize(member.name):
                return member
        return cls.UNKNOWN

    @property
    def is_known(self) -> bool:
        return self.value is not None


class SpecimenType(_LabelledEnum):
    """Physical category of a specimen."""
    BIOPSY = "Biopsy"
    BLOOD = "Blood"
    CELLLINE = "CellLine"
    CFDNA = "cfDNA"
    EXOSOME = "Exosome"
    FINGERNAILS = "Fingernails"
    ORGANOID = "Organoid"
    OTHER = "other"
    PDX = "PDX"
    RAPID_AUTOPSY = "Rapid Autopsy"
    RESECTION = "Resection"
    SALIVA = "Saliva"
    XENOGRAFT = "Xenograft"
    XENOGRAFT_DERIVED_CELLLINE = "XenograftDerivedCellLine"
    UNKNOWN = None


class SampleOrigin(_LabelledEnum):
    """Biological source fluid or tissue a specimen was taken from."""
    BLOCK = "Block"
    BONE_MARROW = "Bone Marrow"
    BUFFY_COAT = "Buffy Coat"
    CELL_PELLET = "Cell Pellet"
    CELLS = "Cells"
    CEREBROSPINAL_FLUID = "Cerebrospinal Fluid"
    CORE_BIOPSY = "Core Biopsy"
    CURLS = "Curls"
    CYTOSPIN_PREPARATION = "Cytospin Preparation"
    FINE_NEEDLE_ASPIRATE = "Fine Needle Aspirate"
    FINGERNAILS = "Fingernails"
    OTHER = "Other"
    PLASMA = "Plasma"
    PUNCH = "Punch"
    RAPID_AUTOPSY = "Rapid Autopsy"
    SALIVA = "Saliva"
    SLIDES = "Slides"
    SORTED_CELLS = "Sorted Cells"
    TISSUE = "Tissue"
    URINE = "Urine"
    VIABLY_FROZEN_CELLS = "Viably Frozen Cells"
    WHOLE_BLOOD = "Whole Blood"
    UNKNOWN = None


class SampleClass(_LabelledEnum):
    """Clinical classification of a specimen."""
    UNKNOWN_TUMOR = "Unknown Tumor"
    LOCAL_RECURRENCE = "Local Recurrence"
    PRIMARY = "Primary"
    RECURRENCE = "Recurrence"
    METASTASIS = "Metastasis"
    NORMAL = "Normal"
    ADJACENT_NORMAL = "Adjacent Normal"
    ADJACENT_TISSUE = "Adjacent Tissue"
    UNKNOWN = None


class SampleType(_LabelledEnum):
    """Material type submitted for sequencing; drives the nucleic-acid letter."""
    BLOCKS_SLIDES = "Blocks/Slides"
    BLOOD = "Blood"
    BUFFY_COAT = "Buffy Coat"
    CDNA = "cDNA"
    CDNA_LIBRARY = "cDNA Library"
    CELLS = "cells"
    CFDNA = "cfDNA"
    DNA = "DNA"
    DNA_LIBRARY = "DNA Library"
    PLASMA = "Plasma"
    POOLED_LIBRARY = "Pooled Library"
    RNA = "RNA"
    TISSUE = "Tissue"
    UNKNOWN = None


class NucleicAcid(_LabelledEnum):
    """Nucleic acid requested for extraction ('naToExtract')."""
    DNA = "DNA"
    RNA = "RNA"
    DNA_AND_RNA = "DNA and RNA"
    CFDNA = "cfDNA"
    UNKNOWN = None
