"""
Sample input shapes.

Label generation reads candidates through the `SpecimenDescriptor` protocol.
Two concrete shapes satisfy it:
- `SampleManifest`: a raw intake manifest row (IGO naming).
- `SampleMetadata`: a persisted sample record. For historical reasons its
  `sample_class` field holds the specimen type and `sample_type` holds the
  clinical sample class.

History entries are read through `LabeledRecord`; both `LabeledSample` and
`SampleMetadata` satisfy it.
"""

from __future__ import annotations

import typing
from dataclasses import dataclass, field

# Keys of the free-form attribute map consulted during labeling
RECIPE_FIELD = "recipe"
NA_TO_EXTRACT_FIELD = "naToExtract"
SAMPLE_TYPE_FIELD = "sampleType"
NORMALIZED_PATIENT_ID_FIELD = "normalizedPatientId"


def same_primary_id(left: typing.Optional[str], right: typing.Optional[str]) -> bool:
    """Primary ids identify the same specimen regardless of case; None never matches."""
    if left is None or right is None:
        return False
    return left.casefold() == right.casefold()


@typing.runtime_checkable
class SpecimenDescriptor(typing.Protocol):
    """Fields of a candidate sample that label generation needs."""

    @property
    def primary_id(self) -> typing.Optional[str]: ...

    @property
    def patient_id(self) -> typing.Optional[str]: ...

    @property
    def specimen_type(self) -> typing.Optional[str]: ...

    @property
    def sample_origin(self) -> typing.Optional[str]: ...

    @property
    def clinical_sample_class(self) -> typing.Optional[str]: ...

    @property
    def investigator_sample_id(self) -> typing.Optional[str]: ...

    @property
    def request_id(self) -> typing.Optional[str]: ...

    @property
    def attributes(self) -> typing.Mapping[str, typing.Any]: ...

    @property
    def nucleic_acid_sample_type(self) -> typing.Optional[str]: ...

    @property
    def recipe(self) -> typing.Optional[str]: ...

    @property
    def na_to_extract(self) -> typing.Optional[str]: ...


class LabeledRecord(typing.Protocol):
    """A previously labeled sample as seen by the counter scans."""

    @property
    def primary_id(self) -> typing.Optional[str]: ...

    @property
    def cmo_label(self) -> typing.Optional[str]: ...


class _AttributeFieldsMixin:
    """Shared accessors over `cmo_sample_id_fields`."""

    cmo_sample_id_fields: typing.Optional[dict[str, typing.Any]]

    @property
    def attributes(self) -> typing.Mapping[str, typing.Any]:
        return self.cmo_sample_id_fields or {}

    def _attribute(self, key: str) -> typing.Optional[str]:
        value = self.attributes.get(key)
        return value if isinstance(value, str) else None

    @property
    def nucleic_acid_sample_type(self) -> typing.Optional[str]:
        return self._attribute(SAMPLE_TYPE_FIELD)

    @property
    def recipe(self) -> typing.Optional[str]:
        return self._attribute(RECIPE_FIELD)

    @property
    def na_to_extract(self) -> typing.Optional[str]:
        return self._attribute(NA_TO_EXTRACT_FIELD)


@dataclass
class SampleManifest(_AttributeFieldsMixin):
    """
    A sample as received on an intake manifest.

    Attributes:
        igo_id: Stable sample identifier assigned at intake (the primary id).
        cmo_patient_id: CMO patient id, e.g. 'C-1235'.
        specimen_type: Specimen type label (e.g. 'Xenograft').
        sample_origin: Sample origin label (e.g. 'Plasma').
        cmo_sample_class: Clinical sample class label (e.g. 'Primary').
        investigator_sample_id: Investigator-assigned sample name.
        igo_request_id: Request the sample was submitted under.
        cmo_sample_id_fields: Free-form map holding recipe, naToExtract,
            sampleType and normalizedPatientId.
    """

    igo_id: typing.Optional[str] = None
    cmo_patient_id: typing.Optional[str] = None
    specimen_type: typing.Optional[str] = None
    sample_origin: typing.Optional[str] = None
    cmo_sample_class: typing.Optional[str] = None
    investigator_sample_id: typing.Optional[str] = None
    igo_request_id: typing.Optional[str] = None
    cmo_sample_id_fields: typing.Optional[dict[str, typing.Any]] = field(default_factory=dict)

    @property
    def primary_id(self) -> typing.Optional[str]:
        return self.igo_id

    @property
    def patient_id(self) -> typing.Optional[str]:
        return self.cmo_patient_id

    @property
    def clinical_sample_class(self) -> typing.Optional[str]:
        return self.cmo_sample_class

    @property
    def request_id(self) -> typing.Optional[str]:
        return self.igo_request_id


@dataclass
class SampleMetadata(_AttributeFieldsMixin):
    """
    A persisted sample record.

    Attributes:
        primary_id: Stable sample identifier.
        cmo_patient_id: CMO patient id.
        sample_class: Specimen type label (stored under this name upstream).
        sample_origin: Sample origin label.
        sample_type: Clinical sample class label (stored under this name upstream).
        investigator_sample_id: Investigator-assigned sample name.
        igo_request_id: Request the sample belongs to.
        cmo_sample_name: The label currently assigned to this sample, if any.
        cmo_sample_id_fields: Free-form attribute map.
    """

    primary_id: typing.Optional[str] = None
    cmo_patient_id: typing.Optional[str] = None
    sample_class: typing.Optional[str] = None
    sample_origin: typing.Optional[str] = None
    sample_type: typing.Optional[str] = None
    investigator_sample_id: typing.Optional[str] = None
    igo_request_id: typing.Optional[str] = None
    cmo_sample_name: typing.Optional[str] = None
    cmo_sample_id_fields: typing.Optional[dict[str, typing.Any]] = field(default_factory=dict)

    @property
    def patient_id(self) -> typing.Optional[str]:
        return self.cmo_patient_id

    @property
    def specimen_type(self) -> typing.Optional[str]:
        return self.sample_class

    @property
    def clinical_sample_class(self) -> typing.Optional[str]:
        return self.sample_type

    @property
    def request_id(self) -> typing.Optional[str]:
        return self.igo_request_id

    @property
    def cmo_label(self) -> typing.Optional[str]:
        return self.cmo_sample_name

    def to_labeled_sample(self) -> "LabeledSample":
        return LabeledSample(
            cmo_label=self.cmo_sample_name,
            primary_id=self.primary_id,
            patient_id=self.cmo_patient_id,
        )


@dataclass(frozen=True)
class LabeledSample:
    """A label already assigned to a physical specimen."""

    cmo_label: typing.Optional[str]
    primary_id: typing.Optional[str]
    patient_id: typing.Optional[str] = None
