"""Series builder.

Creates one Series of a Study and the image attribute sets inside it. Every
image repeats the study and series level values so each one can be written
(or tabulated) on its own.
"""

from __future__ import annotations

import random
from datetime import date, datetime, time, timedelta

from pydicom.dataset import Dataset
from pydicom.uid import generate_uid

from dicom_synth.core.constants import IMAGE_PLACEHOLDERS, SOP_CLASS_UID
from dicom_synth.core.models import Series, Study
from dicom_synth.core.person import Person
from dicom_synth.stats.registry import StatisticsRegistry

# Sampled once per study by the study builder
STUDY_LEVEL_TAGS = frozenset({"StudyDescription"})

# Longest value allowed for an LO element
MAX_LO_LENGTH = 64


def format_da(value: date) -> str:
    return value.strftime("%Y%m%d")


def format_tm(value: time | datetime) -> str:
    return value.strftime("%H%M%S")


def _years_before(value: date, years: int) -> date:
    try:
        return value.replace(year=value.year - years)
    except ValueError:
        # 29 February in a non-leap target year
        return value.replace(year=value.year - years, day=28)


def patient_age(date_of_birth: date, on: date) -> int:
    """Age in whole years on a given date."""
    age = on.year - date_of_birth.year
    if date_of_birth > _years_before(on, age):
        age -= 1
    return age


def format_age(age: int) -> str:
    """Format an age as a DICOM AS value, e.g. 4 -> "004Y"."""
    return f"{age:03d}Y"


class SeriesBuilder:
    """Builds a Series and its images for a Study."""

    def __init__(self, registry: StatisticsRegistry):
        self.registry = registry

    def build(
        self,
        study: Study,
        person: Person,
        modality: str,
        image_type: str,
        image_count: int,
        rng: random.Random,
        series_number: int = 1,
    ) -> Series:
        """Build one series.

        Args:
            study: Parent study (its UID and counts are propagated)
            person: Patient being scanned
            modality: Modality code
            image_type: Backslash separated ImageType
            image_count: Number of images to create
            rng: Shared random generator
            series_number: 1-based position of the series in the study

        Returns:
            The populated series

        """
        started = datetime.combine(study.study_date, study.study_time)
        started += timedelta(minutes=rng.randrange(60))

        series = Series(
            series_uid=generate_uid(),
            series_date=started.date(),
            series_time=started.time(),
            modality=modality,
            image_type=image_type,
            series_number=series_number,
        )

        sampled = {
            keyword: sampler.pick(rng)
            for keyword, sampler in self.registry.tag_distributions(modality).items()
            if keyword not in STUDY_LEVEL_TAGS
        }

        age = format_age(patient_age(person.date_of_birth, series.series_date))
        for instance_number in range(1, image_count + 1):
            series.images.append(
                self._build_image(
                    study, series, person, age, sampled, instance_number, image_count
                )
            )

        return series

    def _build_image(
        self,
        study: Study,
        series: Series,
        person: Person,
        age: str,
        sampled: dict[str, str],
        instance_number: int,
        image_count: int,
    ) -> Dataset:
        ds = Dataset()

        ds.StudyInstanceUID = study.study_uid
        ds.SeriesInstanceUID = series.series_uid
        ds.SOPInstanceUID = generate_uid()
        ds.SOPClassUID = SOP_CLASS_UID

        ds.PatientID = person.patient_id
        ds.PatientName = person.full_name
        ds.PatientBirthDate = format_da(person.date_of_birth)
        ds.PatientAddress = person.address.as_line()[:MAX_LO_LENGTH]
        ds.PatientAge = age

        ds.StudyDate = format_da(study.study_date)
        ds.StudyTime = format_tm(study.study_time)
        ds.AccessionNumber = study.accession_number
        if study.study_description is not None:
            ds.StudyDescription = study.study_description

        ds.SeriesDate = format_da(series.series_date)
        ds.SeriesTime = format_tm(series.series_time)
        ds.Modality = series.modality
        ds.ModalitiesInStudy = series.modality
        ds.ImageType = series.image_type
        ds.SeriesNumber = series.series_number
        ds.InstanceNumber = instance_number
        ds.NumberOfStudyRelatedInstances = study.number_of_study_related_instances
        ds.NumberOfSeriesRelatedInstances = image_count

        for keyword, value in IMAGE_PLACEHOLDERS.items():
            setattr(ds, keyword, value)
        ds.AcquisitionDate = ds.SeriesDate
        ds.AcquisitionTime = ds.SeriesTime

        for keyword, value in sampled.items():
            setattr(ds, keyword, value)

        return ds
