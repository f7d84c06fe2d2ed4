"""Study builder.

Samples the study level values for a patient and cascades into the
SeriesBuilder. The study's shape (ImageType, series count, images per
series) comes from the modality's policy in stats.profiles.
"""

from __future__ import annotations

import random

from pydicom.uid import generate_uid

from dicom_synth.builders.series_builder import SeriesBuilder
from dicom_synth.core.models import Study
from dicom_synth.core.person import Person
from dicom_synth.stats.profiles import ModalityProfile, policy_for
from dicom_synth.stats.registry import StatisticsRegistry


class StudyBuilder:
    """Builds a complete Study (series and images included) for a person."""

    def __init__(
        self,
        registry: StatisticsRegistry,
        series_builder: SeriesBuilder | None = None,
    ):
        self.registry = registry
        self.series_builder = series_builder or SeriesBuilder(registry)

    def build(
        self, person: Person, profile: ModalityProfile, rng: random.Random
    ) -> Study:
        """Build a study of the given modality.

        Args:
            person: Patient being scanned
            profile: Statistical profile of the chosen modality
            rng: Shared random generator

        Returns:
            Fully materialized study

        """
        modality = profile.code
        study_uid = generate_uid()
        study_date = person.random_date_during_lifetime(rng)

        description_sampler = self.registry.tag_distributions(modality).get(
            "StudyDescription"
        )
        study_description = (
            description_sampler.pick(rng) if description_sampler is not None else None
        )

        accession_number = self.registry.random_accession_number(rng)
        study_time = self.registry.random_time_of_day(rng)

        shape = policy_for(modality).resolve(
            profile, self.registry.image_type_sampler(modality), rng
        )

        study = Study(
            study_uid=study_uid,
            study_date=study_date,
            study_time=study_time,
            accession_number=accession_number,
            modality=modality,
            study_description=study_description,
            number_of_study_related_instances=shape.series_count,
        )

        for series_number in range(1, shape.series_count + 1):
            study.series.append(
                self.series_builder.build(
                    study,
                    person,
                    modality,
                    shape.image_type,
                    shape.images_per_series,
                    rng,
                    series_number=series_number,
                )
            )

        return study
