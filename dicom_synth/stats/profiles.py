"""Per-modality statistical profiles and study shape policies.

A ModalityProfile holds what was measured for a modality. A ModalityPolicy
says how a study of that modality is shaped: where its ImageType comes from
and which image types get sampled series/image counts. Adding a modality is
a new table row, not a new branch in the builders.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from dicom_synth.core.constants import (
    AXIAL_PRIMARY_IMAGE_TYPE,
    FIXED_IMAGES_PER_SERIES,
    FIXED_SERIES_PER_STUDY,
    GENERIC_PRIMARY_IMAGE_TYPE,
)
from dicom_synth.stats.sampler import NormalDistribution, WeightedSampler


@dataclass(frozen=True)
class ModalityProfile:
    """Statistical profile of one modality.

    Attributes:
        code: Modality code, e.g. "CT"
        frequency_weight: Relative frequency of the modality in a PACS
        series_per_study: Distribution of series counts per study
        images_per_series: Distribution of image counts per series

    """

    code: str
    frequency_weight: float
    series_per_study: NormalDistribution
    images_per_series: NormalDistribution


@dataclass(frozen=True)
class StudyShape:
    """Resolved shape of one study."""

    image_type: str
    series_count: int
    images_per_series: int


@dataclass(frozen=True)
class ModalityPolicy:
    """How studies of a modality are shaped.

    Attributes:
        fixed_image_type: ImageType used when no distribution is sampled
        sample_image_type: Draw ImageType from the modality's image type
            distribution in the registry
        sampled_count_image_types: Image types whose series/image counts
            are drawn from the profile; None means every image type
        fixed_series_count: Series count for the other image types
        fixed_images_per_series: Images per series for the other image types

    """

    fixed_image_type: str = GENERIC_PRIMARY_IMAGE_TYPE
    sample_image_type: bool = False
    sampled_count_image_types: frozenset[str] | None = None
    fixed_series_count: int = FIXED_SERIES_PER_STUDY
    fixed_images_per_series: int = FIXED_IMAGES_PER_SERIES

    def samples_counts(self, image_type: str) -> bool:
        if self.sampled_count_image_types is None:
            return True
        return image_type in self.sampled_count_image_types

    def resolve(
        self,
        profile: ModalityProfile,
        image_types: WeightedSampler[str] | None,
        rng: random.Random,
    ) -> StudyShape:
        """Pick the image type then the series and image counts.

        Sampled counts are floored and clamped to at least 1.
        """
        if self.sample_image_type and image_types is not None:
            image_type = image_types.pick(rng)
        else:
            image_type = self.fixed_image_type

        if not self.samples_counts(image_type):
            return StudyShape(
                image_type, self.fixed_series_count, self.fixed_images_per_series
            )

        series_count = profile.series_per_study.sample_count(rng)
        images_per_series = profile.images_per_series.sample_count(rng)
        return StudyShape(image_type, series_count, images_per_series)


DEFAULT_POLICY = ModalityPolicy()

# Only reconstructed axial CT shows the multi-series, many-slice structure;
# localizers and derived CT images are small fixed-shape series.
MODALITY_POLICIES: dict[str, ModalityPolicy] = {
    "CT": ModalityPolicy(
        sample_image_type=True,
        sampled_count_image_types=frozenset({AXIAL_PRIMARY_IMAGE_TYPE}),
    ),
}


def policy_for(modality: str) -> ModalityPolicy:
    return MODALITY_POLICIES.get(modality, DEFAULT_POLICY)
