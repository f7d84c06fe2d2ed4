"""Statistics registry.

Bundles every distribution the builders draw from. A registry is immutable
once built and holds no random state, so one instance per process is
shared by every generator and passed explicitly into each builder.

USAGE:
    registry = get_registry()
    indices = registry.resolve_modalities(["CT", "MR"])
    profile = registry.pick_modality(rng, indices)
"""

from __future__ import annotations

import functools
import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import time
from types import MappingProxyType

from dicom_synth.core.exceptions import ConfigurationError
from dicom_synth.stats import tables
from dicom_synth.stats.profiles import ModalityProfile
from dicom_synth.stats.sampler import NormalDistribution, WeightedSampler
from dicom_synth.utils.logger import get_logger

logger = get_logger(__name__)

_EMPTY: Mapping[str, WeightedSampler[str]] = MappingProxyType({})


@dataclass(frozen=True)
class StatisticsRegistry:
    """Immutable bundle of empirical distributions.

    Attributes:
        modality_indexes: Modality code -> index into the frequency sampler
        modality_frequency: Weighted sampler over ModalityProfiles
        tag_values: Modality -> tag keyword -> value sampler
        image_types: Modality -> ImageType sampler
        accession_formats: Sampler over (prefix, digit count) formats
        hour_of_day: Sampler over study start hours

    """

    modality_indexes: Mapping[str, int]
    modality_frequency: WeightedSampler[ModalityProfile]
    tag_values: Mapping[str, Mapping[str, WeightedSampler[str]]]
    image_types: Mapping[str, WeightedSampler[str]]
    accession_formats: WeightedSampler[tuple[str, int]]
    hour_of_day: WeightedSampler[int]

    @classmethod
    def from_tables(cls) -> StatisticsRegistry:
        """Build a registry from the embedded distribution tables."""
        profiles = [
            ModalityProfile(
                code=code,
                frequency_weight=frequency,
                series_per_study=NormalDistribution(series_mean, series_sd),
                images_per_series=NormalDistribution(images_mean, images_sd),
            )
            for code, frequency, series_mean, series_sd, images_mean, images_sd in (
                tables.MODALITY_STATS
            )
        ]

        tag_values = {
            modality: MappingProxyType(
                {
                    keyword: WeightedSampler(values)
                    for keyword, values in by_tag.items()
                }
            )
            for modality, by_tag in tables.TAG_VALUES_BY_MODALITY.items()
        }

        registry = cls(
            modality_indexes=MappingProxyType(
                {p.code: i for i, p in enumerate(profiles)}
            ),
            modality_frequency=WeightedSampler(
                (p, p.frequency_weight) for p in profiles
            ),
            tag_values=MappingProxyType(tag_values),
            image_types=MappingProxyType(
                {
                    modality: WeightedSampler(values)
                    for modality, values in tables.IMAGE_TYPES_BY_MODALITY.items()
                }
            ),
            accession_formats=WeightedSampler(
                ((prefix, digits), frequency)
                for prefix, digits, frequency in tables.ACCESSION_NUMBER_FORMATS
            ),
            hour_of_day=WeightedSampler(enumerate(tables.HOURLY_STUDY_FREQUENCY)),
        )
        logger.debug(
            "statistics_loaded",
            modalities=len(profiles),
            tag_tables=sum(len(t) for t in tag_values.values()),
        )
        return registry

    def supported_modalities(self) -> list[str]:
        return list(self.modality_indexes)

    def resolve_modalities(self, codes: Iterable[str]) -> list[int]:
        """Map requested modality codes to sampler indices.

        Args:
            codes: Requested modality codes; empty means all supported

        Returns:
            Indices into modality_frequency

        Raises:
            ConfigurationError: If any code is unsupported

        """
        codes = list(codes)
        if not codes:
            return list(self.modality_indexes.values())

        supported = self.supported_modalities()
        for code in codes:
            if code not in self.modality_indexes:
                raise ConfigurationError(
                    f"Modality '{code}' was not supported, supported modalities "
                    f"are: {','.join(supported)}",
                    error_code="UNSUPPORTED_MODALITY",
                    context={"requested": code, "supported": supported},
                )
        return [self.modality_indexes[code] for code in codes]

    def pick_modality(
        self, rng: random.Random, subset: list[int] | None = None
    ) -> ModalityProfile:
        return self.modality_frequency.pick(rng, subset)

    def tag_distributions(self, modality: str) -> Mapping[str, WeightedSampler[str]]:
        """Return the tag value samplers known for a modality (may be empty)."""
        return self.tag_values.get(modality, _EMPTY)

    def image_type_sampler(self, modality: str) -> WeightedSampler[str] | None:
        return self.image_types.get(modality)

    def random_accession_number(self, rng: random.Random) -> str:
        prefix, digits = self.accession_formats.pick(rng)
        return prefix + "".join(str(rng.randrange(10)) for _ in range(digits))

    def random_time_of_day(self, rng: random.Random) -> time:
        hour = self.hour_of_day.pick(rng)
        return time(hour, rng.randrange(60), rng.randrange(60))


@functools.lru_cache(maxsize=1)
def get_registry() -> StatisticsRegistry:
    """Return the process-wide registry, loading it on first use."""
    return StatisticsRegistry.from_tables()
