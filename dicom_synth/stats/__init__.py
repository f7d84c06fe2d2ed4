"""Empirical distributions and the samplers that draw from them."""

from dicom_synth.stats.profiles import ModalityPolicy, ModalityProfile
from dicom_synth.stats.registry import StatisticsRegistry, get_registry
from dicom_synth.stats.sampler import NormalDistribution, WeightedSampler

__all__ = [
    "ModalityPolicy",
    "ModalityProfile",
    "NormalDistribution",
    "StatisticsRegistry",
    "WeightedSampler",
    "get_registry",
]
