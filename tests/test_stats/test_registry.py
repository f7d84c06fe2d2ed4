"""Tests for dicom_synth.stats.registry module."""

import dataclasses
import random
import re
from datetime import time

import pytest

from dicom_synth.core.exceptions import ConfigurationError
from dicom_synth.stats import tables
from dicom_synth.stats.registry import StatisticsRegistry, get_registry
from dicom_synth.stats.sampler import WeightedSampler


class TestGetRegistry:
    """Tests for the process-wide registry."""

    def test_is_cached(self):
        assert get_registry() is get_registry()

    def test_loads_every_modality(self):
        registry = get_registry()
        assert registry.supported_modalities() == [
            row[0] for row in tables.MODALITY_STATS
        ]

    def test_is_immutable(self):
        registry = get_registry()
        with pytest.raises(AttributeError):
            registry.modality_indexes = {}
        with pytest.raises(TypeError):
            registry.modality_indexes["XX"] = 99


class TestResolveModalities:
    """Tests for modality subset validation."""

    def test_empty_means_all(self, registry):
        indices = registry.resolve_modalities([])
        assert len(indices) == len(registry.supported_modalities())

    def test_known_codes_map_to_indices(self, registry):
        indices = registry.resolve_modalities(["CT", "MR"])
        profiles = registry.modality_frequency.items
        assert [profiles[i].code for i in indices] == ["CT", "MR"]

    def test_unknown_code_lists_supported(self, registry):
        with pytest.raises(ConfigurationError) as exc_info:
            registry.resolve_modalities(["CT", "ZZ"])

        error = exc_info.value
        assert error.error_code == "UNSUPPORTED_MODALITY"
        assert "'ZZ'" in error.message
        assert ",".join(registry.supported_modalities()) in error.message
        assert error.context["requested"] == "ZZ"


class TestPickModality:
    """Tests for weighted modality selection."""

    def test_subset_only_returns_requested(self, registry):
        rng = random.Random(5)
        subset = registry.resolve_modalities(["MR", "US"])
        codes = {registry.pick_modality(rng, subset).code for _ in range(100)}
        assert codes <= {"MR", "US"}

    def test_reproducible_from_seed(self, registry):
        first = [registry.pick_modality(random.Random(11)).code for _ in range(3)]
        second = [registry.pick_modality(random.Random(11)).code for _ in range(3)]
        assert first == second


class TestTagDistributions:
    """Tests for per-modality tag value samplers."""

    def test_ct_has_study_description(self, registry):
        samplers = registry.tag_distributions("CT")
        assert "StudyDescription" in samplers

    def test_unknown_modality_is_empty(self, registry):
        assert dict(registry.tag_distributions("OT")) == {}
        assert dict(registry.tag_distributions("NOPE")) == {}

    def test_only_ct_has_image_types(self, registry):
        assert registry.image_type_sampler("CT") is not None
        assert registry.image_type_sampler("MR") is None


class TestAccessionAndTime:
    """Tests for accession number and time of day draws."""

    def test_accession_number_format(self, registry):
        rng = random.Random(2)
        pattern = re.compile(r"^(RA\d{8}|SR\d{8}|NINW\d{9}|\d{10})$")
        for _ in range(100):
            assert pattern.match(registry.random_accession_number(rng))

    def test_time_of_day_is_valid(self, registry):
        rng = random.Random(3)
        for _ in range(100):
            value = registry.random_time_of_day(rng)
            assert isinstance(value, time)

    def test_hour_comes_from_hour_sampler(self, registry):
        only_nine = dataclasses.replace(
            registry, hour_of_day=WeightedSampler([(9, 1.0)])
        )
        rng = random.Random(4)
        assert {only_nine.random_time_of_day(rng).hour for _ in range(50)} == {9}


class TestFromTables:
    """Tests for building a fresh registry."""

    def test_fresh_registry_matches_cached(self):
        fresh = StatisticsRegistry.from_tables()
        assert fresh is not get_registry()
        assert fresh.supported_modalities() == get_registry().supported_modalities()

    def test_ct_profile_values(self):
        registry = StatisticsRegistry.from_tables()
        ct = registry.modality_frequency.items[registry.modality_indexes["CT"]]
        assert ct.series_per_study.mean == pytest.approx(2.87)
        assert ct.images_per_series.mean == pytest.approx(109.6)
