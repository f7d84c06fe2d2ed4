"""
Pytest configuration and shared fixtures for DICOM Synth tests.
"""

import dataclasses
import logging
import random
import tempfile
from datetime import date
from pathlib import Path
from typing import Generator

import pytest
import structlog
from pydicom.dataset import Dataset

from dicom_synth.core.person import Address, Person
from dicom_synth.stats.profiles import ModalityProfile
from dicom_synth.stats.registry import StatisticsRegistry, get_registry
from dicom_synth.stats.sampler import NormalDistribution, WeightedSampler


class CollectingSink:
    """Sink that keeps emitted datasets in memory."""

    def __init__(self):
        self.datasets: list[Dataset] = []
        self.closed = 0

    def emit(self, dataset: Dataset) -> None:
        self.datasets.append(dataset)

    def close(self) -> None:
        self.closed += 1


def fixed_shape_registry(
    modality: str = "MR", series: int = 1, images: int = 10
) -> StatisticsRegistry:
    """Registry whose only modality always yields series x images.

    A zero standard deviation makes every draw return the mean.
    """
    profile = ModalityProfile(
        code=modality,
        frequency_weight=1.0,
        series_per_study=NormalDistribution(series, 0.0),
        images_per_series=NormalDistribution(images, 0.0),
    )
    return dataclasses.replace(
        get_registry(),
        modality_indexes={modality: 0},
        modality_frequency=WeightedSampler([(profile, 1.0)]),
    )


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields:
        Path to temporary directory that will be cleaned up after test
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def person() -> Person:
    """A patient with a closed lifetime so date draws do not depend on today."""
    return Person(
        patient_id="0105001234",
        forename="Morag",
        surname="Sinclair",
        date_of_birth=date(1950, 5, 1),
        date_of_death=date(2020, 11, 30),
        address=Address(
            line1="12 High Street", line2="Dundee", postcode="DD1 4HN"
        ),
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def registry() -> StatisticsRegistry:
    return get_registry()


@pytest.fixture
def collecting_sink() -> CollectingSink:
    return CollectingSink()


@pytest.fixture
def reset_structlog():
    """Reset structlog configuration after each test."""
    yield

    structlog.reset_defaults()
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)


@pytest.fixture
def shape_registry():
    """Factory for single-modality registries with a fixed study shape."""
    return fixed_shape_registry
