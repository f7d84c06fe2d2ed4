"""
DICOM Synth - synthetic DICOM metadata for test fixtures.

Generates statistically realistic Study/Series/Image hierarchies for fake
patients, written as DICOM files or as study/series/image CSV tables.
"""

__version__ = "1.0.0"
__license__ = "MIT"

from dicom_synth.core.exceptions import ConfigurationError, DicomSynthError
from dicom_synth.core.models import Series, Study
from dicom_synth.core.person import Address, Person
from dicom_synth.generator import DataGenerator, DicomDataGenerator
from dicom_synth.output.layout import FileSystemLayout
from dicom_synth.quota import ImageQuota
from dicom_synth.stats.registry import StatisticsRegistry, get_registry

__all__ = [
    "__version__",
    "__license__",
    "Address",
    "ConfigurationError",
    "DataGenerator",
    "DicomDataGenerator",
    "DicomSynthError",
    "FileSystemLayout",
    "ImageQuota",
    "Person",
    "Series",
    "StatisticsRegistry",
    "Study",
    "get_registry",
]
