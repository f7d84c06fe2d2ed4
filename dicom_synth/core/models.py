"""Study and Series containers produced by the builders."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, time

from pydicom.dataset import Dataset


@dataclass
class Series:
    """A generated DICOM series and its image attribute sets.

    Attributes:
        series_uid: SeriesInstanceUID shared by every image
        series_date: SeriesDate (never before the parent StudyDate)
        series_time: SeriesTime
        modality: Modality code
        image_type: Backslash separated ImageType value
        series_number: 1-based position within the study
        images: Image attribute sets, in instance order

    """

    series_uid: str
    series_date: date
    series_time: time
    modality: str
    image_type: str
    series_number: int = 1
    images: list[Dataset] = field(default_factory=list)

    @property
    def number_of_series_related_instances(self) -> int:
        return len(self.images)

    def __iter__(self) -> Iterator[Dataset]:
        return iter(self.images)

    def __len__(self) -> int:
        return len(self.images)


@dataclass
class Study:
    """A generated DICOM study.

    Attributes:
        study_uid: StudyInstanceUID shared by every series and image
        study_date: StudyDate, within the patient's lifetime
        study_time: StudyTime
        accession_number: AccessionNumber
        modality: Modality code of every series in the study
        study_description: Sampled StudyDescription, None when the
            modality has no description distribution
        number_of_study_related_instances: Number of series built for
            the study (always >= 1)
        series: Child series in generation order

    """

    study_uid: str
    study_date: date
    study_time: time
    accession_number: str
    modality: str
    study_description: str | None = None
    number_of_study_related_instances: int = 1
    series: list[Series] = field(default_factory=list)

    def __iter__(self) -> Iterator[Series]:
        return iter(self.series)

    def __len__(self) -> int:
        return len(self.series)

    @property
    def image_count(self) -> int:
        """Return total image count across all series."""
        return sum(len(s) for s in self.series)

    def iter_images(self) -> Iterator[Dataset]:
        """Yield images study-major, series-minor."""
        for series in self.series:
            yield from series.images
