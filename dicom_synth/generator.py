"""Synthetic DICOM data generation.

DicomDataGenerator turns people into imaging studies. Each call to
generate_row() picks a modality by its clinical frequency, builds one
Study (series and images included), then streams the images study-major,
series-minor into a single sink until the study or the image quota runs
out.

USAGE:
    with DicomDataGenerator(random.Random(42), Path("./out"), ["CT"]) as gen:
        gen.generate_test_data_file(people, Path("./out/studies.csv"))
"""

from __future__ import annotations

import csv
import random
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from contextlib import ExitStack
from itertools import islice
from pathlib import Path

from pydicom.dataset import Dataset

from dicom_synth.builders.study_builder import StudyBuilder
from dicom_synth.core.config import GenerationConfig, OutputMode
from dicom_synth.core.constants import DEFAULT_IMAGE_HEIGHT, DEFAULT_IMAGE_WIDTH
from dicom_synth.core.exceptions import ConfigurationError
from dicom_synth.core.models import Study
from dicom_synth.core.person import Person
from dicom_synth.output.layout import FileSystemLayout, LayoutPathProvider
from dicom_synth.output.pixels import PixelDrawer
from dicom_synth.output.sinks import FileTreeSink, ImageSink, TabularSink
from dicom_synth.quota import ImageQuota
from dicom_synth.stats.profiles import ModalityProfile
from dicom_synth.stats.registry import StatisticsRegistry, get_registry
from dicom_synth.utils.logger import get_logger

logger = get_logger(__name__)


class DataGenerator(ABC):
    """Produces one output row per person.

    Subclasses declare their columns in get_headers() and produce a row in
    generate_test_data_row().
    """

    def __init__(self, rng: random.Random):
        self.rng = rng

    @abstractmethod
    def get_headers(self) -> list[str]: ...

    @abstractmethod
    def generate_test_data_row(self, person: Person) -> list: ...

    def generate_test_data_file(
        self, people: Iterable[Person], path: Path, count: int | None = None
    ) -> int:
        """Write the header then one row per person to a CSV file.

        Args:
            people: People to generate rows for
            path: Destination CSV file
            count: Maximum number of rows (None = every person)

        Returns:
            Number of rows written

        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        rows = 0
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(self.get_headers())
            for person in islice(people, count):
                row = self.generate_test_data_row(person)
                writer.writerow(["" if value is None else value for value in row])
                rows += 1
        return rows


class DicomDataGenerator(DataGenerator):
    """Generates DICOM studies for people and streams their images.

    Not safe for concurrent use: the random generator, quota and tabular
    grouping state all belong to one instance. Run independent seeded
    instances for parallel generation.
    """

    def __init__(
        self,
        rng: random.Random,
        output_dir: Path | None,
        modalities: Sequence[str] = (),
        *,
        max_images: int | ImageQuota | None = None,
        no_pixels: bool = False,
        tabular: bool = False,
        layout: FileSystemLayout = FileSystemLayout.STUDY_YEAR_MONTH_DAY,
        image_width: int = DEFAULT_IMAGE_WIDTH,
        image_height: int = DEFAULT_IMAGE_HEIGHT,
        registry: StatisticsRegistry | None = None,
        sink: ImageSink | None = None,
    ):
        """Initialize the generator.

        Modalities are validated before any sink is opened.

        Args:
            rng: Seeded random generator shared by every draw
            output_dir: Root for DICOM files, or directory for the CSV tables
            modalities: Modality codes to draw from (empty = all supported)
            max_images: Global image quota, or an ImageQuota to share
            no_pixels: Write DICOM files without pixel data
            tabular: Write study/series/image tables instead of DICOM files
            layout: Directory layout for DICOM files
            image_width: Placeholder pixel width
            image_height: Placeholder pixel height
            registry: Distribution bundle, defaults to the process-wide one
            sink: Custom sink, replaces the file or tabular sink

        Raises:
            ConfigurationError: If a modality is unsupported or no output
                destination is configured

        """
        super().__init__(rng)
        self.registry = registry or get_registry()
        self.modalities = [m.upper() for m in modalities]
        self._modality_indexes = self.registry.resolve_modalities(self.modalities)

        self.output_dir = Path(output_dir) if output_dir is not None else None
        self.no_pixels = no_pixels
        self.tabular = tabular
        self.layout = FileSystemLayout(layout)
        self.quota = (
            max_images if isinstance(max_images, ImageQuota) else ImageQuota(max_images)
        )
        self.study_builder = StudyBuilder(self.registry)

        self._resources = ExitStack()
        self.sink = (
            sink if sink is not None else self._open_sink(image_width, image_height)
        )
        self._resources.callback(self.sink.close)

        logger.debug(
            "generator_initialized",
            modalities=self.modalities or self.registry.supported_modalities(),
            output_mode=(OutputMode.CSV if tabular else OutputMode.FILES).value,
            max_images=self.quota.limit,
        )

    @classmethod
    def from_config(
        cls,
        config: GenerationConfig,
        output_dir: Path,
        quota: ImageQuota | None = None,
    ) -> DicomDataGenerator:
        """Build a generator from a GenerationConfig."""
        return cls(
            random.Random(config.seed),
            output_dir,
            config.modalities,
            max_images=quota if quota is not None else config.max_images,
            no_pixels=config.no_pixels,
            tabular=config.output_mode == OutputMode.CSV,
            layout=config.layout,
            image_width=config.image_width,
            image_height=config.image_height,
        )

    def _open_sink(self, image_width: int, image_height: int) -> ImageSink:
        if self.output_dir is None:
            raise ConfigurationError(
                "An output directory is required unless a sink is supplied",
                error_code="NO_OUTPUT",
            )
        if self.tabular:
            return TabularSink(self.output_dir)
        return FileTreeSink(
            self.output_dir,
            path_provider=LayoutPathProvider(self.layout),
            drawer=None if self.no_pixels else PixelDrawer(),
            image_width=image_width,
            image_height=image_height,
        )

    def get_headers(self) -> list[str]:
        return ["Studies Generated"]

    def generate_test_data_row(self, person: Person) -> list[str | None]:
        return [self.generate_row(person)]

    def generate_row(self, person: Person) -> str | None:
        """Generate one study for a person and emit its images.

        Images stop as soon as the quota is spent; images already emitted
        stay emitted.

        Args:
            person: Patient to generate a study for

        Returns:
            StudyInstanceUID if at least one image was emitted, else None

        """
        study, images = self.generate_study_images(person)

        emitted = 0
        for dataset in images:
            if not self.quota.try_consume():
                break
            self.sink.emit(dataset)
            emitted += 1

        if emitted < len(images):
            logger.info(
                "study_truncated",
                study_uid=study.study_uid,
                emitted=emitted,
                built=len(images),
            )
            if emitted == 0:
                logger.debug("image_quota_exhausted", limit=self.quota.limit)

        return study.study_uid if emitted else None

    def generate_study_images(self, person: Person) -> tuple[Study, list[Dataset]]:
        """Build a study and flatten it, without emitting anything.

        Returns:
            The study and its images in study-major, series-minor order

        """
        study = self.study_builder.build(person, self._random_modality(), self.rng)
        images = list(study.iter_images())
        logger.debug(
            "study_generated",
            study_uid=study.study_uid,
            modality=study.modality,
            series=len(study),
            images=len(images),
        )
        return study, images

    def generate_test_dataset(self, person: Person) -> Dataset:
        """Return the first image of a fresh study, ignoring quota and sink."""
        study = self.study_builder.build(person, self._random_modality(), self.rng)
        return study.series[0].images[0]

    def _random_modality(self) -> ModalityProfile:
        return self.registry.pick_modality(self.rng, self._modality_indexes)

    def close(self) -> None:
        """Release sink resources. Safe to call more than once."""
        self._resources.close()

    def __enter__(self) -> DicomDataGenerator:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
