"""Output sinks for generated images.

A generator writes to exactly one sink:

- FileTreeSink: one DICOM file per image, laid out by a LayoutPathProvider
- TabularSink: study.csv, series.csv and image.csv rows

Images must arrive study-major, series-minor. The tabular sink relies on
that order to emit each study and series row once, via the ``advance``
fold below.
"""

from __future__ import annotations

import csv
from contextlib import ExitStack
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from pydicom.dataset import Dataset
from pydicom.multival import MultiValue

from dicom_synth.core.constants import (
    DEFAULT_IMAGE_HEIGHT,
    DEFAULT_IMAGE_WIDTH,
    IMAGE_COLUMNS,
    MISSING_VALUE,
    SERIES_COLUMNS,
    STUDY_COLUMNS,
)
from dicom_synth.core.exceptions import ConfigurationError, OutputError
from dicom_synth.output.codec import DicomFileCodec
from dicom_synth.output.layout import LayoutPathProvider
from dicom_synth.output.pixels import PixelDrawer
from dicom_synth.utils.logger import get_logger

logger = get_logger(__name__)


class ImageSink(Protocol):
    """Destination for generated image attribute sets."""

    def emit(self, dataset: Dataset) -> None: ...

    def close(self) -> None: ...


class RowLevel(Enum):
    """Tabular row levels, in the order they are written."""

    STUDY = "study"
    SERIES = "series"
    IMAGE = "image"


@dataclass(frozen=True)
class GroupingCursor:
    """UIDs of the last study and series written."""

    last_study_uid: str | None = None
    last_series_uid: str | None = None


def advance(
    cursor: GroupingCursor, dataset: Dataset
) -> tuple[GroupingCursor, tuple[RowLevel, ...]]:
    """Fold one image into the grouping state.

    Args:
        cursor: State after the previous image
        dataset: Next image, in study-major/series-minor order

    Returns:
        The new cursor and the row levels to write for this image

    """
    study_uid = str(dataset.StudyInstanceUID)
    series_uid = str(dataset.SeriesInstanceUID)

    levels: list[RowLevel] = []
    if study_uid != cursor.last_study_uid:
        levels.append(RowLevel.STUDY)
    if series_uid != cursor.last_series_uid:
        levels.append(RowLevel.SERIES)
    levels.append(RowLevel.IMAGE)

    return GroupingCursor(study_uid, series_uid), tuple(levels)


def format_value(dataset: Dataset, keyword: str) -> str:
    """Render one element for a tabular row; absent elements become NULL."""
    if keyword not in dataset:
        return MISSING_VALUE

    element = dataset[keyword]
    value = element.value
    if value is None:
        return ""
    if element.VR == "SQ":
        return f"{len(value)} items"
    if isinstance(value, (MultiValue, list, tuple)):
        return "\\".join(str(v) for v in value)
    return str(value)


def build_row(dataset: Dataset, columns: list[str]) -> list[str]:
    return [format_value(dataset, keyword) for keyword in columns]


class FileTreeSink:
    """Writes every image as a DICOM file below an output root."""

    def __init__(
        self,
        root: Path,
        path_provider: LayoutPathProvider | None = None,
        codec: DicomFileCodec | None = None,
        drawer: PixelDrawer | None = None,
        image_width: int = DEFAULT_IMAGE_WIDTH,
        image_height: int = DEFAULT_IMAGE_HEIGHT,
    ):
        """Initialize the sink.

        Args:
            root: Output root directory
            path_provider: Directory layout, defaults to study/year/month/day
            codec: DICOM encoder
            drawer: Placeholder pixel renderer; None writes no pixel data
            image_width: Placeholder width in pixels
            image_height: Placeholder height in pixels

        """
        self.root = Path(root)
        self.path_provider = path_provider or LayoutPathProvider()
        self.codec = codec or DicomFileCodec()
        self.drawer = drawer
        self.image_width = image_width
        self.image_height = image_height
        self.files_written = 0

    def emit(self, dataset: Dataset) -> None:
        path = self.path_provider.get_path(self.root, dataset)
        pixels = None
        if self.drawer is not None:
            pixels = self.drawer.render(
                dataset,
                self.image_width,
                self.image_height,
                str(dataset.SOPInstanceUID),
            )

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self.codec.encode(dataset, pixels, path)
        except OSError as e:
            raise OutputError(
                f"Failed to write DICOM file: {e}",
                error_code="WRITE_FAILED",
                context={"path": str(path)},
            ) from e

        self.files_written += 1

    def close(self) -> None:
        pass

    def __enter__(self) -> FileTreeSink:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class TabularSink:
    """Writes study, series and image rows to three CSV files.

    Files are opened and their header rows written on construction; they
    stay open until close(). Rows are flushed as each image is emitted so
    an interrupted run keeps everything written so far.
    """

    FILENAMES = {
        RowLevel.STUDY: "study.csv",
        RowLevel.SERIES: "series.csv",
        RowLevel.IMAGE: "image.csv",
    }

    def __init__(
        self,
        output_dir: Path,
        study_columns: list[str] | None = None,
        series_columns: list[str] | None = None,
        image_columns: list[str] | None = None,
    ):
        self.output_dir = Path(output_dir)
        self.columns = {
            RowLevel.STUDY: list(study_columns or STUDY_COLUMNS),
            RowLevel.SERIES: list(series_columns or SERIES_COLUMNS),
            RowLevel.IMAGE: list(image_columns or IMAGE_COLUMNS),
        }
        for level, columns in self.columns.items():
            if len(set(columns)) != len(columns):
                raise ConfigurationError(
                    f"Duplicate {level.value} columns",
                    error_code="DUPLICATE_COLUMNS",
                    context={"columns": columns},
                )

        self.cursor = GroupingCursor()
        self.rows_written = dict.fromkeys(RowLevel, 0)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        with ExitStack() as stack:
            self._handles = {}
            self._writers = {}
            for level, filename in self.FILENAMES.items():
                handle = stack.enter_context(
                    open(self.output_dir / filename, "w", newline="", encoding="utf-8")
                )
                writer = csv.writer(handle)
                writer.writerow(self.columns[level])
                self._handles[level] = handle
                self._writers[level] = writer
            self._files = stack.pop_all()

        logger.debug("tabular_output_opened", output_dir=str(self.output_dir))

    def emit(self, dataset: Dataset) -> None:
        self.cursor, levels = advance(self.cursor, dataset)
        for level in levels:
            try:
                self._writers[level].writerow(build_row(dataset, self.columns[level]))
                self._handles[level].flush()
            except OSError as e:
                raise OutputError(
                    f"Failed to write {level.value} row: {e}",
                    error_code="WRITE_FAILED",
                    context={"path": str(self.output_dir / self.FILENAMES[level])},
                ) from e
            self.rows_written[level] += 1

    def close(self) -> None:
        self._files.close()

    def __enter__(self) -> TabularSink:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
