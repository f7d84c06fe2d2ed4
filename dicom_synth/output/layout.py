"""Directory layouts for generated DICOM files."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydicom.dataset import Dataset


class FileSystemLayout(str, Enum):
    """Available directory naming schemes.

    - FLAT: root/<SOPInstanceUID>.dcm
    - STUDY: root/<StudyInstanceUID>/<SOPInstanceUID>.dcm
    - STUDY_YEAR_MONTH_DAY: root/YYYY/MM/DD/<StudyInstanceUID>/<SOPInstanceUID>.dcm
    - STUDY_YEAR_MONTH_DAY_ACCESSION:
      root/YYYY/MM/DD/<AccessionNumber>/<StudyInstanceUID>/<SOPInstanceUID>.dcm
    """

    FLAT = "flat"
    STUDY = "study"
    STUDY_YEAR_MONTH_DAY = "study_year_month_day"
    STUDY_YEAR_MONTH_DAY_ACCESSION = "study_year_month_day_accession"


class LayoutPathProvider:
    """Maps an image to its destination path under an output root.

    Directories are not created here; the file sink creates them on first
    write.
    """

    def __init__(
        self, layout: FileSystemLayout = FileSystemLayout.STUDY_YEAR_MONTH_DAY
    ):
        self.layout = FileSystemLayout(layout)

    def get_path(self, root: Path, dataset: Dataset) -> Path:
        filename = f"{dataset.SOPInstanceUID}.dcm"

        if self.layout == FileSystemLayout.FLAT:
            return root / filename

        study_uid = str(dataset.StudyInstanceUID)
        if self.layout == FileSystemLayout.STUDY:
            return root / study_uid / filename

        study_date = str(dataset.StudyDate)
        dated = root / study_date[:4] / study_date[4:6] / study_date[6:8]

        if self.layout == FileSystemLayout.STUDY_YEAR_MONTH_DAY:
            return dated / study_uid / filename

        return dated / str(dataset.AccessionNumber) / study_uid / filename
