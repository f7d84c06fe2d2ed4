"""Tests for dicom_synth.output.layout module."""

from pathlib import Path

import pytest
from pydicom.dataset import Dataset

from dicom_synth.output.layout import FileSystemLayout, LayoutPathProvider


@pytest.fixture
def image() -> Dataset:
    ds = Dataset()
    ds.SOPInstanceUID = "1.2.3.4.5"
    ds.StudyInstanceUID = "1.2.3"
    ds.StudyDate = "20190704"
    ds.AccessionNumber = "RA00001234"
    return ds


class TestLayoutPathProvider:
    """Tests for each directory layout."""

    @pytest.mark.parametrize(
        "layout,expected",
        [
            (FileSystemLayout.FLAT, "1.2.3.4.5.dcm"),
            (FileSystemLayout.STUDY, "1.2.3/1.2.3.4.5.dcm"),
            (FileSystemLayout.STUDY_YEAR_MONTH_DAY, "2019/07/04/1.2.3/1.2.3.4.5.dcm"),
            (
                FileSystemLayout.STUDY_YEAR_MONTH_DAY_ACCESSION,
                "2019/07/04/RA00001234/1.2.3/1.2.3.4.5.dcm",
            ),
        ],
    )
    def test_paths(self, layout, expected, image):
        root = Path("/data/out")
        assert LayoutPathProvider(layout).get_path(root, image) == root / expected

    def test_default_layout(self):
        assert LayoutPathProvider().layout == FileSystemLayout.STUDY_YEAR_MONTH_DAY

    def test_accepts_string_value(self):
        assert LayoutPathProvider("flat").layout == FileSystemLayout.FLAT

    def test_unknown_layout_rejected(self):
        with pytest.raises(ValueError):
            LayoutPathProvider("by_patient")

    def test_does_not_create_directories(self, temp_dir, image):
        path = LayoutPathProvider().get_path(temp_dir, image)
        assert not path.parent.exists()
