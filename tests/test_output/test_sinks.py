"""Tests for dicom_synth.output.sinks module.

Tests the grouping fold and both output sinks.
"""

import csv
from pathlib import Path
from unittest.mock import MagicMock

import numpy as np
import pytest
from pydicom.dataset import Dataset
from pydicom.sequence import Sequence

from dicom_synth.core.exceptions import ConfigurationError, OutputError
from dicom_synth.output.layout import FileSystemLayout, LayoutPathProvider
from dicom_synth.output.sinks import (
    FileTreeSink,
    GroupingCursor,
    RowLevel,
    TabularSink,
    advance,
    build_row,
    format_value,
)


def make_image(study="1.1", series="1.1.1", sop="1.1.1.1") -> Dataset:
    ds = Dataset()
    ds.StudyInstanceUID = study
    ds.SeriesInstanceUID = series
    ds.SOPInstanceUID = sop
    ds.SOPClassUID = "1.2.840.10008.5.1.4.1.1.7"
    ds.StudyDate = "20200102"
    ds.AccessionNumber = "SR00000001"
    ds.Modality = "MR"
    return ds


def read_rows(path: Path) -> list[list[str]]:
    with open(path, newline="") as f:
        return list(csv.reader(f))


class TestAdvance:
    """Tests for the grouping fold."""

    def test_first_image_opens_study_and_series(self):
        cursor, levels = advance(GroupingCursor(), make_image())
        assert levels == (RowLevel.STUDY, RowLevel.SERIES, RowLevel.IMAGE)
        assert cursor == GroupingCursor("1.1", "1.1.1")

    def test_same_series_only_image(self):
        cursor, _ = advance(GroupingCursor(), make_image())
        _, levels = advance(cursor, make_image(sop="1.1.1.2"))
        assert levels == (RowLevel.IMAGE,)

    def test_new_series_in_same_study(self):
        cursor, _ = advance(GroupingCursor(), make_image())
        _, levels = advance(cursor, make_image(series="1.1.2", sop="1.1.2.1"))
        assert levels == (RowLevel.SERIES, RowLevel.IMAGE)

    def test_new_study(self):
        cursor, _ = advance(GroupingCursor(), make_image())
        _, levels = advance(cursor, make_image("2.1", "2.1.1", "2.1.1.1"))
        assert levels == (RowLevel.STUDY, RowLevel.SERIES, RowLevel.IMAGE)

    def test_cursor_is_not_mutated(self):
        start = GroupingCursor()
        advance(start, make_image())
        assert start == GroupingCursor()


class TestFormatValue:
    """Tests for tabular value rendering."""

    def test_missing_is_null(self):
        assert format_value(make_image(), "InstitutionName") == "NULL"

    def test_plain_value(self):
        assert format_value(make_image(), "Modality") == "MR"

    def test_multi_value_joined(self):
        ds = make_image()
        ds.ImageType = "ORIGINAL\\PRIMARY\\AXIAL"
        assert format_value(ds, "ImageType") == "ORIGINAL\\PRIMARY\\AXIAL"

    def test_empty_value(self):
        ds = make_image()
        ds.SliceThickness = ""
        assert format_value(ds, "SliceThickness") == ""

    def test_sequence_summarised(self):
        ds = make_image()
        ds.ProcedureCodeSequence = Sequence([Dataset(), Dataset()])
        assert format_value(ds, "ProcedureCodeSequence") == "2 items"

    def test_build_row(self):
        row = build_row(make_image(), ["Modality", "BodyPartExamined", "StudyDate"])
        assert row == ["MR", "NULL", "20200102"]


class TestFileTreeSink:
    """Tests for FileTreeSink."""

    def test_writes_file_at_layout_path(self, temp_dir):
        sink = FileTreeSink(temp_dir, LayoutPathProvider(FileSystemLayout.STUDY))
        sink.emit(make_image())

        expected = temp_dir / "1.1" / "1.1.1.1.dcm"
        assert expected.exists()
        assert sink.files_written == 1

    def test_renders_pixels_with_drawer(self, temp_dir):
        drawer = MagicMock()
        drawer.render.return_value = np.zeros((8, 8), dtype=np.uint8)
        sink = FileTreeSink(temp_dir, drawer=drawer, image_width=8, image_height=8)

        sink.emit(make_image())

        drawer.render.assert_called_once()
        args = drawer.render.call_args.args
        assert args[1:] == (8, 8, "1.1.1.1")

    def test_write_failure_raises_output_error(self, temp_dir):
        codec = MagicMock()
        codec.encode.side_effect = PermissionError("read-only")
        sink = FileTreeSink(temp_dir, codec=codec)

        with pytest.raises(OutputError) as exc_info:
            sink.emit(make_image())

        assert exc_info.value.error_code == "WRITE_FAILED"
        assert exc_info.value.context["path"].endswith("1.1.1.1.dcm")
        assert sink.files_written == 0

    def test_does_not_retain_emitted_paths(self, temp_dir):
        sink = FileTreeSink(temp_dir, LayoutPathProvider(FileSystemLayout.FLAT))
        for i in range(1, 4):
            sink.emit(make_image(sop=f"1.1.1.{i}"))

        assert sink.files_written == 3
        assert not hasattr(sink, "written")


class TestTabularSink:
    """Tests for TabularSink."""

    def test_headers_written_on_open(self, temp_dir):
        with TabularSink(temp_dir, ["A"], ["B", "C"], ["D"]):
            pass
        assert read_rows(temp_dir / "study.csv") == [["A"]]
        assert read_rows(temp_dir / "series.csv") == [["B", "C"]]
        assert read_rows(temp_dir / "image.csv") == [["D"]]

    def test_grouped_rows(self, temp_dir):
        columns = ["StudyInstanceUID", "SeriesInstanceUID", "SOPInstanceUID"]
        images = [
            make_image("1", "1.1", "1.1.1"),
            make_image("1", "1.1", "1.1.2"),
            make_image("1", "1.2", "1.2.1"),
            make_image("2", "2.1", "2.1.1"),
        ]
        with TabularSink(temp_dir, columns[:1], columns[:2], columns) as sink:
            for ds in images:
                sink.emit(ds)

        assert read_rows(temp_dir / "study.csv")[1:] == [["1"], ["2"]]
        assert read_rows(temp_dir / "series.csv")[1:] == [
            ["1", "1.1"],
            ["1", "1.2"],
            ["2", "2.1"],
        ]
        assert len(read_rows(temp_dir / "image.csv")) == 5
        assert sink.rows_written == {
            RowLevel.STUDY: 2,
            RowLevel.SERIES: 3,
            RowLevel.IMAGE: 4,
        }

    def test_missing_columns_use_sentinel(self, temp_dir):
        with TabularSink(temp_dir, ["StudyDescription"], ["Modality"], ["KVP"]) as sink:
            sink.emit(make_image())
        assert read_rows(temp_dir / "study.csv")[1] == ["NULL"]
        assert read_rows(temp_dir / "image.csv")[1] == ["NULL"]

    def test_default_columns(self, temp_dir):
        with TabularSink(temp_dir):
            pass
        header = read_rows(temp_dir / "study.csv")[0]
        assert header[:2] == ["PatientID", "StudyInstanceUID"]

    def test_duplicate_columns_rejected(self, temp_dir):
        with pytest.raises(ConfigurationError) as exc_info:
            TabularSink(temp_dir, ["A", "A"])
        assert exc_info.value.error_code == "DUPLICATE_COLUMNS"
        assert not (temp_dir / "study.csv").exists()

    def test_creates_output_directory(self, temp_dir):
        target = temp_dir / "a" / "b"
        with TabularSink(target):
            pass
        assert (target / "image.csv").exists()

    def test_rows_visible_before_close(self, temp_dir):
        """Rows emitted so far survive a run that never reaches close()."""
        columns = ["StudyInstanceUID", "SeriesInstanceUID", "SOPInstanceUID"]
        sink = TabularSink(temp_dir, columns[:1], columns[:2], columns)
        try:
            sink.emit(make_image("1", "1.1", "1.1.1"))
            sink.emit(make_image("1", "1.1", "1.1.2"))

            assert read_rows(temp_dir / "study.csv")[1:] == [["1"]]
            assert read_rows(temp_dir / "series.csv")[1:] == [["1", "1.1"]]
            assert read_rows(temp_dir / "image.csv")[1:] == [
                ["1", "1.1", "1.1.1"],
                ["1", "1.1", "1.1.2"],
            ]
        finally:
            sink.close()
