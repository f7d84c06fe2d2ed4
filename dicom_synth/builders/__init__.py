"""Study and Series builders."""

from dicom_synth.builders.series_builder import SeriesBuilder
from dicom_synth.builders.study_builder import StudyBuilder

__all__ = ["SeriesBuilder", "StudyBuilder"]
