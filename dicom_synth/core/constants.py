"""Shared constants for synthetic DICOM generation.

Image type values, tabular column layouts and fixed element values used
across the builders and output sinks.
"""

from pydicom.uid import SecondaryCaptureImageStorage

# Image types
AXIAL_PRIMARY_IMAGE_TYPE = "ORIGINAL\\PRIMARY\\AXIAL"
GENERIC_PRIMARY_IMAGE_TYPE = "ORIGINAL\\PRIMARY"

# Every generated image is stored as secondary capture
SOP_CLASS_UID = SecondaryCaptureImageStorage

# Written in place of elements absent from an image
MISSING_VALUE = "NULL"

# Placeholder pixel defaults
DEFAULT_IMAGE_WIDTH = 500
DEFAULT_IMAGE_HEIGHT = 500

# Fixed-shape series used when a modality policy does not sample counts
FIXED_SERIES_PER_STUDY = 1
FIXED_IMAGES_PER_SERIES = 2

STUDY_COLUMNS = [
    "PatientID",
    "StudyInstanceUID",
    "StudyDate",
    "StudyTime",
    "ModalitiesInStudy",
    "StudyDescription",
    "PatientAge",
    "NumberOfStudyRelatedInstances",
    "PatientBirthDate",
]

SERIES_COLUMNS = [
    "StudyInstanceUID",
    "SeriesInstanceUID",
    "SeriesDate",
    "SeriesTime",
    "Modality",
    "ImageType",
    "SourceApplicationEntityTitle",
    "InstitutionName",
    "ProcedureCodeSequence",
    "ProtocolName",
    "PerformedProcedureStepID",
    "PerformedProcedureStepDescription",
    "SeriesDescription",
    "BodyPartExamined",
    "DeviceSerialNumber",
    "NumberOfSeriesRelatedInstances",
    "SeriesNumber",
]

IMAGE_COLUMNS = [
    "SeriesInstanceUID",
    "SOPInstanceUID",
    "BurnedInAnnotation",
    "SliceLocation",
    "SliceThickness",
    "SpacingBetweenSlices",
    "SpiralPitchFactor",
    "KVP",
    "ExposureTime",
    "Exposure",
    "ManufacturerModelName",
    "Manufacturer",
    "XRayTubeCurrent",
    "PhotometricInterpretation",
    "ContrastBolusRoute",
    "ContrastBolusAgent",
    "AcquisitionNumber",
    "AcquisitionDate",
    "AcquisitionTime",
    "ImagePositionPatient",
    "PixelSpacing",
    "FieldOfViewDimensions",
    "FieldOfViewDimensionsInFloat",
    "DerivationDescription",
    "TransferSyntaxUID",
    "LossyImageCompression",
    "LossyImageCompressionMethod",
    "LossyImageCompressionRatio",
    "ScanOptions",
]

# Acquisition elements present on every image until a sampled value replaces them
IMAGE_PLACEHOLDERS: dict[str, str | float] = {
    "PerformedProcedureStepID": "0",
    "BurnedInAnnotation": "NO",
    "SliceLocation": "",
    "SliceThickness": "",
    "SpacingBetweenSlices": "",
    "SpiralPitchFactor": 0.0,
    "KVP": "0",
    "ExposureTime": "0",
    "Exposure": "0",
    "XRayTubeCurrent": "0",
    "PhotometricInterpretation": "",
    "AcquisitionNumber": "0",
    "ImagePositionPatient": "0",
    "PixelSpacing": "0",
    "FieldOfViewDimensions": "0",
    "FieldOfViewDimensionsInFloat": 0.0,
    "LossyImageCompression": "00",
    "LossyImageCompressionMethod": "ISO_10918_1",
    "LossyImageCompressionRatio": "1",
}
