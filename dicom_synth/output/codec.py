"""DICOM Part 10 file encoding via pydicom."""

from __future__ import annotations

import copy
from pathlib import Path

import numpy as np
from pydicom.dataset import Dataset, FileDataset, FileMetaDataset
from pydicom.uid import ExplicitVRLittleEndian, PYDICOM_IMPLEMENTATION_UID


def build_file_meta(dataset: Dataset) -> FileMetaDataset:
    file_meta = FileMetaDataset()
    file_meta.MediaStorageSOPClassUID = dataset.SOPClassUID
    file_meta.MediaStorageSOPInstanceUID = dataset.SOPInstanceUID
    file_meta.TransferSyntaxUID = ExplicitVRLittleEndian
    file_meta.ImplementationClassUID = PYDICOM_IMPLEMENTATION_UID
    return file_meta


class DicomFileCodec:
    """Writes image attribute sets as DICOM files.

    The attribute set passed in is copied, never modified, so the same
    dataset can still be tabulated after it has been written.
    """

    def encode(
        self, dataset: Dataset, pixels: np.ndarray | None, path: Path
    ) -> FileDataset:
        """Write one DICOM file.

        Args:
            dataset: Image attribute set
            pixels: Optional 2D uint8 pixel array
            path: Destination file; its directory must already exist

        Returns:
            The dataset as written

        """
        file_ds = FileDataset(
            str(path),
            copy.deepcopy(dataset),
            file_meta=build_file_meta(dataset),
            preamble=b"\x00" * 128,
        )

        if pixels is not None:
            rows, columns = pixels.shape
            file_ds.Rows = rows
            file_ds.Columns = columns
            file_ds.SamplesPerPixel = 1
            file_ds.PhotometricInterpretation = "MONOCHROME2"
            file_ds.BitsAllocated = 8
            file_ds.BitsStored = 8
            file_ds.HighBit = 7
            file_ds.PixelRepresentation = 0
            file_ds.PixelData = pixels.astype(np.uint8).tobytes()

        file_ds.save_as(path, enforce_file_format=True)
        return file_ds
