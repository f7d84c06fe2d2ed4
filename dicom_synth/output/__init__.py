"""Output sinks, directory layouts and DICOM encoding."""
