"""Custom exceptions for synthetic DICOM generation.

This module defines the exception hierarchy for the generator,
providing detailed error information and categorization.
"""

from typing import Any


class DicomSynthError(Exception):
    """Base exception for synthetic DICOM generation.

    Attributes:
        message: Human-readable error description
        error_code: Optional error code for categorization
        context: Additional context information

    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}


class ConfigurationError(DicomSynthError):
    """Raised when the generator is configured with unusable settings."""

    pass


class OutputError(DicomSynthError):
    """Raised when generated data cannot be written to its destination."""

    pass
