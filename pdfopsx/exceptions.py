"""
Custom exceptions for pdfopsx.

This module defines all custom exceptions used throughout the library.
"""


class PdfOpsError(Exception):
    """Base exception for all pdfopsx errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF operation error occurred."


class InvalidInputError(PdfOpsError, ValueError):
    """Raised when arguments are rejected before the engine is touched."""

    @property
    def default_message(self) -> str:
        return "Invalid input supplied to PDF operation."


class MalformedDocumentError(PdfOpsError):
    """Raised when the engine cannot parse the supplied document bytes."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF document."


class EngineFailureError(PdfOpsError):
    """Raised when the PDF engine fails while copying, drawing or writing."""

    @property
    def default_message(self) -> str:
        return "The PDF engine failed to complete the operation."
