"""
Custom Exceptions Module.

This module defines all custom exceptions used throughout the uploader.
Folder-level errors are caught by the orchestrator and turned into
outcomes; none of them stops a run once it has started.

Exception Hierarchy:
    UploaderError (base)
    ├── ConfigurationError
    ├── ScanError
    │   ├── NotFoundError
    │   └── DocumentReadError
    ├── PayloadError
    ├── SubmissionError
    └── OutputError
        └── ReportExportError
"""

from typing import Any, Optional


class UploaderError(Exception):
    """
    Base exception for all uploader errors.
    
    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """
    
    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)
    
    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(UploaderError):
    """Raised when a required setting is missing or invalid."""
    
    def __init__(self, key: str, reason: str = None):
        message = f"Invalid configuration: {key}"
        details = {"key": key, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# SCAN ERRORS
# =============================================================================

class ScanError(UploaderError):
    """Base exception for directory scanning and file reading errors."""
    pass


class NotFoundError(ScanError):
    """
    Raised when a root directory or shipment folder does not exist.
    
    Example:
        >>> raise NotFoundError("exports/2025-07")
    """
    
    def __init__(self, path: str):
        message = f"Path not found: {path}"
        details = {"path": path}
        super().__init__(message, details)


class DocumentReadError(ScanError):
    """Raised when a document file cannot be read."""
    
    def __init__(self, filepath: str, reason: str = None):
        message = f"Could not read document: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# PAYLOAD ERRORS
# =============================================================================

class PayloadError(UploaderError):
    """Raised when the additional data template is missing or malformed."""
    
    def __init__(self, source: str, reason: str = None):
        message = f"Invalid additional data template: {source}"
        details = {"source": source, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# SUBMISSION ERRORS
# =============================================================================

class SubmissionError(UploaderError):
    """
    Raised when the remote job-order call fails.
    
    Attributes:
        reference_no: Reference number of the failed submission.
        status_code: HTTP status, or None for network errors and timeouts.
        diagnostic: Parsed error body, raw response text or error text.
    """
    
    def __init__(
        self,
        reference_no: str,
        diagnostic: Any = None,
        status_code: Optional[int] = None
    ):
        self.reference_no = reference_no
        self.status_code = status_code
        self.diagnostic = diagnostic
        if status_code is None:
            message = f"Submission failed for {reference_no}"
        else:
            message = f"Submission failed for {reference_no} (HTTP {status_code})"
        details = {"reference_no": reference_no, "status_code": status_code}
        super().__init__(message, details)


# =============================================================================
# OUTPUT ERRORS
# =============================================================================

class OutputError(UploaderError):
    """Base exception for output handling errors."""
    pass


class ReportExportError(OutputError):
    """Raised when the Excel run report cannot be written."""
    
    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to export run report: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


__all__ = [
    'UploaderError',
    'ConfigurationError',
    'ScanError',
    'NotFoundError',
    'DocumentReadError',
    'PayloadError',
    'SubmissionError',
    'OutputError',
    'ReportExportError',
]
