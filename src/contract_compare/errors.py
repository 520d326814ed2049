"""Exception types raised by the comparison engine and its collaborators."""
from __future__ import annotations

from typing import Optional


class ContractCompareError(RuntimeError):
    """Base class for errors raised by this package."""


class MalformedRecordError(ContractCompareError):
    """Raised when a record cannot be normalized into a matching key."""

    def __init__(self, code: str, field: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.field = field
        self.message = message


class ExtractionError(ContractCompareError):
    """Raised when the extraction service fails to turn a file into records."""

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        error_type: Optional[str] = None,
        status: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.retryable = retryable
        self.error_type = error_type
        self.status = status


class UnsupportedFileError(ExtractionError):
    """Raised before upload when a file is missing, too large or of the wrong type."""

    def __init__(self, message: str) -> None:
        super().__init__(message, retryable=False, error_type="unsupported_file")
