"""Custom exceptions for rendering context."""

from typing import Optional


class CompilationError(Exception):
    """
    Exception raised when the external compilation service cannot produce a PDF.

    Attributes:
        message: User-facing error description
        http_status: Status returned by the service, when it answered
    """

    def __init__(self, message: str, http_status: Optional[int] = None):
        self.message = message
        self.http_status = http_status
        super().__init__(message)
