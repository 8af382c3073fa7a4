"""Custom exceptions for minipdf."""
from typing import Optional


class PdfError(Exception):
    """Base exception for all minipdf errors."""

    pass


class UnsupportedTypeError(PdfError):
    """Raised when a native value cannot be mapped to a PDF object."""

    def __init__(self, message: str, value: object = None):
        super().__init__(message)
        self.value = value


class UninitializedSinkError(PdfError):
    """Raised when a document is written without an output sink."""

    pass


class PdfIOError(PdfError):
    """Raised when writing to the output sink fails.

    The underlying exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, bytes_written: int = 0, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.bytes_written = bytes_written
        self.cause = cause


class InvalidHandleError(PdfError):
    """Raised when an indirect object does not belong to the document using it."""

    pass


class DocumentStateError(PdfError):
    """Raised when a document operation is not allowed in its current state."""

    pass


# Aliases matching the names used in the format documentation
UnsupportedType = UnsupportedTypeError
UninitializedSink = UninitializedSinkError
IOFailure = PdfIOError
InvalidHandle = InvalidHandleError
