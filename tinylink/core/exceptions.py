"""
Custom Exceptions

This module defines the error taxonomy of the TinyLink client.

Every failure a remote call can produce is classified into one ErrorKind.
The HTTP layer raises the matching exception; the repository layer catches
it once and turns it into a Result failure (see tinylink.core.results).

Kinds:
- VALIDATION: input rejected (client-side guard or server 4xx with a message)
- CODE_CONFLICT: requested short code is already taken (409)
- NOT_FOUND: short code does not exist (404, delete/get only)
- OPERATION_FAILED: any other non-2xx response
- TRANSPORT: no response at all (network failure, timeout)
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Classification of a failed link operation."""
    VALIDATION = "validation"
    CODE_CONFLICT = "code_conflict"
    NOT_FOUND = "not_found"
    OPERATION_FAILED = "operation_failed"
    TRANSPORT = "transport"


class TinyLinkException(Exception):
    """Base exception for the TinyLink client."""

    kind: ErrorKind = ErrorKind.OPERATION_FAILED

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class LinkValidationError(TinyLinkException):
    """Raised when the server (or a client guard) rejects the input."""
    kind = ErrorKind.VALIDATION


class CodeConflictError(TinyLinkException):
    """Raised when a requested short code is already taken."""
    kind = ErrorKind.CODE_CONFLICT

    def __init__(self, code: Optional[str] = None):
        self.code = code
        if code:
            message = f"Short code '{code}' is already taken"
        else:
            message = "Short code is already taken"
        super().__init__(message, status_code=409)


class LinkNotFoundError(TinyLinkException):
    """Raised when a short code is not found on the server."""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Short code '{code}' not found", status_code=404)


class OperationFailedError(TinyLinkException):
    """Raised when the server answers with an unexpected non-2xx status."""
    kind = ErrorKind.OPERATION_FAILED


class TransportError(TinyLinkException):
    """Raised when no usable response arrives from the server."""
    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, original_error: Optional[Exception] = None, status_code: Optional[int] = None):
        self.original_error = original_error
        super().__init__(message, status_code=status_code)
