"""
Custom exceptions for the Selector Registry.
Provides structured error handling for parsing, loading and fetching selector exports.
"""

from typing import Any, Dict, Optional
from fastapi import HTTPException, status


class SelectorRegistryException(Exception):
    """Base exception for the Selector Registry."""

    def __init__(
        self,
        message: str,
        error_code: str = "SELECTOR_REGISTRY_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


# Selector construction
class InvalidLengthError(SelectorRegistryException):
    """Raised when a selector is built from a byte sequence that is not 4 or 32 bytes long."""

    def __init__(self, length: int, details: Optional[Dict[str, Any]] = None):
        message = f"Selector has invalid byte length: {length}"
        super().__init__(message, "INVALID_LENGTH", {"length": length, **(details or {})})
        self.length = length


# Hex decoding
class InvalidHexError(SelectorRegistryException):
    """Base for malformed 0x-prefixed hex text."""


class MissingPrefixError(InvalidHexError):
    """Raised when hex text does not start with 0x."""

    def __init__(self, text: str, details: Optional[Dict[str, Any]] = None):
        message = f"Selector does not start with 0x: {text}"
        super().__init__(message, "MISSING_PREFIX", details)


class OddLengthError(InvalidHexError):
    """Raised when the hex digits cannot form whole bytes."""

    def __init__(self, text: str, details: Optional[Dict[str, Any]] = None):
        message = f"Selector has odd number of characters: {text}"
        super().__init__(message, "ODD_LENGTH", details)


class InvalidDigitError(InvalidHexError):
    """Raised when a two-character group is not valid hexadecimal."""

    def __init__(self, text: str, index: int, details: Optional[Dict[str, Any]] = None):
        message = f"Could not parse selector {text} at index {index}"
        super().__init__(message, "INVALID_DIGIT", {"index": index, **(details or {})})
        self.index = index


# Export records
class MalformedRecordError(SelectorRegistryException):
    """Raised when a non-empty export line has no comma separator."""

    def __init__(self, line: str, details: Optional[Dict[str, Any]] = None):
        message = f"Could not split line by first comma: {line}"
        super().__init__(message, "MALFORMED_RECORD", details)


class InvalidSignatureError(SelectorRegistryException):
    """Raised when signature text cannot be parsed as a function or event signature."""

    def __init__(self, signature: str, details: Optional[Dict[str, Any]] = None):
        message = f"Could not parse signature: {signature}"
        super().__init__(message, "INVALID_SIGNATURE", details)


# I/O
class RegistryIOError(SelectorRegistryException):
    """Raised when reading or writing an export file fails."""

    def __init__(self, path: str, details: Optional[Dict[str, Any]] = None):
        message = f"Could not access export file: {path}"
        super().__init__(message, "IO_ERROR", details)


class NetworkError(SelectorRegistryException):
    """Raised when downloading the export fails or returns a bad status code."""

    def __init__(
        self,
        url: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        if status_code is not None:
            message = f"Failed to download from {url}: Request returned bad status code {status_code}"
        else:
            message = f"Failed to download from {url}"
        super().__init__(message, "NETWORK_ERROR", details)
        self.status_code = status_code


# Lookup
class SelectorNotFoundError(SelectorRegistryException):
    """Raised when no signature is known for a selector."""

    def __init__(self, selector: str, details: Optional[Dict[str, Any]] = None):
        message = f"Selector not found: {selector}"
        super().__init__(message, "SELECTOR_NOT_FOUND", details)


def create_http_exception(
    exc: SelectorRegistryException,
    status_code: Optional[int] = None
) -> HTTPException:
    """
    Convert a SelectorRegistryException to an HTTPException.

    Args:
        exc: SelectorRegistryException instance
        status_code: HTTP status code, derived from the error code when omitted

    Returns:
        HTTPException: FastAPI HTTP exception
    """
    return HTTPException(
        status_code=status_code or get_exception_status_code(exc),
        detail={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": exc.details
        }
    )


def get_exception_status_code(exc: SelectorRegistryException) -> int:
    """
    Get the appropriate HTTP status code for a SelectorRegistryException.

    Args:
        exc: SelectorRegistryException instance

    Returns:
        int: HTTP status code
    """
    status_mapping = {
        # Selector construction and hex decoding
        "INVALID_LENGTH": status.HTTP_400_BAD_REQUEST,
        "MISSING_PREFIX": status.HTTP_400_BAD_REQUEST,
        "ODD_LENGTH": status.HTTP_400_BAD_REQUEST,
        "INVALID_DIGIT": status.HTTP_400_BAD_REQUEST,

        # Export records
        "MALFORMED_RECORD": status.HTTP_422_UNPROCESSABLE_ENTITY,
        "INVALID_SIGNATURE": status.HTTP_400_BAD_REQUEST,

        # I/O
        "IO_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "NETWORK_ERROR": status.HTTP_502_BAD_GATEWAY,

        # Lookup
        "SELECTOR_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    }

    return status_mapping.get(exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
