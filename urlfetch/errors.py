"""Error types and standardized error responses for the URL fetcher.

Converters raise exceptions; the conversion engine and the tool handlers
turn them into tagged results instead of letting them escape:
- RetrievalError: network/transport failure, surfaced to the caller
- ParseError: malformed JSON or XML, degraded or wrapped per converter
- ConversionError: unrecoverable failure inside one converter
- ConfigurationError: invalid settings value
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class FetchError(Exception):
    """Base exception for URL fetcher failures.

    Attributes:
        message: Error description.
        cause: Optional underlying exception being wrapped.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class RetrievalError(FetchError):
    """Fetching the remote resource failed.

    Attributes:
        url: The URL that could not be retrieved.
        status_code: HTTP status when the server answered with an error.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause=cause)
        self.url = url
        self.status_code = status_code


class ParseError(FetchError):
    """Content claimed to be JSON or XML but could not be parsed.

    Attributes:
        family: The ContentFamily that failed to parse.
    """

    def __init__(self, message: str, family: Any, cause: Optional[BaseException] = None):
        super().__init__(message, cause=cause)
        self.family = family


class ConversionError(FetchError):
    """A converter could not produce output for its target family.

    The message reads ``"<Target> conversion error: <cause>"`` so callers can
    show it unchanged.

    Attributes:
        target: Display name of the target family ("JSON", "HTML", ...).
    """

    def __init__(self, target: str, cause: BaseException):
        detail = cause.message if isinstance(cause, FetchError) else str(cause)
        super().__init__(f"{target} conversion error: {detail}", cause=cause)
        self.target = target


class ConfigurationError(FetchError):
    """Configuration error (unknown file format, invalid value, etc).

    Attributes:
        field: Optional settings field that caused the error.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ErrorCode(Enum):
    """Standardized error codes."""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    RETRIEVAL_FAILED = "RETRIEVAL_FAILED"
    CONVERSION_FAILED = "CONVERSION_FAILED"
    UNKNOWN_TOOL = "UNKNOWN_TOOL"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


@dataclass
class ErrorResponse:
    """Standardized error response returned by tool handlers."""

    code: ErrorCode
    message: str
    details: Optional[Dict[str, Any]] = None
    retryable: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: Dict[str, Any] = {
            "status": "error",
            "error": self.message,
            "code": self.code.value,
            "retryable": self.retryable,
        }
        if self.details:
            result["details"] = self.details
        return result

    @classmethod
    def invalid_argument(cls, message: str) -> "ErrorResponse":
        """Create 'invalid argument' error."""
        return cls(code=ErrorCode.INVALID_ARGUMENT, message=message)

    @classmethod
    def retrieval_failed(cls, prefix: str, error: RetrievalError) -> "ErrorResponse":
        """Create retrieval failure error."""
        details = {"url": error.url} if error.url else None
        if details is not None and error.status_code is not None:
            details["status_code"] = error.status_code
        return cls(
            code=ErrorCode.RETRIEVAL_FAILED,
            message=f"{prefix}{error.message}",
            details=details,
            retryable=True,
        )

    @classmethod
    def conversion_failed(cls, prefix: str, message: str) -> "ErrorResponse":
        """Create conversion failure error."""
        return cls(code=ErrorCode.CONVERSION_FAILED, message=f"{prefix}{message}")

    @classmethod
    def unknown_tool(cls, name: str) -> "ErrorResponse":
        """Create unknown tool error."""
        return cls(code=ErrorCode.UNKNOWN_TOOL, message=f"Unknown tool: {name}")
