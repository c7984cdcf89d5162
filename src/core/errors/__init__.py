"""
Error types and classification.

Each error carries an advisory ErrorCategory so callers can choose a
retry policy; the toolkit itself never retries.
"""

from core.errors.exceptions import (
    ApiError,
    ConfigurationError,
    FlightError,
    PermanentError,
    RequestInterrupted,
    ResponseParseError,
    TransientError,
    TransportError,
    classify_exception,
    classify_http_status,
)
from core.types import ErrorCategory

__all__ = [
    "ErrorCategory",
    "FlightError",
    "TransientError",
    "PermanentError",
    "TransportError",
    "ApiError",
    "ResponseParseError",
    "ConfigurationError",
    "RequestInterrupted",
    "classify_http_status",
    "classify_exception",
]
