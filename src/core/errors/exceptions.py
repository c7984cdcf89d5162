"""
Exception hierarchy for the Flight discovery toolkit.

Every failure is surfaced to the immediate caller with enough context
(status code and body, field name, or URL) to diagnose it without
re-issuing the request. Categories are advisory; retry policy belongs
to the caller.
"""

from core.types import ErrorCategory


class FlightError(Exception):
    """
    Base exception for all toolkit errors.

    Attributes:
        message: Human-readable error description
        category: Error classification for caller retry decisions
        cause: Original exception if wrapping
        context: Additional context dict for debugging
    """

    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        context: dict | None = None,
    ):
        self.message = message
        self.cause = cause
        self.context = context or {}
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        return self.category in (
            ErrorCategory.TRANSIENT,
            ErrorCategory.AUTH,
        )

    def __str__(self) -> str:
        parts = [self.message]
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)


# =============================================================================
# Base categories
# =============================================================================


class TransientError(FlightError):
    """Base class for transient errors."""

    category = ErrorCategory.TRANSIENT


class PermanentError(FlightError):
    """Base class for permanent errors."""

    category = ErrorCategory.PERMANENT


# =============================================================================
# Concrete errors
# =============================================================================


class TransportError(TransientError):
    """Network I/O failed before a response was received."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
        context: dict | None = None,
    ):
        context = dict(context or {})
        if url:
            context.setdefault("url", url)
        super().__init__(message, cause, context)
        self.url = url


class ApiError(FlightError):
    """HTTP response status outside [200, 300)."""

    def __init__(
        self,
        status_code: int,
        body: str,
        url: str | None = None,
        context: dict | None = None,
    ):
        context = dict(context or {})
        context["status_code"] = status_code
        if url:
            context["url"] = url
        super().__init__(f"Unsuccessful HTTP response ({status_code}): {body}", context=context)
        self.status_code = status_code
        self.body = body
        self.url = url

    @property
    def category(self) -> ErrorCategory:  # type: ignore[override]
        return classify_http_status(self.status_code)


class ResponseParseError(PermanentError):
    """Response body is not valid JSON, or an expected field is missing or mistyped."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        body: str | None = None,
        cause: Exception | None = None,
    ):
        context = {}
        if field:
            context["field"] = field
        super().__init__(message, cause, context)
        self.field = field
        self.body = body


class ConfigurationError(PermanentError):
    """Required configuration or entity value is missing or empty."""

    def __init__(self, message: str, key: str | None = None, cause: Exception | None = None):
        super().__init__(message, cause, {"key": key} if key else None)
        self.key = key


class RequestInterrupted(KeyboardInterrupt):
    """
    A blocking network call was interrupted by external cancellation.

    Derives from KeyboardInterrupt rather than FlightError so that generic
    ``except Exception`` handlers never absorb a cancellation.
    """

    def __init__(self, url: str | None = None):
        super().__init__(f"Request interrupted: {url}" if url else "Request interrupted")
        self.url = url


# =============================================================================
# Error Classification Utilities
# =============================================================================


def classify_http_status(status_code: int) -> ErrorCategory:
    """Classify HTTP status code into error category."""
    if 200 <= status_code < 300:
        return ErrorCategory.UNKNOWN  # Not an error

    if status_code == 401:
        return ErrorCategory.AUTH

    if status_code in (408, 429):
        return ErrorCategory.TRANSIENT

    if 400 <= status_code < 500:
        return ErrorCategory.PERMANENT

    if status_code >= 500:
        return ErrorCategory.TRANSIENT

    return ErrorCategory.UNKNOWN


def classify_exception(exc: BaseException) -> ErrorCategory:
    """Classify an exception into error category."""
    if isinstance(exc, FlightError):
        return exc.category

    exc_type = type(exc).__name__.lower()
    exc_str = str(exc).lower()

    connection_markers = (
        "connectionerror",
        "connection refused",
        "connection reset",
        "connection aborted",
        "name resolution",
        "broken pipe",
    )
    if any(m in exc_type or m in exc_str for m in connection_markers):
        return ErrorCategory.TRANSIENT

    if "timeout" in exc_type or "timed out" in exc_str:
        return ErrorCategory.TRANSIENT

    if "401" in exc_str or "unauthorized" in exc_str:
        return ErrorCategory.AUTH

    if isinstance(exc, (ValueError, TypeError, KeyError)):
        return ErrorCategory.PERMANENT

    return ErrorCategory.UNKNOWN
