"""
Core types shared across the toolkit.

Error categories are advisory: they tell a caller whether retrying an
operation could plausibly succeed. Nothing inside the toolkit retries.
"""

from enum import Enum


class ErrorCategory(Enum):
    """
    Classification of error types for caller-side handling decisions.

    Categories:
        TRANSIENT: Temporary failures that may succeed on a later attempt
                   (e.g., network failures, 429/503 responses)
        AUTH: Authentication failures requiring a new access token
              (e.g., 401 responses)
        PERMANENT: Failures that will not succeed on retry
                   (e.g., 404 responses, malformed payloads, bad configuration)
        UNKNOWN: Unclassified errors
    """

    TRANSIENT = "transient"
    AUTH = "auth"
    PERMANENT = "permanent"
    UNKNOWN = "unknown"


__all__ = ["ErrorCategory"]
