"""
Core library: reusable components behind the Flight discovery toolkit.

Modules:
    oauth2      - IBM Cloud IAM API key exchange for bearer tokens
    http        - Single-shot synchronous sends and response validation
    logging     - Structured JSON logging with run identifiers
    errors      - Error classification and exception hierarchy
    security    - TLS trust configuration for HTTP sessions

Design Principles:
    - Synchronous and blocking; no internal concurrency
    - Errors propagate to the caller; nothing retries internally
    - Type hints throughout
"""

from .types import ErrorCategory

__version__ = "0.1.0"

__all__ = [
    "ErrorCategory",
]
