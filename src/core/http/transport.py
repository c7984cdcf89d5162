"""
Single-shot synchronous HTTP sends.

Each call blocks until a response arrives or the transport fails. Failures
are mapped onto the toolkit's error types and never retried here.
"""

import logging
import time
from urllib.parse import quote_plus

import requests

from core.errors.exceptions import RequestInterrupted, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30


def form_encode(value: str) -> str:
    """Form-urlencode a single path or query segment (space becomes '+')."""
    return quote_plus(value, encoding="utf-8")


def send(
    session: requests.Session,
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    data: str | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> requests.Response:
    """
    Issue one HTTP request and return the response, whatever its status.

    Raises:
        TransportError: If the request fails before a response is received
        RequestInterrupted: If the blocking call is interrupted
    """
    start = time.perf_counter()
    try:
        response = session.request(method, url, headers=headers, data=data, timeout=timeout)
    except KeyboardInterrupt as e:
        logger.warning("HTTP request interrupted", extra={"http_method": method, "http_url": url})
        raise RequestInterrupted(url) from e
    except requests.Timeout as e:
        raise TransportError(
            f"Timeout after {timeout}s: {method} {url}",
            url=url,
            cause=e,
            context={"error_type": "timeout"},
        ) from e
    except requests.RequestException as e:
        logger.error(
            "HTTP connection error",
            extra={"http_method": method, "http_url": url, "error": str(e)},
        )
        raise TransportError(f"Connection error: {method} {url}", url=url, cause=e) from e

    duration_ms = (time.perf_counter() - start) * 1000
    logger.debug(
        "HTTP request completed",
        extra={
            "http_method": method,
            "http_url": url,
            "http_status": response.status_code,
            "duration_ms": round(duration_ms, 1),
        },
    )
    return response


__all__ = ["DEFAULT_TIMEOUT_SECONDS", "form_encode", "send"]
