"""Validation of REST API responses: status checks and JSON object extraction."""

import json
from typing import Any

import requests

from core.errors.exceptions import ApiError, ResponseParseError

# Upper bound on how much of a body is echoed into parse error messages
BODY_PREVIEW_CHARS = 200


def _reject_constant(name: str) -> Any:
    # json accepts NaN and Infinity by default; they are not valid JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def assert_success(response: requests.Response) -> None:
    """
    Raise ApiError when the response status is outside [200, 300).

    The raw body is carried on the error so callers can diagnose the failure
    without re-issuing the request.
    """
    code = response.status_code
    if code < 200 or code >= 300:
        raise ApiError(code, response.text, url=response.url)


def parse_json_object(response: requests.Response) -> dict[str, Any]:
    """
    Parse a response body that must be a JSON object.

    Raises:
        ResponseParseError: If the body is not valid JSON or not an object
    """
    body = response.text
    try:
        payload = json.loads(body, parse_constant=_reject_constant)
    except ValueError as e:
        raise ResponseParseError(
            f"Response body is not valid JSON: {body[:BODY_PREVIEW_CHARS]!r}",
            body=body,
            cause=e,
        ) from e

    if not isinstance(payload, dict):
        raise ResponseParseError(
            f"Expected a JSON object, got {type(payload).__name__}",
            body=body,
        )
    return payload


def require_string_field(payload: dict[str, Any], field: str) -> str:
    """Return payload[field], raising ResponseParseError when absent or not a string."""
    if field not in payload:
        raise ResponseParseError(f"Response is missing required field '{field}'", field=field)

    value = payload[field]
    if not isinstance(value, str):
        raise ResponseParseError(
            f"Response field '{field}' must be a string, got {type(value).__name__}",
            field=field,
        )
    return value


__all__ = ["assert_success", "parse_json_object", "require_string_field"]
