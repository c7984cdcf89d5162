"""Synchronous HTTP helpers shared by the authentication and discovery clients."""

from core.http.responses import assert_success, parse_json_object, require_string_field
from core.http.transport import DEFAULT_TIMEOUT_SECONDS, form_encode, send

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "assert_success",
    "form_encode",
    "parse_json_object",
    "require_string_field",
    "send",
]
