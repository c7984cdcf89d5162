"""TLS trust configuration for outbound HTTP sessions."""

from core.security.ssl_utils import create_session, get_ca_bundle_kwargs

__all__ = ["create_session", "get_ca_bundle_kwargs"]
