"""SSL/TLS utilities for corporate proxy environments."""

import os

import requests


def get_ca_bundle_kwargs() -> dict:
    """Return ``{"verify": path}`` if a custom CA bundle is set, else ``{}``."""
    ca_bundle = (
        os.getenv("SSL_CERT_FILE")
        or os.getenv("REQUESTS_CA_BUNDLE")
        or os.getenv("CURL_CA_BUNDLE")
    )
    if ca_bundle:
        return {"verify": ca_bundle}
    return {}


def create_session() -> requests.Session:
    """Create a requests session that trusts the configured CA bundle, if any."""
    session = requests.Session()
    for key, value in get_ca_bundle_kwargs().items():
        setattr(session, key, value)
    return session
