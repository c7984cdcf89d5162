"""
pytest configuration for the Flight toolkit tests.

Adds src directory to Python path for imports and provides shared HTTP fixtures.
"""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add src directory to Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


def _make_response(status_code=200, body=None, url="https://api.host.name/v2/"):
    """Create a mock requests.Response. Dict/list bodies are JSON-encoded."""
    response = MagicMock()
    response.status_code = status_code
    response.text = body if isinstance(body, str) else json.dumps(body if body is not None else {})
    response.url = url
    return response


@pytest.fixture
def make_response():
    """Factory for mock requests.Response objects."""
    return _make_response


@pytest.fixture
def make_session():
    """Factory for a mock requests.Session whose request() returns the given response."""

    def _make(status_code=200, body=None):
        session = MagicMock()
        session.request.return_value = _make_response(status_code, body)
        return session

    return _make
