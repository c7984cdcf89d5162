"""Tests for synchronous HTTP sends and form encoding."""

from unittest.mock import MagicMock

import pytest
import requests

from core.errors.exceptions import ErrorCategory, RequestInterrupted, TransportError
from core.http.transport import form_encode, send


class TestFormEncode:
    def test_space_becomes_plus(self):
        assert form_encode("a b") == "a+b"

    def test_reserved_characters_are_escaped(self):
        assert form_encode("a/b&c=d?e") == "a%2Fb%26c%3Dd%3Fe"

    def test_unreserved_characters_are_kept(self):
        assert form_encode("Abc-1_2.3~") == "Abc-1_2.3~"

    def test_utf8(self):
        assert form_encode("é") == "%C3%A9"


class TestSend:
    def test_passes_request_through(self, make_session):
        session = make_session(200, {"ok": True})

        response = send(
            session,
            "POST",
            "https://host/token",
            headers={"Accept": "application/json"},
            data="a=b",
            timeout=5,
        )

        session.request.assert_called_once_with(
            "POST",
            "https://host/token",
            headers={"Accept": "application/json"},
            data="a=b",
            timeout=5,
        )
        assert response.status_code == 200

    def test_returns_error_responses(self, make_session):
        """Status handling is left to the caller."""
        response = send(make_session(500, "boom"), "GET", "https://host/x")
        assert response.status_code == 500

    def test_timeout(self):
        session = MagicMock()
        session.request.side_effect = requests.Timeout("read timed out")

        with pytest.raises(TransportError) as exc_info:
            send(session, "GET", "https://host/x", timeout=3)

        assert "Timeout after 3s" in str(exc_info.value)
        assert exc_info.value.context["error_type"] == "timeout"
        assert exc_info.value.category == ErrorCategory.TRANSIENT

    def test_connection_error(self):
        session = MagicMock()
        cause = requests.ConnectionError("DNS failure")
        session.request.side_effect = cause

        with pytest.raises(TransportError) as exc_info:
            send(session, "GET", "https://host/x")

        assert exc_info.value.url == "https://host/x"
        assert exc_info.value.cause is cause

    def test_interrupt(self):
        session = MagicMock()
        session.request.side_effect = KeyboardInterrupt()

        with pytest.raises(RequestInterrupted) as exc_info:
            send(session, "GET", "https://host/x")

        assert exc_info.value.url == "https://host/x"
