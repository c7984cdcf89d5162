"""
Tests for exception hierarchy and error classification.
"""

import pytest

from core.errors.exceptions import (
    ApiError,
    ConfigurationError,
    ErrorCategory,
    FlightError,
    PermanentError,
    RequestInterrupted,
    ResponseParseError,
    TransientError,
    TransportError,
    classify_exception,
    classify_http_status,
)


class TestErrorCategory:
    """Test ErrorCategory enum."""

    def test_all_categories_exist(self):
        """All expected categories are defined."""
        assert ErrorCategory.TRANSIENT.value == "transient"
        assert ErrorCategory.AUTH.value == "auth"
        assert ErrorCategory.PERMANENT.value == "permanent"
        assert ErrorCategory.UNKNOWN.value == "unknown"


class TestFlightError:
    """Test base FlightError class."""

    def test_basic_error(self):
        """Can create basic error with message."""
        err = FlightError("Something went wrong")
        assert err.message == "Something went wrong"
        assert err.cause is None
        assert err.context == {}
        assert err.category == ErrorCategory.UNKNOWN

    def test_error_with_cause(self):
        """Can wrap another exception."""
        cause = ValueError("Invalid value")
        err = FlightError("Wrapper message", cause=cause)
        assert err.cause == cause
        assert "Caused by" in str(err)

    def test_unknown_is_not_retryable(self):
        """Unknown category is not advertised as retryable."""
        assert FlightError("Error").is_retryable is False

    def test_category_subclasses(self):
        assert ApiError(401, "").is_retryable is True
        assert TransientError("x").is_retryable is True
        assert PermanentError("x").is_retryable is False


class TestTransportError:
    def test_is_transient(self):
        err = TransportError("Connection error", url="https://api.host.name/v2/x")
        assert err.category == ErrorCategory.TRANSIENT
        assert err.url == "https://api.host.name/v2/x"
        assert err.context["url"] == "https://api.host.name/v2/x"

    def test_is_not_an_api_error(self):
        assert not isinstance(TransportError("x"), ApiError)


class TestApiError:
    def test_carries_status_and_body(self):
        err = ApiError(404, '{"error": "missing"}', url="https://api.host.name/v2/a")
        assert err.status_code == 404
        assert err.body == '{"error": "missing"}'
        assert err.context["status_code"] == 404
        assert "404" in str(err)
        assert '{"error": "missing"}' in str(err)

    @pytest.mark.parametrize(
        "status,category",
        [
            (401, ErrorCategory.AUTH),
            (403, ErrorCategory.PERMANENT),
            (404, ErrorCategory.PERMANENT),
            (429, ErrorCategory.TRANSIENT),
            (503, ErrorCategory.TRANSIENT),
        ],
    )
    def test_category_follows_status(self, status, category):
        assert ApiError(status, "").category == category


class TestResponseParseError:
    def test_records_field(self):
        err = ResponseParseError("missing", field="access_token")
        assert err.field == "access_token"
        assert err.context == {"field": "access_token"}
        assert err.category == ErrorCategory.PERMANENT


class TestConfigurationError:
    def test_records_key(self):
        err = ConfigurationError("Configuration property \"api_host\" is not defined", key="api_host")
        assert err.key == "api_host"
        assert isinstance(err, PermanentError)


class TestRequestInterrupted:
    def test_is_distinct_from_flight_errors(self):
        """Interruption must not be caught by handlers for toolkit errors."""
        err = RequestInterrupted("https://api.host.name/v2/x")
        assert isinstance(err, KeyboardInterrupt)
        assert not isinstance(err, Exception)
        assert err.url == "https://api.host.name/v2/x"


class TestClassifyHttpStatus:
    def test_success_is_not_an_error(self):
        assert classify_http_status(200) == ErrorCategory.UNKNOWN
        assert classify_http_status(204) == ErrorCategory.UNKNOWN

    def test_auth(self):
        assert classify_http_status(401) == ErrorCategory.AUTH

    def test_client_errors_are_permanent(self):
        assert classify_http_status(400) == ErrorCategory.PERMANENT
        assert classify_http_status(422) == ErrorCategory.PERMANENT

    def test_server_errors_are_transient(self):
        assert classify_http_status(500) == ErrorCategory.TRANSIENT
        assert classify_http_status(599) == ErrorCategory.TRANSIENT


class TestClassifyException:
    def test_flight_error_uses_own_category(self):
        assert classify_exception(ApiError(401, "")) == ErrorCategory.AUTH

    def test_connection_error(self):
        assert classify_exception(ConnectionError("connection refused")) == ErrorCategory.TRANSIENT

    def test_timeout(self):
        assert classify_exception(TimeoutError("timed out")) == ErrorCategory.TRANSIENT

    def test_value_error_is_permanent(self):
        assert classify_exception(ValueError("bad")) == ErrorCategory.PERMANENT

    def test_unknown(self):
        assert classify_exception(RuntimeError("weird")) == ErrorCategory.UNKNOWN
