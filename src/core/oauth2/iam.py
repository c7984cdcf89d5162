"""IBM Cloud IAM API key exchange."""

import logging
from urllib.parse import urlencode

import requests

from core.errors.exceptions import ConfigurationError
from core.http.responses import assert_success, parse_json_object
from core.http.transport import DEFAULT_TIMEOUT_SECONDS, send
from core.oauth2.models import OAuth2Token

logger = logging.getLogger(__name__)

API_KEY_GRANT_TYPE = "urn:ibm:params:oauth:grant-type:apikey"
DEFAULT_AUTH_ENDPOINT = "https://iam.cloud.ibm.com/identity/token"


class IamAuthentication:
    """
    Exchanges a long-lived API key for a short-lived bearer access token.

    Each call is a single blocking POST to the token endpoint. No state is
    kept between calls; caching and re-authentication are the caller's job.
    """

    def __init__(
        self,
        session: requests.Session,
        auth_endpoint: str = DEFAULT_AUTH_ENDPOINT,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Args:
            session: HTTP session used to reach the token endpoint
            auth_endpoint: Token endpoint URL
            timeout_seconds: Per-request timeout

        Raises:
            ConfigurationError: If session is None or auth_endpoint is not an http(s) URL
        """
        if session is None:
            raise ConfigurationError("IamAuthentication requires an HTTP session", key="session")
        if not auth_endpoint or not auth_endpoint.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"auth_endpoint must start with http:// or https://, got: {auth_endpoint!r}",
                key="auth_endpoint",
            )

        self.session = session
        self.auth_endpoint = auth_endpoint
        self.timeout_seconds = timeout_seconds

    @staticmethod
    def _form_body(api_key: str) -> str:
        return urlencode({"apikey": api_key, "grant_type": API_KEY_GRANT_TYPE})

    def acquire_token(self, api_key: str) -> OAuth2Token:
        """
        Request a new access token using the given API key.

        Raises:
            ConfigurationError: If api_key is empty
            ApiError: If the token endpoint answers with a non-2xx status
            ResponseParseError: If the body is not JSON or lacks access_token
            TransportError: If the request could not be sent
        """
        if not api_key:
            raise ConfigurationError("API key must not be empty", key="api_key")

        response = send(
            self.session,
            "POST",
            self.auth_endpoint,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/x-www-form-urlencoded",
            },
            data=self._form_body(api_key),
            timeout=self.timeout_seconds,
        )
        assert_success(response)
        payload = parse_json_object(response)
        token = OAuth2Token.from_response(payload)

        logger.info(
            "Acquired access token",
            extra={"auth_endpoint": self.auth_endpoint, "expires_in": payload.get("expires_in")},
        )
        return token

    def access_token(self, api_key: str) -> str:
        """Request a new access token and return just the token string."""
        return self.acquire_token(api_key).access_token


__all__ = ["API_KEY_GRANT_TYPE", "DEFAULT_AUTH_ENDPOINT", "IamAuthentication"]
