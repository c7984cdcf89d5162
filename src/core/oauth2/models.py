"""OAuth2 token model."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from core.http.responses import require_string_field

logger = logging.getLogger(__name__)

DEFAULT_EXPIRES_IN_SECONDS = 3600


def _expiry_from(expires_in: Any) -> datetime:
    """
    Expiry time for an expires_in value of seconds (number or numeric string).

    Unusable or out-of-range values fall back to the default lifetime.
    """
    now = datetime.now(UTC)
    if isinstance(expires_in, bool):
        expires_in = DEFAULT_EXPIRES_IN_SECONDS
    try:
        return now + timedelta(seconds=float(expires_in))
    except (TypeError, ValueError, OverflowError) as e:
        logger.debug(
            "Unusable expires_in in token response, using default lifetime",
            extra={"error": str(e)},
        )
        return now + timedelta(seconds=DEFAULT_EXPIRES_IN_SECONDS)


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class OAuth2Token:
    """
    OAuth2 access token with expiration tracking.

    Attributes:
        access_token: The access token string
        token_type: Token type (typically "Bearer")
        expires_at: UTC timestamp when token expires
        scope: Space-separated scopes granted
        refresh_token: Optional refresh token
    """

    access_token: str
    token_type: str
    expires_at: datetime
    scope: str | None = None
    refresh_token: str | None = None

    @classmethod
    def from_response(cls, response: dict) -> "OAuth2Token":
        """
        Create token from an OAuth2 token response.

        Raises:
            ResponseParseError: If access_token is absent or not a string
        """
        access_token = require_string_field(response, "access_token")

        return cls(
            access_token=access_token,
            token_type=_optional_str(response.get("token_type")) or "Bearer",
            expires_at=_expiry_from(response.get("expires_in", DEFAULT_EXPIRES_IN_SECONDS)),
            scope=_optional_str(response.get("scope")),
            refresh_token=_optional_str(response.get("refresh_token")),
        )

    def is_expired(self, buffer_seconds: int = 300) -> bool:
        """True when the token is expired or within buffer_seconds of expiry."""
        return datetime.now(UTC) >= self.expires_at - timedelta(seconds=buffer_seconds)

    @property
    def remaining_lifetime(self) -> timedelta:
        return self.expires_at - datetime.now(UTC)

    def __repr__(self) -> str:
        return (
            f"OAuth2Token(token_type={self.token_type!r}, "
            f"expires_at={self.expires_at.isoformat()}, scope={self.scope!r})"
        )


__all__ = ["OAuth2Token"]
