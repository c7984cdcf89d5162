"""
OAuth2 access token acquisition.

Basic Usage:
    from core.oauth2 import IamAuthentication
    from core.security.ssl_utils import create_session

    auth = IamAuthentication(create_session())
    token = auth.access_token(os.environ["AUTH_KEY"])

    headers = {"Authorization": f"Bearer {token}"}

Tokens are not cached. Use ``acquire_token`` and ``OAuth2Token.is_expired``
to decide when to request a fresh one.
"""

from core.oauth2.iam import API_KEY_GRANT_TYPE, DEFAULT_AUTH_ENDPOINT, IamAuthentication
from core.oauth2.models import OAuth2Token

__all__ = [
    "IamAuthentication",
    "OAuth2Token",
    "API_KEY_GRANT_TYPE",
    "DEFAULT_AUTH_ENDPOINT",
]
