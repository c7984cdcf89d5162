"""
Flight discovery REST client.

Looks up the metadata needed to read a data asset, or to write to a path
relative to a connection, and turns it into Spark options.

Usage:
    discovery = Discovery(session, "api.dataplatform.cloud.ibm.com")
    discovery.set_access_token(token)

    result = discovery.discover_asset(data_asset("asset-guid", project("project-guid")))
    options = derive_options(result, discovery.api_host).num_partitions(2).build()
"""

import copy
import json
import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

import requests

from core.errors.exceptions import ApiError, ConfigurationError
from core.http.responses import assert_success, parse_json_object
from core.http.transport import DEFAULT_TIMEOUT_SECONDS, form_encode, send
from flight.entities import AssetRef, Context
from flight.options import OptionsBuilder

logger = logging.getLogger(__name__)

ASSET_FETCH = "metadata"
PATH_FETCH = "datasource_type,connection,interaction"


@dataclass(frozen=True)
class DiscoveryResult:
    """
    Outcome of one discovery call.

    ``raw_json`` is the response body exactly as returned; nothing in the
    toolkit mutates it after construction. ``flight_data`` hands out copies.
    """

    raw_json: dict[str, Any]
    kind: Context
    asset: AssetRef | None = None
    connection: AssetRef | None = None
    path: str | None = None

    @property
    def flight_data(self) -> dict[str, Any]:
        """A deep copy of the discovered JSON, safe for callers to modify."""
        return copy.deepcopy(self.raw_json)

    def to_pretty_json(self) -> str:
        return json.dumps(self.raw_json, indent=2, sort_keys=False)


def derive_options(result: DiscoveryResult, api_host: str) -> OptionsBuilder:
    """
    Create an options builder seeded from a discovery result.

    Pure read of ``result``: it can be called repeatedly, each call
    returning an independent builder.
    """
    if result.kind is Context.SOURCE:
        if result.asset is None:
            raise ConfigurationError("Source discovery result has no data asset", key="asset")
        return OptionsBuilder.for_asset(api_host, result.raw_json, result.asset)
    return OptionsBuilder.for_connection(api_host, result.raw_json)


class Discovery:
    """Discovers asset information from the Flight service."""

    def __init__(
        self,
        session: requests.Session,
        api_host: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Args:
            session: HTTP session used to call the discovery API
            api_host: Host name providing the Flight service
            timeout_seconds: Per-request timeout

        Raises:
            ConfigurationError: If session is None or api_host is empty
        """
        if session is None:
            raise ConfigurationError("Discovery requires an HTTP session", key="session")
        if not api_host:
            raise ConfigurationError("Discovery requires 'api_host'", key="api_host")

        self.session = session
        self.api_host = api_host
        self.api_root = f"https://{api_host}/v2/"
        self.timeout_seconds = timeout_seconds
        self.access_token: str | None = None

    def set_access_token(self, value: str | None) -> None:
        """Token sent as ``Authorization: Bearer`` on subsequent requests. None disables it."""
        self.access_token = value

    def build_asset_url(self, asset: AssetRef) -> str:
        project = asset.container
        relative = (
            f"connections/assets/{form_encode(asset.id)}"
            f"?{project.key}={form_encode(project.id)}"
            f"&fetch={ASSET_FETCH}"
            f"&context={Context.SOURCE}"
        )
        return urljoin(self.api_root, relative)

    def build_path_url(self, connection: AssetRef, path: str) -> str:
        project = connection.container
        relative = (
            f"connections/{form_encode(connection.id)}/assets"
            f"?{project.key}={form_encode(project.id)}"
            f"&path={form_encode(path)}"
            f"&fetch={PATH_FETCH}"
            f"&context={Context.TARGET}"
        )
        return urljoin(self.api_root, relative)

    def discover_asset(self, asset: AssetRef) -> DiscoveryResult:
        """
        Discover information required to read a data asset.

        Raises:
            ApiError: On a non-2xx response
            ResponseParseError: If the body is not a JSON object
            TransportError: If the request could not be sent
        """
        payload = self._get(self.build_asset_url(asset), Context.SOURCE)
        return DiscoveryResult(raw_json=payload, kind=Context.SOURCE, asset=asset)

    def discover_path(self, connection: AssetRef, path: str) -> DiscoveryResult:
        """
        Discover information required to access data at a path using a connection.

        Raises:
            ConfigurationError: If path is empty
            ApiError: On a non-2xx response
            ResponseParseError: If the body is not a JSON object
            TransportError: If the request could not be sent
        """
        if not path:
            raise ConfigurationError("Discovery path must not be empty", key="path")

        payload = self._get(self.build_path_url(connection, path), Context.TARGET)
        return DiscoveryResult(
            raw_json=payload, kind=Context.TARGET, connection=connection, path=path
        )

    def discover(self, ref: AssetRef, path: str | None = None) -> DiscoveryResult:
        """Discover a data asset, or a path relative to a connection when ``ref`` is one."""
        if ref.is_connection:
            if path is None:
                raise ConfigurationError("Connection discovery requires a path", key="path")
            return self.discover_path(ref, path)
        if path is not None:
            raise ConfigurationError(
                f"A path is only valid for connection discovery, not '{ref.key}'", key="path"
            )
        return self.discover_asset(ref)

    def options(self, result: DiscoveryResult) -> OptionsBuilder:
        return derive_options(result, self.api_host)

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.access_token is not None:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _get(self, url: str, context: Context) -> dict[str, Any]:
        logger.debug(
            "Discovery request starting",
            extra={"http_url": url, "context": str(context), "api_host": self.api_host},
        )
        response = send(
            self.session, "GET", url, headers=self._headers(), timeout=self.timeout_seconds
        )
        try:
            assert_success(response)
        except ApiError as e:
            logger.warning(
                "Discovery request failed",
                extra={
                    "http_url": url,
                    "http_status": response.status_code,
                    "context": str(context),
                    "error": str(e),
                },
            )
            raise
        return parse_json_object(response)


__all__ = ["Discovery", "DiscoveryResult", "derive_options"]
