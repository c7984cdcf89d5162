"""
Spark Flight options builder.

Merges the JSON fragments returned by discovery with caller-supplied
settings into the flat string map consumed by the Flight data source.
Nested discovery JSON (fields, connection and interaction properties) is
carried through unchanged.
"""

import copy
import json
from typing import Any

from flight.entities import AssetRef, Context

FLIGHT_LOCATION = "flight.location"
FLIGHT_COMMAND = "flight.command"
FLIGHT_USE_TLS = "flight.useTls"
FLIGHT_TIMEOUT = "flight.timeout.default"
FLIGHT_AUTH_TOKEN = "flight.authToken"

FLIGHT_PORT = 443


def _require_int(value: int, name: str) -> int:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    return value


class OptionsBuilder:
    """
    Builder for Spark Flight options used when reading or writing data.

    Obtain instances with ``for_asset`` or ``for_connection`` (usually via
    ``flight.discovery.derive_options``), chain setters, then call
    ``build()``. ``build()`` does not change the builder and can be called
    any number of times.
    """

    def __init__(self, api_host: str, command: dict[str, Any] | None = None):
        self.api_host = api_host
        self._command: dict[str, Any] = command if command is not None else {}
        self._timeout: str | None = None
        self._access_token: str | None = None

    @classmethod
    def for_asset(
        cls, api_host: str, discovery: dict[str, Any], asset: AssetRef
    ) -> "OptionsBuilder":
        """
        Seed a builder from data asset discovery.

        ``fields`` is always copied, as null when discovery did not return it.
        """
        command: dict[str, Any] = {
            "fields": copy.deepcopy(discovery.get("fields")),
            asset.key: asset.id,
            asset.container.key: asset.container.id,
            "context": str(Context.SOURCE),
        }
        return cls(api_host, command)

    @classmethod
    def for_connection(cls, api_host: str, discovery: dict[str, Any]) -> "OptionsBuilder":
        """Seed a builder from connection/path discovery. Absent fields are omitted."""
        command: dict[str, Any] = {}

        datasource_type = discovery.get("datasource_type")
        if isinstance(datasource_type, dict):
            entity = datasource_type.get("entity")
            if isinstance(entity, dict) and entity.get("name") is not None:
                command["datasource_type"] = entity["name"]

        for name in ("connection_properties", "interaction_properties", "fields"):
            if name in discovery:
                command[name] = copy.deepcopy(discovery[name])

        command["context"] = str(Context.TARGET)
        return cls(api_host, command)

    @property
    def command(self) -> dict[str, Any]:
        """A copy of the Flight command accumulated so far."""
        return copy.deepcopy(self._command)

    def num_partitions(self, value: int) -> "OptionsBuilder":
        """Maximum number of partitions used for parallel reads and writes."""
        self._command["num_partitions"] = _require_int(value, "num_partitions")
        return self

    def batch_size(self, value: int) -> "OptionsBuilder":
        """Number of rows transferred per round trip."""
        self._command["batch_size"] = _require_int(value, "batch_size")
        return self

    def timeout(self, value: str | None) -> "OptionsBuilder":
        """Default Flight call timeout, e.g. ``"60s"``. None clears it."""
        self._timeout = value
        return self

    def access_token(self, value: str | None) -> "OptionsBuilder":
        """Bearer token passed to the Flight service. None clears it."""
        self._access_token = value
        return self

    def build(self) -> dict[str, str]:
        """Render the builder state as Spark options."""
        options = {
            FLIGHT_LOCATION: f"grpc+tls://{self.api_host}:{FLIGHT_PORT}",
            FLIGHT_COMMAND: json.dumps(self._command, separators=(",", ":"), allow_nan=False),
            FLIGHT_USE_TLS: "true",
        }
        if self._timeout is not None:
            options[FLIGHT_TIMEOUT] = self._timeout
        if self._access_token is not None:
            options[FLIGHT_AUTH_TOKEN] = self._access_token
        return options

    def __repr__(self) -> str:
        return (
            f"OptionsBuilder(api_host={self.api_host!r}, "
            f"command_keys={sorted(self._command)}, timeout={self._timeout!r})"
        )


__all__ = [
    "FLIGHT_AUTH_TOKEN",
    "FLIGHT_COMMAND",
    "FLIGHT_LOCATION",
    "FLIGHT_TIMEOUT",
    "FLIGHT_USE_TLS",
    "OptionsBuilder",
]
