"""
Flight service API: discover assets and build Spark options for them.

To interact with data using the Flight service:

1. Use ``Discovery`` to locate a data asset, or a path relative to a
   connection, defined in a project.
2. Build Spark options from the discovery result and hand them to a
   Spark read or write using the Flight data source format.
"""

from flight.discovery import Discovery, DiscoveryResult, derive_options
from flight.entities import (
    ASSET_KEY,
    CONNECTION_KEY,
    PROJECT_KEY,
    AssetRef,
    Context,
    Entity,
    connection,
    data_asset,
    project,
)
from flight.options import (
    FLIGHT_AUTH_TOKEN,
    FLIGHT_COMMAND,
    FLIGHT_LOCATION,
    FLIGHT_TIMEOUT,
    FLIGHT_USE_TLS,
    OptionsBuilder,
)

__all__ = [
    # Discovery
    "Discovery",
    "DiscoveryResult",
    "derive_options",
    # Entities
    "Entity",
    "AssetRef",
    "Context",
    "project",
    "data_asset",
    "connection",
    "PROJECT_KEY",
    "ASSET_KEY",
    "CONNECTION_KEY",
    # Options
    "OptionsBuilder",
    "FLIGHT_LOCATION",
    "FLIGHT_COMMAND",
    "FLIGHT_USE_TLS",
    "FLIGHT_TIMEOUT",
    "FLIGHT_AUTH_TOKEN",
]
