"""Flight application configuration from YAML file.

Loads the ``flight:`` section of config/config.yaml. Environment variables
are supported using ${VAR_NAME} and ${VAR_NAME:-default} syntax in the YAML
file, and FLIGHT_API_HOST / FLIGHT_AUTH_ENDPOINT override the file values.

The API key itself is never stored in the file; it is read from the
environment variable named by ``auth_key_env`` when needed.
"""

import logging
import os
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from core.errors.exceptions import ConfigurationError
from core.oauth2.iam import DEFAULT_AUTH_ENDPOINT
from flight.entities import AssetRef, Entity, connection, data_asset, project

logger = logging.getLogger(__name__)

# Default config file: config/config.yaml in src/ directory
DEFAULT_CONFIG_FILE = Path(__file__).parent / "config.yaml"

DEFAULT_AUTH_KEY_ENV = "AUTH_KEY"

_REQUIRED_KEYS = (
    "api_host",
    "auth_endpoint",
    "project_id",
    "name_asset_id",
    "numeral_asset_id",
    "connection_id",
    "join_column_name",
    "result_path",
    "auth_key_env",
)

# Keys with a dataclass default; the rest must appear in the file
_DEFAULTED_KEYS = ("auth_endpoint", "auth_key_env")


def load_yaml(path: Path) -> Dict[str, Any]:
    """Load YAML file and return dict."""
    if not path.exists():
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR_NAME} and ${VAR_NAME:-default} environment variables in config data."""
    if isinstance(data, dict):
        return {key: _expand_env_vars(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        pattern = r"\$\{([^}:]+)(?::-(([^}]*))?)?\}"

        def replacer(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else match.group(0)
            return os.getenv(var_name, default_value)

        return re.sub(pattern, replacer, data)
    else:
        return data


@dataclass(frozen=True)
class FlightConfig:
    """Configuration for the Flight join application.

    Configuration structure:
        flight:
          api_host: api.dataplatform.cloud.ibm.com
          auth_endpoint: https://iam.cloud.ibm.com/identity/token
          auth_key_env: AUTH_KEY
          http_timeout_seconds: 30
          project_id: ...
          name_asset_id: ...
          numeral_asset_id: ...
          connection_id: ...
          join_column_name: ID
          result_path: bucket/path/result.csv
    """

    api_host: str
    project_id: str
    name_asset_id: str
    numeral_asset_id: str
    connection_id: str
    join_column_name: str
    result_path: str
    auth_endpoint: str = DEFAULT_AUTH_ENDPOINT
    auth_key_env: str = DEFAULT_AUTH_KEY_ENV
    http_timeout_seconds: float = 30

    def validate(self) -> None:
        """Fail fast on missing or malformed values.

        Raises:
            ConfigurationError: Naming the first offending key
        """
        for key in _REQUIRED_KEYS:
            value = getattr(self, key)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(
                    f"Configuration property \"{key}\" is not defined", key=key
                )

        if not self.auth_endpoint.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"auth_endpoint must start with http:// or https://, got: {self.auth_endpoint!r}",
                key="auth_endpoint",
            )

        if (
            isinstance(self.http_timeout_seconds, bool)
            or not isinstance(self.http_timeout_seconds, (int, float))
            or self.http_timeout_seconds <= 0
        ):
            raise ConfigurationError(
                f"http_timeout_seconds must be > 0, got {self.http_timeout_seconds!r}",
                key="http_timeout_seconds",
            )

    @property
    def project(self) -> Entity:
        return project(self.project_id)

    @property
    def name_asset(self) -> AssetRef:
        return data_asset(self.name_asset_id, self.project)

    @property
    def numeral_asset(self) -> AssetRef:
        return data_asset(self.numeral_asset_id, self.project)

    @property
    def connection(self) -> AssetRef:
        return connection(self.connection_id, self.project)

    def auth_key(self) -> str:
        """API key used with the authorization service, read from the environment."""
        value = os.getenv(self.auth_key_env)
        if not value:
            raise ConfigurationError(
                f"Required environment variable \"{self.auth_key_env}\" is not set",
                key=self.auth_key_env,
            )
        return value


def load_config(config_path: Optional[Path] = None) -> FlightConfig:
    """Load and validate Flight configuration.

    Args:
        config_path: Path to YAML file (default: src/config/config.yaml)

    Raises:
        ConfigurationError: If the file lacks a flight section or values are invalid
    """
    config_path = config_path or DEFAULT_CONFIG_FILE
    logger.debug(f"Loading configuration from {config_path}")

    yaml_data = _expand_env_vars(load_yaml(config_path))
    section = yaml_data.get("flight")
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"Configuration file {config_path} has no 'flight' section", key="flight"
        )

    known = {f.name for f in fields(FlightConfig)}
    unknown = sorted(set(section) - known)
    if unknown:
        logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")

    values = {key: value for key, value in section.items() if key in known}
    for key in ("project_id", "name_asset_id", "numeral_asset_id", "connection_id"):
        # YAML turns bare numeric ids into ints
        if isinstance(values.get(key), int):
            values[key] = str(values[key])

    if os.getenv("FLIGHT_API_HOST"):
        values["api_host"] = os.environ["FLIGHT_API_HOST"]
    if os.getenv("FLIGHT_AUTH_ENDPOINT"):
        values["auth_endpoint"] = os.environ["FLIGHT_AUTH_ENDPOINT"]

    missing = [key for key in _REQUIRED_KEYS if key not in values and key not in _DEFAULTED_KEYS]
    if missing:
        raise ConfigurationError(
            f"Configuration property \"{missing[0]}\" is not defined", key=missing[0]
        )

    config = FlightConfig(**values)
    config.validate()

    logger.debug("Configuration loaded successfully:")
    logger.debug(f"  - API host: {config.api_host}")
    logger.debug(f"  - Auth endpoint: {config.auth_endpoint}")

    return config
