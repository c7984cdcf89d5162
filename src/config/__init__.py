"""Configuration loading for the Flight join application.

Configuration lives in config/config.yaml under a single ``flight:``
section. ``load_config()`` returns an explicit, validated FlightConfig
value; pass it to the components that need it.

Usage Examples
--------------

    >>> from config import load_config
    >>> config = load_config()
    >>> config.name_asset.id
"""

from config.config import DEFAULT_CONFIG_FILE, FlightConfig, load_config, load_yaml

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "FlightConfig",
    "load_config",
    "load_yaml",
]
