"""
Entity references used by the Flight discovery API.

Projects, data assets and connections are plain value types. Every entity
carries the API field name ("key") under which its identifier is supplied
in query strings and Flight commands.
"""

from dataclasses import dataclass
from enum import Enum

from core.errors.exceptions import ConfigurationError

PROJECT_KEY = "project_id"
ASSET_KEY = "asset_id"
CONNECTION_KEY = "connection_id"


class Context(Enum):
    """Discovery kind, sent as the ``context`` query and command value."""

    SOURCE = "source"  # data asset discovery (read)
    TARGET = "target"  # connection/path discovery (write)

    def __str__(self) -> str:
        return self.value


def _require_text(value: str, name: str) -> None:
    if not isinstance(value, str) or not value:
        raise ConfigurationError(f"Entity {name} must be a non-empty string, got {value!r}", key=name)


@dataclass(frozen=True)
class Entity:
    """An entity referenced by the API: the field name and the identifier."""

    key: str
    id: str

    def __post_init__(self) -> None:
        _require_text(self.key, "key")
        _require_text(self.id, "id")


@dataclass(frozen=True)
class AssetRef:
    """
    An asset-like entity (data asset or connection) and its owning project.

    The project is only read for its key and id; an AssetRef never owns it.
    """

    entity: Entity
    project: Entity

    def __post_init__(self) -> None:
        if not isinstance(self.entity, Entity):
            raise ConfigurationError("AssetRef entity must be an Entity", key="entity")
        if not isinstance(self.project, Entity):
            raise ConfigurationError("AssetRef project must be an Entity", key="project")

    @property
    def key(self) -> str:
        return self.entity.key

    @property
    def id(self) -> str:
        return self.entity.id

    @property
    def container(self) -> Entity:
        return self.project

    @property
    def is_data_asset(self) -> bool:
        return self.key == ASSET_KEY

    @property
    def is_connection(self) -> bool:
        return self.key == CONNECTION_KEY


def project(project_id: str) -> Entity:
    """Reference a project, the root container for assets and connections."""
    return Entity(PROJECT_KEY, project_id)


def data_asset(asset_id: str, container: Entity) -> AssetRef:
    """Reference a data asset defined in a project."""
    return AssetRef(Entity(ASSET_KEY, asset_id), container)


def connection(connection_id: str, container: Entity) -> AssetRef:
    """Reference a connection defined in a project."""
    return AssetRef(Entity(CONNECTION_KEY, connection_id), container)


__all__ = [
    "ASSET_KEY",
    "CONNECTION_KEY",
    "PROJECT_KEY",
    "AssetRef",
    "Context",
    "Entity",
    "connection",
    "data_asset",
    "project",
]
