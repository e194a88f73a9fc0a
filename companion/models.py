"""
Domain dataclasses used across the application.
"""

from dataclasses import dataclass
from typing import Any, Optional

from companion.roles import Role


@dataclass
class UserProfile:
    """A row of the profile store, returned verbatim."""
    primary_role: Optional[str]
    access_status: Optional[str]


@dataclass
class RoleResolution:
    """The role a user ends up with after the migration fallback."""
    role: Role
    source: str                # "profile", "legacy" or "default"
    raw_role: Optional[str]    # role string as stored, before normalisation


@dataclass
class Tile:
    """A dashboard tile a role may view."""
    tile_key: str
    tile_label: str

    def to_dict(self):
        return {"tile_key": self.tile_key, "tile_label": self.tile_label}


@dataclass
class CatalogTile:
    """Presentation metadata for a tile known to the dashboard."""
    tile_key: str
    title: str
    description: str
    roles: frozenset


@dataclass
class AppContext:
    """Shared resources created once at startup and handed to the routes."""
    engine: Any
    identity: Any
    allow_role_override: bool = False
