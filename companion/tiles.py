"""
Dashboard tiles: which tiles a role may view, and the static catalog the
dashboard uses to present them.
"""

from typing import Dict, Iterable, List

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from companion.config import ROLE_TILE_TABLE
from companion.errors import InvalidRequest, UpstreamUnavailable
from companion.models import Tile, CatalogTile
from companion.roles import Role


# Presentation metadata only; the store decides visibility.
TILE_CATALOG: Dict[str, CatalogTile] = {
    t.tile_key: t for t in (
        CatalogTile(
            tile_key="onboard_batch",
            title="Onboard Batch",
            description="Create and manage academic batches for incoming cohorts.",
            roles=frozenset({Role.PROGRAM_OFFICE, Role.DEVELOPER}),
        ),
        CatalogTile(
            tile_key="manage_courses",
            title="Manage Courses",
            description="Configure courses, assign divisions, and set schedules.",
            roles=frozenset({Role.PROGRAM_OFFICE, Role.DEVELOPER}),
        ),
        CatalogTile(
            tile_key="attendance_hub",
            title="Attendance Hub",
            description="Upload attendance, view reports, and flag low performers.",
            roles=frozenset({Role.PROGRAM_OFFICE, Role.DEVELOPER}),
        ),
        CatalogTile(
            tile_key="settings",
            title="System Settings",
            description="Manage roles, platform configuration, and integrations.",
            roles=frozenset({Role.DEVELOPER}),
        ),
    )
}


def load_tiles(engine, role_code: str) -> List[Tile]:
    """
    Return the tiles *role_code* may view, ordered by row id.

    The match on role_code is exact. Unknown roles give an empty list and
    duplicate rows are returned as stored.
    """
    if not role_code:
        raise InvalidRequest("Missing role code")

    # TODO: order by t102 sort_order once it is denormalised into this table.
    sql = text(f"""
        SELECT tile_key, tile_label
        FROM {ROLE_TILE_TABLE}
        WHERE role_code = :role AND can_view = :can_view
        ORDER BY id
    """)
    try:
        with engine.connect() as conn:
            rows = conn.execute(sql, {"role": role_code, "can_view": True}).mappings().all()
    except SQLAlchemyError as e:
        raise UpstreamUnavailable("Tile lookup failed") from e

    return [Tile(tile_key=r["tile_key"], tile_label=r["tile_label"]) for r in rows]


def describe_tiles(tiles: Iterable[Tile]) -> List[dict]:
    """Attach catalog descriptions to store tiles, keeping store order."""
    described = []
    for tile in tiles:
        entry = tile.to_dict()
        meta = TILE_CATALOG.get(tile.tile_key)
        entry["description"] = meta.description if meta else ""
        described.append(entry)
    return described


def catalog_drift(engine, roles: Iterable[Role] = tuple(Role)) -> Dict[str, dict]:
    """
    Compare store visibility with the static catalog, per role.

    Returns ``{role_code: {"store_only": [...], "catalog_only": [...]}}`` for
    roles where the two disagree.
    """
    drift = {}
    for role in roles:
        store_keys = {t.tile_key for t in load_tiles(engine, role.value)}
        catalog_keys = {k for k, t in TILE_CATALOG.items() if role in t.roles}
        if store_keys != catalog_keys:
            drift[role.value] = {
                "store_only": sorted(store_keys - catalog_keys),
                "catalog_only": sorted(catalog_keys - store_keys),
            }
    return drift
