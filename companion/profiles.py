"""
Profile lookup: the user's role and access status.

``load_profile`` is the strict single-row read used by the profile endpoint.
``resolve_role`` is the lenient variant used to decide what a user may see:
while profiles are being migrated it falls back to the legacy users table and
finally to the default role instead of failing.
"""

import sys

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from companion.config import PROFILE_TABLE, LEGACY_USER_TABLE
from companion.errors import CompanionError, InvalidRequest, NotFound, UpstreamUnavailable
from companion.models import UserProfile, RoleResolution
from companion.roles import DEFAULT_ROLE, normalize_role


def _require_user_id(user_id) -> str:
    # Blank ids are rejected; anything else is used exactly as given.
    if not user_id or not user_id.strip():
        raise InvalidRequest("Missing user id")
    return user_id


def load_profile(engine, user_id: str) -> UserProfile:
    """Return the profile row for *user_id* without transforming it."""
    user_id = _require_user_id(user_id)
    sql = text(f"""
        SELECT primary_role, access_status
        FROM {PROFILE_TABLE}
        WHERE user_id = :uid
        LIMIT 1
    """)
    try:
        with engine.connect() as conn:
            row = conn.execute(sql, {"uid": user_id}).mappings().first()
    except SQLAlchemyError as e:
        raise UpstreamUnavailable("Profile lookup failed") from e

    if not row:
        raise NotFound(f"No profile for user '{user_id}'")

    return UserProfile(
        primary_role=row["primary_role"],
        access_status=row["access_status"],
    )


def load_legacy_role(engine, user_id: str):
    """Return the role stored in the pre-migration users table."""
    user_id = _require_user_id(user_id)
    sql = text(f"SELECT role FROM {LEGACY_USER_TABLE} WHERE id = :uid LIMIT 1")
    try:
        with engine.connect() as conn:
            row = conn.execute(sql, {"uid": user_id}).mappings().first()
    except SQLAlchemyError as e:
        raise UpstreamUnavailable("Legacy profile lookup failed") from e

    if not row:
        raise NotFound(f"No legacy user '{user_id}'")
    return row["role"]


def resolve_role(engine, user_id: str) -> RoleResolution:
    """
    Resolve a user's role: profile store, then legacy store, then the
    default role. Only an empty user id raises.
    """
    user_id = _require_user_id(user_id)

    try:
        profile = load_profile(engine, user_id)
        return RoleResolution(
            role=normalize_role(profile.primary_role),
            source="profile",
            raw_role=profile.primary_role,
        )
    except CompanionError as e:
        print(f"[WARN] Could not fetch profile for {user_id} ({e}); trying legacy users table",
              file=sys.stderr)

    try:
        legacy_role = load_legacy_role(engine, user_id)
        return RoleResolution(
            role=normalize_role(legacy_role),
            source="legacy",
            raw_role=legacy_role,
        )
    except CompanionError as e:
        print(f"[WARN] Legacy lookup failed for {user_id} ({e}); using {DEFAULT_ROLE.value}",
              file=sys.stderr)

    return RoleResolution(role=DEFAULT_ROLE, source="default", raw_role=None)
