"""
Centralised configuration constants and environment helpers.
"""

import os
import sys

from dotenv import load_dotenv

load_dotenv()

# ── Tables ───────────────────────────────────────────────────────────
PROFILE_TABLE = "t106_user_profile"
LEGACY_USER_TABLE = "users"          # pre-migration schema, read-only fallback
ROLE_TILE_TABLE = "t104_role_tile_access"

# ── Roles ────────────────────────────────────────────────────────────
DEFAULT_ROLE_CODE = "USER"

# ── Identity ─────────────────────────────────────────────────────────
# "header" trusts x-user-id, "jwt" verifies Supabase access tokens,
# "mock" is a development-only test double.
IDENTITY_MODE = os.getenv("IDENTITY_MODE", "header").strip().lower()
# Default only signs locally minted dev tokens; jwt mode requires the real one.
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET", "dev-secret-key-change-in-production")
TOKEN_AUDIENCE = "authenticated"
TOKEN_EXPIRY_HOURS = 1


def is_development() -> bool:
    """True when running with FLASK_ENV=development."""
    return os.getenv("FLASK_ENV") == "development"


def get_env(name: str) -> str:
    """Return an environment variable or exit with an error message."""
    value = os.getenv(name)
    if not value:
        print(f"ERROR: env var {name} is not set", file=sys.stderr)
        sys.exit(1)
    return value
