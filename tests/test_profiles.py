"""
Unit tests for profile lookup and the migration-era role fallback.
"""

import pytest

from companion.errors import InvalidRequest, NotFound, UpstreamUnavailable
from companion.profiles import load_profile, load_legacy_role, resolve_role
from companion.roles import Role

from conftest import build_engine, BrokenEngine


# ── Tests: load_profile ──────────────────────────────────────────────

def test_load_profile_returns_row_verbatim(engine):
    profile = load_profile(engine, "u-po")
    assert profile.primary_role == "program_office"
    assert profile.access_status == "active"


def test_load_profile_null_role_is_not_filled_in(engine):
    profile = load_profile(engine, "u-blank")
    assert profile.primary_role is None
    assert profile.access_status == "pending"


@pytest.mark.parametrize("user_id", [None, "", "  "])
def test_load_profile_requires_user_id(user_id):
    engine = build_engine()
    with pytest.raises(InvalidRequest):
        load_profile(engine, user_id)


def test_load_profile_missing_row(engine):
    with pytest.raises(NotFound):
        load_profile(engine, "nobody")


def test_load_profile_user_id_is_not_trimmed(engine):
    with pytest.raises(NotFound):
        load_profile(engine, " u-po ")


def test_load_profile_store_failure(broken):
    with pytest.raises(UpstreamUnavailable) as e:
        load_profile(broken("t106_user_profile"), "u-po")
    assert "connection refused" not in str(e.value)
    assert "connection refused" in str(e.value.__cause__)


def test_load_legacy_role(engine):
    assert load_legacy_role(engine, "u-legacy") == "program_office"
    with pytest.raises(NotFound):
        load_legacy_role(engine, "u-dev")


# ── Tests: resolve_role ──────────────────────────────────────────────

def test_resolve_role_prefers_profile_store(engine):
    # u-po also has a legacy row ("student"); the profile store wins
    res = resolve_role(engine, "u-po")
    assert res.role is Role.PROGRAM_OFFICE
    assert res.source == "profile"
    assert res.raw_role == "program_office"


def test_resolve_role_null_profile_role_is_user(engine):
    res = resolve_role(engine, "u-blank")
    assert res.role is Role.USER
    assert res.source == "profile"


def test_resolve_role_unknown_profile_role_is_user(engine):
    res = resolve_role(engine, "u-odd")
    assert res.role is Role.USER
    assert res.raw_role == "janitor"


def test_resolve_role_falls_back_to_legacy_when_no_profile(engine):
    res = resolve_role(engine, "u-legacy")
    assert res.role is Role.PROGRAM_OFFICE
    assert res.source == "legacy"


def test_resolve_role_falls_back_to_legacy_when_profile_store_fails(broken, capsys):
    eng = broken("t106_user_profile")
    # profile row says program_office, legacy row says student
    res = resolve_role(eng, "u-po")
    assert res.role is Role.STUDENT
    assert res.source == "legacy"
    assert "trying legacy users table" in capsys.readouterr().err


def test_resolve_role_null_legacy_role_is_user():
    engine = build_engine(legacy_users=[{"id": "x", "role": None}])
    res = resolve_role(engine, "x")
    assert res.role is Role.USER
    assert res.source == "legacy"
    assert res.raw_role is None


def test_resolve_role_normalises_legacy_role():
    engine = build_engine(legacy_users=[{"id": "x", "role": "program_office"}])
    eng = BrokenEngine(engine, "t106_user_profile")
    assert resolve_role(eng, "x").role.value == "PROGRAM_OFFICE"


def test_resolve_role_defaults_when_user_is_nowhere(engine):
    res = resolve_role(engine, "nobody")
    assert res.role is Role.USER
    assert res.source == "default"
    assert res.raw_role is None


def test_resolve_role_defaults_when_both_stores_fail(broken, capsys):
    res = resolve_role(broken("t106_user_profile", "users"), "u-po")
    assert res.role is Role.USER
    assert res.source == "default"
    assert "using USER" in capsys.readouterr().err


def test_resolve_role_still_rejects_empty_user_id(engine):
    with pytest.raises(InvalidRequest):
        resolve_role(engine, "")
