"""
Shared fixtures: an in-memory store seeded with profile, legacy user and
role/tile rows, plus a wrapper that makes chosen tables fail.
"""

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool


SCHEMA = [
    """CREATE TABLE t106_user_profile (
        user_id TEXT PRIMARY KEY,
        primary_role TEXT,
        access_status TEXT
    )""",
    """CREATE TABLE users (
        id TEXT PRIMARY KEY,
        role TEXT
    )""",
    """CREATE TABLE t104_role_tile_access (
        id INTEGER PRIMARY KEY,
        role_code TEXT,
        tile_key TEXT,
        tile_label TEXT,
        can_view BOOLEAN
    )""",
]

PROFILES = [
    {"user_id": "u-po", "primary_role": "program_office", "access_status": "active"},
    {"user_id": "u-dev", "primary_role": "DEVELOPER", "access_status": "active"},
    {"user_id": "u-blank", "primary_role": None, "access_status": "pending"},
    {"user_id": "u-odd", "primary_role": "janitor", "access_status": "active"},
]

LEGACY_USERS = [
    {"id": "u-legacy", "role": "program_office"},
    {"id": "u-po", "role": "student"},
]

TILES = [
    (1, "PROGRAM_OFFICE", "onboard_batch", "Onboard Batch", True),
    (2, "PROGRAM_OFFICE", "settings", "System Settings", False),
    (3, "PROGRAM_OFFICE", "manage_courses", "Manage Courses", True),
    (4, "PROGRAM_OFFICE", "attendance_hub", "Attendance Hub", True),
    (5, "DEVELOPER", "onboard_batch", "Onboard Batch", True),
    (6, "DEVELOPER", "manage_courses", "Manage Courses", True),
    (7, "DEVELOPER", "attendance_hub", "Attendance Hub", True),
    (8, "DEVELOPER", "settings", "System Settings", True),
    (9, "STUDENT", "attendance_hub", "Attendance Hub", True),
    (10, "STUDENT", "attendance_hub", "Attendance Hub", True),
    (12, "FACULTY", "manage_courses", "Manage Courses", True),
    (11, "FACULTY", "attendance_hub", "Attendance Hub", True),
    (13, "program_office", "exam_schedule", "Exam Schedule", True),
]


def build_engine(profiles=(), legacy_users=(), tiles=()):
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        future=True,
    )
    with engine.begin() as conn:
        for stmt in SCHEMA:
            conn.execute(text(stmt))
        if profiles:
            conn.execute(
                text("INSERT INTO t106_user_profile (user_id, primary_role, access_status) "
                     "VALUES (:user_id, :primary_role, :access_status)"),
                list(profiles),
            )
        if legacy_users:
            conn.execute(text("INSERT INTO users (id, role) VALUES (:id, :role)"), list(legacy_users))
        if tiles:
            conn.execute(
                text("INSERT INTO t104_role_tile_access (id, role_code, tile_key, tile_label, can_view) "
                     "VALUES (:id, :role_code, :tile_key, :tile_label, :can_view)"),
                [
                    {"id": i, "role_code": r, "tile_key": k, "tile_label": label, "can_view": v}
                    for i, r, k, label, v in tiles
                ],
            )
    return engine


class BrokenConn:
    """Delegates to a real connection but fails on queries touching *broken* tables."""
    def __init__(self, conn, broken):
        self._conn = conn
        self._broken = broken

    def execute(self, sql, params=None):
        statement = str(sql)
        if any(table in statement for table in self._broken):
            raise OperationalError(statement, params, Exception("connection refused"))
        return self._conn.execute(sql, params)

    def __enter__(self):
        self._conn.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb):
        return self._conn.__exit__(exc_type, exc, tb)


class BrokenEngine:
    """Mimic engine.connect() with some tables unavailable."""
    def __init__(self, engine, *broken):
        self._engine = engine
        self._broken = broken or ("t106_user_profile", "users", "t104_role_tile_access", "SELECT 1")

    def connect(self):
        return BrokenConn(self._engine.connect(), self._broken)


@pytest.fixture
def engine():
    return build_engine(PROFILES, LEGACY_USERS, TILES)


@pytest.fixture
def broken(engine):
    """Factory: ``broken("users")`` breaks one table, ``broken()`` breaks all."""
    def make(*tables):
        return BrokenEngine(engine, *tables)
    return make
