"""
Role codes, legacy code mapping and display labels.
"""

import sys
from enum import Enum
from typing import Optional

from companion.config import DEFAULT_ROLE_CODE


class Role(str, Enum):
    DEVELOPER = "DEVELOPER"
    PROGRAM_OFFICE = "PROGRAM_OFFICE"
    STUDENT = "STUDENT"
    FACULTY = "FACULTY"
    TA = "TA"
    EXAM_OFFICE = "EXAM_OFFICE"
    SODOXO_OFFICE = "SODOXO_OFFICE"
    USER = "USER"


DEFAULT_ROLE = Role(DEFAULT_ROLE_CODE)

# Seed data in the profile store uses lowercase codes.
LEGACY_ROLE_CODES = {
    "developer": Role.DEVELOPER,
    "program_office": Role.PROGRAM_OFFICE,
    "student": Role.STUDENT,
    "faculty": Role.FACULTY,
    "ta": Role.TA,
    "exam_office": Role.EXAM_OFFICE,
    "sodoxo_office": Role.SODOXO_OFFICE,
    "user": Role.USER,
}

ROLE_LABELS = {
    Role.DEVELOPER: "Developer",
    Role.PROGRAM_OFFICE: "Program Office",
    Role.STUDENT: "Student",
    Role.FACULTY: "Faculty",
    Role.TA: "TA",
    Role.EXAM_OFFICE: "Exam Office",
    Role.SODOXO_OFFICE: "Sodoxo",
    Role.USER: "User",
}


def normalize_role(raw: Optional[str]) -> Role:
    """Map a stored role string onto a Role, degrading to the default role."""
    code = (raw or "").strip()
    if not code:
        return DEFAULT_ROLE

    if code in LEGACY_ROLE_CODES:
        return LEGACY_ROLE_CODES[code]

    try:
        return Role(code.upper())
    except ValueError:
        print(f"[WARN] Unknown role code '{raw}', using {DEFAULT_ROLE.value}", file=sys.stderr)
        return DEFAULT_ROLE


def role_label(role: Role) -> str:
    return ROLE_LABELS.get(role, ROLE_LABELS[DEFAULT_ROLE])
