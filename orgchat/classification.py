"""
Role and department classification.

Department and role names are free text.  Classification is a
case-insensitive substring heuristic that degrades to "no special
capability" when a name is missing.  The heuristic is knowingly broad
("HRD Logistics" counts as HR, "Headcount Analyst" as leadership); it is
kept as-is pending a product decision on explicit capability flags.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from orgchat.config import (
    ADMIN_ROLE_NAMES,
    HR_DEPARTMENT_PATTERNS,
    HR_ROLE_PATTERNS,
    LEADERSHIP_ROLE_PATTERNS,
    MANAGER_ROLE_PATTERNS,
)


class RoleClass(StrEnum):
    admin = "admin"
    hr = "hr"
    leadership = "leadership"
    manager = "manager"
    employee = "employee"


def _normalize(name: str | None) -> str:
    return (name or "").strip().lower()


def _contains_any(name: str | None, patterns: tuple[str, ...]) -> bool:
    text = _normalize(name)
    if not text:
        return False
    return any(p in text for p in patterns)


def is_hr_department(name: str | None) -> bool:
    """True when a department name looks like Human Resources."""
    return _contains_any(name, HR_DEPARTMENT_PATTERNS)


def is_admin_role(name: str | None) -> bool:
    return _normalize(name) in ADMIN_ROLE_NAMES


def is_hr_role(name: str | None) -> bool:
    return _contains_any(name, HR_ROLE_PATTERNS)


def is_leadership_role(name: str | None) -> bool:
    """True for head-of-department and director titles."""
    return _contains_any(name, LEADERSHIP_ROLE_PATTERNS)


def is_manager_role(name: str | None) -> bool:
    return _contains_any(name, MANAGER_ROLE_PATTERNS)


def classify_role(name: str | None) -> RoleClass:
    """
    Map a role name onto its coarse class.

    Public classification helper; the CLI tags people with it.

    Precedence: admin → hr → leadership → manager → employee.  A role that
    matches several patterns ("HR Director") lands in the first class only;
    callers that need every matching flag use ``Capabilities``.
    """
    if is_admin_role(name):
        return RoleClass.admin
    if is_hr_role(name):
        return RoleClass.hr
    if is_leadership_role(name):
        return RoleClass.leadership
    if is_manager_role(name):
        return RoleClass.manager
    return RoleClass.employee


@dataclass(frozen=True)
class Capabilities:
    """Capability flags resolved once from role and department names."""

    is_admin: bool = False
    is_hr_role: bool = False
    is_hr_department: bool = False
    is_leadership: bool = False

    @property
    def can_message_anyone(self) -> bool:
        return self.is_admin or self.is_hr_role

    @property
    def is_leadership_contact(self) -> bool:
        """Reachable by leadership peers: heads, directors and admins."""
        return self.is_leadership or self.is_admin

    @classmethod
    def resolve(cls, role_name: str | None, department_name: str | None) -> Capabilities:
        return cls(
            is_admin=is_admin_role(role_name),
            is_hr_role=is_hr_role(role_name),
            is_hr_department=is_hr_department(department_name),
            is_leadership=is_leadership_role(role_name),
        )
