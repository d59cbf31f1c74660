"""Directory queries used by the messaging UI: search, rosters, HR lookup."""

from __future__ import annotations

import logging
from datetime import date

from orgchat.config import MAX_SEARCH_LIMIT, settings
from orgchat.directory.base import DirectoryGateway
from orgchat.errors import DirectoryUnavailable
from orgchat.schemas import EmployeeContext, EmployeeSummary

logger = logging.getLogger(__name__)


def search_employees(
    directory: DirectoryGateway,
    query: str,
    limit: int | None = None,
) -> list[EmployeeSummary]:
    """Active employees whose name contains ``query``, at most ``limit`` of them."""
    if not query or not query.strip():
        return []
    limit = settings.search_limit if limit is None else max(0, min(limit, MAX_SEARCH_LIMIT))
    try:
        return directory.search_by_name(query.strip(), limit=limit)
    except DirectoryUnavailable as exc:
        logger.warning("Employee search for %r failed: %s", query, exc)
        return []


def department_roster(directory: DirectoryGateway, department_name: str) -> list[EmployeeSummary]:
    """Active members of every department whose name contains ``department_name``."""
    needle = (department_name or "").strip().lower()
    if not needle:
        return []
    try:
        matched = [d for d in directory.list_departments() if needle in d.name.lower()]
        members: dict[str, EmployeeSummary] = {}
        for dept in matched:
            for m in directory.list_department_members(dept.id):
                members.setdefault(m.id, m)
    except DirectoryUnavailable as exc:
        logger.warning("Roster lookup for %r failed: %s", department_name, exc)
        return []
    return sorted(members.values(), key=lambda m: m.name.lower())


def hr_staff(directory: DirectoryGateway) -> list[EmployeeSummary]:
    try:
        return directory.list_hr_staff()
    except DirectoryUnavailable as exc:
        logger.warning("HR staff lookup failed: %s", exc)
        return []


def primary_hr_contact(directory: DirectoryGateway) -> EmployeeSummary | None:
    """Most senior HR staffer (earliest hire date); default recipient for HR inquiries."""
    staff = hr_staff(directory)
    if not staff:
        return None
    return min(
        staff,
        key=lambda h: (h.hire_date is None, h.hire_date or date.max, h.name.lower()),
    )


def announcement_recipients(
    employee: EmployeeContext,
    directory: DirectoryGateway,
) -> list[EmployeeSummary]:
    """Active department members an announcement from ``employee`` reaches."""
    if not employee.department_id:
        return []
    try:
        return directory.list_department_members(employee.department_id, exclude_id=employee.id)
    except DirectoryUnavailable as exc:
        logger.warning("Announcement recipients for %s unavailable: %s", employee.id, exc)
        return []
