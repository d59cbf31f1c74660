"""Contact set builder: everyone an employee may start a conversation with."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from orgchat.directory.base import DirectoryGateway
from orgchat.errors import DirectoryUnavailable
from orgchat.schemas import ContactSet, EmployeeContext, EmployeeSummary

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _degrade(group: str, employee_id: str, fetch: Callable[[], T], fallback: T) -> T:
    """Run one group lookup; a directory failure empties that group only."""
    try:
        return fetch()
    except DirectoryUnavailable as exc:
        logger.warning("Contact group %r unavailable for %s: %s", group, employee_id, exc)
        return fallback


def messageable_contacts(
    employee: EmployeeContext | None,
    directory: DirectoryGateway,
) -> ContactSet:
    """
    Build the contact set of ``employee``.

    Groups: own manager, direct reports, active department peers and HR
    staff, never including the employee.  A person may appear in several
    groups; ``total_unique`` counts each id once.
    """
    if employee is None:
        return ContactSet()

    manager: EmployeeSummary | None = None
    if employee.manager_id and employee.manager_id != employee.id:
        manager = _degrade(
            "manager", employee.id, lambda: directory.summarize(employee.manager_id), None
        )
        if manager is None:
            logger.debug("Manager %r of %s not resolvable", employee.manager_id, employee.id)

    subordinates = _degrade(
        "subordinates", employee.id, lambda: directory.list_subordinates(employee.id), []
    )
    subordinates = [s for s in subordinates if s.id != employee.id]

    peers: list[EmployeeSummary] = []
    if employee.department_id:
        peers = _degrade(
            "department_peers",
            employee.id,
            lambda: directory.list_department_members(employee.department_id, exclude_id=employee.id),
            [],
        )

    hr = _degrade("hr_staff", employee.id, directory.list_hr_staff, [])
    hr = [h for h in hr if h.id != employee.id]

    unique_ids = {s.id for group in (subordinates, peers, hr) for s in group}
    if manager is not None:
        unique_ids.add(manager.id)
    return ContactSet(
        manager=manager,
        subordinates=subordinates,
        department_peers=peers,
        hr_staff=hr,
        total_unique=len(unique_ids),
    )
