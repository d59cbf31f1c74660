"""Escalation chain: employee → manager → manager's manager → … → HR.

The manager relation is not guaranteed to be acyclic or complete, so the
walk keeps a visited set (seeded with the starting employee) and stops at
the first repeat, missing manager or dangling reference.  It is also capped
at ``MAX_ESCALATION_HOPS`` hops.
"""

from __future__ import annotations

import logging

from orgchat.config import MAX_ESCALATION_HOPS
from orgchat.directory.base import DirectoryGateway
from orgchat.errors import DirectoryUnavailable
from orgchat.schemas import ChainEntry, EmployeeContext, EmployeeSummary, EscalationTarget

logger = logging.getLogger(__name__)


def _manager_entry(level: int, manager: EmployeeContext) -> ChainEntry:
    return ChainEntry(
        level=level,
        employee_id=manager.id,
        name=manager.name,
        email=manager.email,
        role_name=manager.role_name,
        department_name=manager.department_name,
    )


def _hr_entry(level: int, hr: EmployeeSummary) -> ChainEntry:
    return ChainEntry(
        level=level,
        employee_id=hr.id,
        name=hr.name,
        email=hr.email,
        role_name=hr.role_name,
        department_name=hr.department_name,
        is_hr=True,
    )


def _walk_managers(
    start: EmployeeContext,
    directory: DirectoryGateway,
    visited: set[str],
    max_hops: int,
) -> list[ChainEntry]:
    chain: list[ChainEntry] = []
    current = start

    for hop in range(max_hops):
        manager_id = current.manager_id
        if not manager_id:
            break
        if manager_id in visited:
            logger.warning(
                "Manager cycle at %r while escalating from %r; stopping after %d levels",
                manager_id, start.id, hop,
            )
            break
        try:
            manager = directory.get_employee(manager_id)
        except DirectoryUnavailable as exc:
            logger.warning("Escalation walk from %r cut short: %s", start.id, exc)
            break
        if manager is None:
            logger.warning("Employee %r references unknown manager %r", current.id, manager_id)
            break

        visited.add(manager.id)
        chain.append(_manager_entry(hop + 1, manager))
        current = manager
    else:
        if current.manager_id and current.manager_id not in visited:
            logger.warning(
                "Escalation from %r reached the %d-hop limit; chain truncated",
                start.id, max_hops,
            )

    return chain


def escalation_chain(
    employee_id: str,
    directory: DirectoryGateway,
    max_hops: int = MAX_ESCALATION_HOPS,
) -> list[ChainEntry]:
    """
    Build the escalation chain for ``employee_id``.

    Returns the managers above the employee (level 1 = direct manager)
    followed by one HR contact not already in the chain.  Employees who are
    themselves HR get no HR entry.  An unknown employee yields an empty
    chain.  The result never contains the employee or a duplicate id and
    holds at most ``max_hops + 1`` entries.
    """
    try:
        start = directory.get_employee(employee_id)
    except DirectoryUnavailable as exc:
        logger.warning("Cannot build escalation chain for %r: %s", employee_id, exc)
        return []
    if start is None:
        logger.warning("Escalation chain requested for unknown employee %r", employee_id)
        return []

    visited = {start.id}
    chain = _walk_managers(start, directory, visited, max_hops)

    if start.is_hr:
        return chain

    try:
        hr_staff = directory.list_hr_staff()
    except DirectoryUnavailable as exc:
        logger.warning("HR staff unavailable for escalation from %r: %s", employee_id, exc)
        return chain

    hr_contact = next((h for h in hr_staff if h.id not in visited), None)
    if hr_contact is not None:
        chain.append(_hr_entry(len(chain) + 1, hr_contact))
    return chain


def escalation_target(
    employee_id: str,
    directory: DirectoryGateway,
    escalate_higher: bool = False,
) -> EscalationTarget | None:
    """
    Pick who receives an escalated issue.

    The direct manager (level 1), or with ``escalate_higher`` the manager's
    manager (level 2) when one exists and does not loop back.  None when the
    employee is unknown or has no resolvable manager.
    """
    try:
        employee = directory.get_employee(employee_id)
        if employee is None or not employee.manager_id or employee.manager_id == employee.id:
            return None
        manager = directory.get_employee(employee.manager_id)
        if manager is None:
            return None

        recipient, level = manager, 1
        grand_id = manager.manager_id
        if escalate_higher and grand_id and grand_id not in (employee.id, manager.id):
            grand = directory.get_employee(grand_id)
            if grand is not None:
                recipient, level = grand, 2
    except DirectoryUnavailable as exc:
        logger.warning("Cannot resolve escalation target for %r: %s", employee_id, exc)
        return None

    manager_name = None
    if recipient.manager_id:
        try:
            boss = directory.get_employee(recipient.manager_id)
        except DirectoryUnavailable as exc:
            logger.warning("Manager name of %s unavailable: %s", recipient.id, exc)
        else:
            manager_name = boss.name if boss else None

    return EscalationTarget(level=level, recipient=recipient.to_summary(manager_name=manager_name))
