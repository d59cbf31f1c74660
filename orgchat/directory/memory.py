"""In-memory directory gateway built from record lists."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from orgchat.config import DEFAULT_SEARCH_LIMIT
from orgchat.directory.base import DirectoryGateway
from orgchat.schemas import (
    Department,
    Employee,
    EmployeeContext,
    EmployeeStatus,
    EmployeeSummary,
    Role,
)

logger = logging.getLogger(__name__)


def _name_key(summary: EmployeeSummary) -> str:
    return summary.name.lower()


def _role_then_name_key(summary: EmployeeSummary) -> tuple[bool, str, str]:
    # Employees without a role sort after every named role
    role = (summary.role_name or "").lower()
    return (summary.role_name is None, role, summary.name.lower())


class InMemoryDirectory(DirectoryGateway):
    """Directory over plain lists of employees, departments and roles."""

    def __init__(
        self,
        employees: Iterable[Employee],
        departments: Iterable[Department] = (),
        roles: Iterable[Role] = (),
    ) -> None:
        self._departments: dict[str, Department] = {d.id: d for d in departments}
        self._roles: dict[str, Role] = {r.id: r for r in roles}
        self._employees: dict[str, Employee] = {}
        self._reports: dict[str, list[str]] = {}

        for emp in employees:
            if emp.id in self._employees:
                logger.warning("Duplicate employee id %r; keeping the first record", emp.id)
                continue
            self._employees[emp.id] = emp

        for emp in self._employees.values():
            if emp.manager_id:
                self._reports.setdefault(emp.manager_id, []).append(emp.id)
                if emp.manager_id not in self._employees:
                    logger.warning(
                        "Employee %r references unknown manager %r", emp.id, emp.manager_id
                    )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _context(self, emp: Employee) -> EmployeeContext:
        return EmployeeContext(
            id=emp.id,
            name=emp.name,
            email=emp.email,
            department_id=emp.department_id,
            department=self._departments.get(emp.department_id or ""),
            role=self._roles.get(emp.role_id or ""),
            manager_id=emp.manager_id,
            status=emp.status,
            job_title=emp.job_title,
            hire_date=emp.hire_date,
            subordinate_ids=tuple(self._reports.get(emp.id, ())),
        )

    def _summary(self, emp: Employee) -> EmployeeSummary:
        manager = self._employees.get(emp.manager_id or "")
        return self._context(emp).to_summary(manager_name=manager.name if manager else None)

    def _active(self) -> Iterable[Employee]:
        return (e for e in self._employees.values() if e.status == EmployeeStatus.active)

    # ------------------------------------------------------------------
    # DirectoryGateway
    # ------------------------------------------------------------------

    def get_employee(self, employee_id: str) -> EmployeeContext | None:
        emp = self._employees.get(employee_id)
        return self._context(emp) if emp else None

    def list_department_members(
        self, department_id: str, exclude_id: str | None = None
    ) -> list[EmployeeSummary]:
        members = [
            self._summary(e)
            for e in self._active()
            if e.department_id == department_id and e.id != exclude_id
        ]
        return sorted(members, key=_name_key)

    def list_hr_staff(self) -> list[EmployeeSummary]:
        staff = [s for s in (self._summary(e) for e in self._active()) if s.is_hr]
        return sorted(staff, key=_role_then_name_key)

    def search_by_name(
        self, query: str, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[EmployeeSummary]:
        needle = query.strip().lower()
        if not needle or limit <= 0:
            return []
        matches = [self._summary(e) for e in self._active() if needle in e.name.lower()]
        return sorted(matches, key=_name_key)[:limit]

    def count_subordinates(self, employee_id: str) -> int:
        return len(self._reports.get(employee_id, ()))

    def list_subordinates(self, employee_id: str) -> list[EmployeeSummary]:
        return [self._summary(self._employees[i]) for i in self._reports.get(employee_id, ())]

    def list_departments(self) -> list[Department]:
        return sorted(self._departments.values(), key=lambda d: d.name.lower())
