"""Per-call memoizing wrapper around a directory gateway."""

from __future__ import annotations

from orgchat.config import DEFAULT_SEARCH_LIMIT
from orgchat.directory.base import DirectoryGateway
from orgchat.schemas import Department, EmployeeContext, EmployeeSummary


class CachingDirectory(DirectoryGateway):
    """
    Memoizes employee lookups for the lifetime of one resolution call.

    An escalation walk fetches each manager once to read its details and
    again to step upward; the cache collapses those into one backend read.
    Failures are not cached.  Instances must not be shared across calls.
    """

    def __init__(self, inner: DirectoryGateway) -> None:
        self.inner = inner
        self._employees: dict[str, EmployeeContext | None] = {}
        self._hr_staff: list[EmployeeSummary] | None = None
        self.hits = 0
        self.misses = 0

    def get_employee(self, employee_id: str) -> EmployeeContext | None:
        if employee_id in self._employees:
            self.hits += 1
            return self._employees[employee_id]
        self.misses += 1
        context = self.inner.get_employee(employee_id)
        self._employees[employee_id] = context
        return context

    def list_hr_staff(self) -> list[EmployeeSummary]:
        if self._hr_staff is None:
            self._hr_staff = self.inner.list_hr_staff()
        return list(self._hr_staff)

    def list_department_members(
        self, department_id: str, exclude_id: str | None = None
    ) -> list[EmployeeSummary]:
        return self.inner.list_department_members(department_id, exclude_id)

    def search_by_name(
        self, query: str, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[EmployeeSummary]:
        return self.inner.search_by_name(query, limit)

    def count_subordinates(self, employee_id: str) -> int:
        return self.inner.count_subordinates(employee_id)

    def list_subordinates(self, employee_id: str) -> list[EmployeeSummary]:
        return self.inner.list_subordinates(employee_id)

    def list_departments(self) -> list[Department]:
        return self.inner.list_departments()
