"""Read-only directory gateway over employee, department and role records."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from orgchat.config import DEFAULT_SEARCH_LIMIT
from orgchat.errors import DirectoryUnavailable
from orgchat.schemas import Department, EmployeeContext, EmployeeSummary

logger = logging.getLogger(__name__)


class DirectoryGateway(ABC):
    """
    Accessor the engine reads its snapshots through.

    Implementations own the records; the engine never writes back.  Backend
    failures surface as ``DirectoryUnavailable``; an unknown id is not a
    failure and yields ``None``.
    """

    @abstractmethod
    def get_employee(self, employee_id: str) -> EmployeeContext | None:
        """Hydrated context for one employee, or None when unknown."""

    @abstractmethod
    def list_department_members(
        self, department_id: str, exclude_id: str | None = None
    ) -> list[EmployeeSummary]:
        """Active members of a department, optionally excluding one id."""

    @abstractmethod
    def list_hr_staff(self) -> list[EmployeeSummary]:
        """Active employees of HR departments, ordered by role name then name."""

    @abstractmethod
    def search_by_name(
        self, query: str, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[EmployeeSummary]:
        """Active employees whose name contains ``query`` (case-insensitive)."""

    @abstractmethod
    def count_subordinates(self, employee_id: str) -> int:
        """Number of employees whose manager is ``employee_id``."""

    @abstractmethod
    def list_subordinates(self, employee_id: str) -> list[EmployeeSummary]:
        """Direct reports of an employee, inactive ones included."""

    @abstractmethod
    def list_departments(self) -> list[Department]:
        """All departments, ordered by name."""

    def summarize(self, employee_id: str) -> EmployeeSummary | None:
        """
        Display summary for one employee, including the manager's name.

        A failed manager lookup leaves ``manager_name`` empty; only the
        employee lookup itself may raise ``DirectoryUnavailable``.
        """
        context = self.get_employee(employee_id)
        if context is None:
            return None
        manager_name = None
        if context.manager_id:
            try:
                manager = self.get_employee(context.manager_id)
            except DirectoryUnavailable as exc:
                logger.warning("Manager name of %s unavailable: %s", employee_id, exc)
            else:
                manager_name = manager.name if manager else None
        return context.to_summary(manager_name=manager_name)
