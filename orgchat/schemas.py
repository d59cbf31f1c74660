"""Snapshot and result schemas for the messaging-authorization engine."""

from __future__ import annotations

from datetime import date
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from orgchat.classification import Capabilities

# --- Directory records ---


class EmployeeStatus(StrEnum):
    active = "active"
    inactive = "inactive"


class Department(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""


class Role(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""


class Employee(BaseModel):
    """Raw employee record as stored by the directory."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str = ""
    department_id: str | None = None
    role_id: str | None = None
    manager_id: str | None = None  # back-reference, not ownership
    status: EmployeeStatus = EmployeeStatus.active
    job_title: str | None = None
    hire_date: date | None = None


class EmployeeSummary(BaseModel):
    """Display projection returned by listings and contact sets."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str = ""
    job_title: str | None = None
    department_name: str | None = None
    role_name: str | None = None
    manager_name: str | None = None
    is_hr: bool = False
    hire_date: date | None = None


class EmployeeContext(BaseModel):
    """
    Fully hydrated employee snapshot consumed by the resolver.

    ``capabilities`` is resolved from the role and department names when the
    caller does not supply it, so a context built by hand classifies the same
    way as one produced by a directory.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    email: str = ""
    department_id: str | None = None
    department: Department | None = None
    role: Role | None = None
    manager_id: str | None = None
    status: EmployeeStatus = EmployeeStatus.active
    job_title: str | None = None
    hire_date: date | None = None
    subordinate_ids: tuple[str, ...] = ()
    capabilities: Capabilities = Field(default_factory=Capabilities)

    @model_validator(mode="before")
    @classmethod
    def _resolve_capabilities(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("capabilities") is not None:
            return data
        role = data.get("role")
        department = data.get("department")
        role_name = role.get("name") if isinstance(role, dict) else getattr(role, "name", None)
        dept_name = (
            department.get("name")
            if isinstance(department, dict)
            else getattr(department, "name", None)
        )
        return {**data, "capabilities": Capabilities.resolve(role_name, dept_name)}

    @property
    def role_name(self) -> str | None:
        return self.role.name if self.role else None

    @property
    def department_name(self) -> str | None:
        return self.department.name if self.department else None

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.active

    @property
    def is_hr(self) -> bool:
        """HR is identified structurally, by department."""
        return self.capabilities.is_hr_department

    @property
    def is_people_manager(self) -> bool:
        return len(self.subordinate_ids) > 0

    def to_summary(self, manager_name: str | None = None) -> EmployeeSummary:
        return EmployeeSummary(
            id=self.id,
            name=self.name,
            email=self.email,
            job_title=self.job_title,
            department_name=self.department_name,
            role_name=self.role_name,
            manager_name=manager_name,
            is_hr=self.is_hr,
            hire_date=self.hire_date,
        )


# --- Permission decisions ---


class Rule(StrEnum):
    """Which cascade rule (or error condition) decided a permission check."""

    not_found = "not_found"
    self_message = "self_message"
    admin_hr_override = "admin_hr_override"
    own_manager = "own_manager"
    hr_recipient = "hr_recipient"
    same_department = "same_department"
    direct_report = "direct_report"
    leadership_peer = "leadership_peer"
    manager_to_manager = "manager_to_manager"
    permission_denied = "permission_denied"
    directory_unavailable = "directory_unavailable"
    # department announcements
    people_manager = "people_manager"
    admin_override = "admin_override"


class Decision(BaseModel):
    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: str
    rule: Rule
    suggestion: str | None = None


# --- Contact sets & escalation ---


class ContactSet(BaseModel):
    manager: EmployeeSummary | None = None
    subordinates: list[EmployeeSummary] = Field(default_factory=list)
    department_peers: list[EmployeeSummary] = Field(default_factory=list)
    hr_staff: list[EmployeeSummary] = Field(default_factory=list)
    total_unique: int = 0

    def contact_ids(self) -> set[str]:
        ids: set[str] = set()
        if self.manager is not None:
            ids.add(self.manager.id)
        for group in (self.subordinates, self.department_peers, self.hr_staff):
            ids.update(e.id for e in group)
        return ids


class ChainEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: int
    employee_id: str
    name: str
    email: str = ""
    role_name: str | None = None
    department_name: str | None = None
    is_hr: bool = False


class EscalationTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: int
    recipient: EmployeeSummary
