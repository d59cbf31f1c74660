"""Shared fixtures: a small synthetic company and directory helpers."""
from __future__ import annotations

import copy
from datetime import date
from pathlib import Path

import pytest
import yaml

from orgchat.directory.memory import InMemoryDirectory
from orgchat.directory.yaml_store import OrgFile
from orgchat.errors import DirectoryUnavailable
from orgchat.schemas import Department, Employee, Role
from orgchat.service import MessagingService

# --------------------------------------------------------------------------
# Acme org chart
#
#   cora (Chief Executive, Operations)
#   ├── adam   (Admin, Operations)
#   ├── dana   (Director, Engineering)
#   │   └── mark (Engineering Manager, Engineering)
#   │       ├── xavier (Engineer)
#   │       ├── erin   (Engineer)
#   │       └── ian    (Engineer, inactive)
#   ├── zed    (Director, Sales)
#   │   └── sam (Sales Representative)
#   ├── wendy  (Director, Marketing)
#   │   └── mia (Marketing Lead)
#   │       └── jack (Marketing Associate)
#   └── hannah (HR Manager, Human Resources)
#       └── yasmin (HR Specialist)
# --------------------------------------------------------------------------

ACME_ORG: dict = {
    "company": {"name": "Acme"},
    "departments": [
        {"id": "ops", "name": "Operations"},
        {"id": "eng", "name": "Engineering"},
        {"id": "sales", "name": "Sales"},
        {"id": "mkt", "name": "Marketing"},
        {"id": "hr", "name": "Human Resources"},
    ],
    "roles": [
        {"id": "ceo", "name": "Chief Executive"},
        {"id": "admin", "name": "Admin"},
        {"id": "director", "name": "Director"},
        {"id": "eng-manager", "name": "Engineering Manager"},
        {"id": "engineer", "name": "Engineer"},
        {"id": "sales-rep", "name": "Sales Representative"},
        {"id": "mkt-lead", "name": "Marketing Lead"},
        {"id": "mkt-assoc", "name": "Marketing Associate"},
        {"id": "hr-manager", "name": "HR Manager"},
        {"id": "hr-specialist", "name": "HR Specialist"},
    ],
    "employees": [
        {"id": "cora", "name": "Cora Chief", "department_id": "ops", "role_id": "ceo"},
        {"id": "adam", "name": "Adam Admin", "department_id": "ops", "role_id": "admin",
         "manager_id": "cora"},
        {"id": "dana", "name": "Dana Director", "department_id": "eng", "role_id": "director",
         "manager_id": "cora"},
        {"id": "mark", "name": "Mark Manager", "department_id": "eng",
         "role_id": "eng-manager", "manager_id": "dana"},
        {"id": "xavier", "name": "Xavier Engineer", "department_id": "eng",
         "role_id": "engineer", "manager_id": "mark", "email": "xavier@acme.test"},
        {"id": "erin", "name": "Erin Engineer", "department_id": "eng", "role_id": "engineer",
         "manager_id": "mark"},
        {"id": "ian", "name": "Ian Inactive", "department_id": "eng", "role_id": "engineer",
         "manager_id": "mark", "status": "inactive"},
        {"id": "zed", "name": "Zed Director", "department_id": "sales", "role_id": "director",
         "manager_id": "cora"},
        {"id": "sam", "name": "Sam Seller", "department_id": "sales", "role_id": "sales-rep",
         "manager_id": "zed"},
        {"id": "wendy", "name": "Wendy Director", "department_id": "mkt",
         "role_id": "director", "manager_id": "cora"},
        {"id": "mia", "name": "Mia Marketer", "department_id": "mkt", "role_id": "mkt-lead",
         "manager_id": "wendy"},
        {"id": "jack", "name": "Jack Junior", "department_id": "mkt", "role_id": "mkt-assoc",
         "manager_id": "mia"},
        {"id": "hannah", "name": "Hannah Hart", "department_id": "hr", "role_id": "hr-manager",
         "manager_id": "cora", "hire_date": date(2015, 4, 1)},
        {"id": "yasmin", "name": "Yasmin Young", "department_id": "hr",
         "role_id": "hr-specialist", "manager_id": "hannah", "hire_date": date(2019, 9, 1)},
    ],
}

ALL_IDS = [e["id"] for e in ACME_ORG["employees"]]
HR_IDS = ["hannah", "yasmin"]


def build_directory(
    employees: list[dict],
    departments: list[dict] | None = None,
    roles: list[dict] | None = None,
) -> InMemoryDirectory:
    """Directory from plain dicts, reusing Acme's departments and roles by default."""
    return InMemoryDirectory(
        [Employee(**e) for e in employees],
        [Department(**d) for d in (departments or ACME_ORG["departments"])],
        [Role(**r) for r in (roles or ACME_ORG["roles"])],
    )


class FlakyDirectory(InMemoryDirectory):
    """In-memory directory whose named operations raise DirectoryUnavailable."""

    def __init__(self, *args, failing: set[str] = frozenset(), fail_ids: set[str] = frozenset(),
                 **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.failing = set(failing)
        self.fail_ids = set(fail_ids)

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise DirectoryUnavailable(operation, "simulated outage")

    def get_employee(self, employee_id):
        self._check("get_employee")
        if employee_id in self.fail_ids:
            raise DirectoryUnavailable("get_employee", f"simulated outage for {employee_id}")
        return super().get_employee(employee_id)

    def list_department_members(self, department_id, exclude_id=None):
        self._check("list_department_members")
        return super().list_department_members(department_id, exclude_id)

    def list_hr_staff(self):
        self._check("list_hr_staff")
        return super().list_hr_staff()

    def search_by_name(self, query, limit=10):
        self._check("search_by_name")
        return super().search_by_name(query, limit)

    def list_subordinates(self, employee_id):
        self._check("list_subordinates")
        return super().list_subordinates(employee_id)

    def list_departments(self):
        self._check("list_departments")
        return super().list_departments()


# --------------------------------------------------------------------------
# Fixtures
# --------------------------------------------------------------------------

@pytest.fixture
def acme_org() -> dict:
    """A deep copy of the Acme org, safe to mutate per test."""
    return copy.deepcopy(ACME_ORG)


@pytest.fixture
def directory(acme_org) -> InMemoryDirectory:
    org = OrgFile.model_validate(acme_org)
    return InMemoryDirectory(org.employees, org.departments, org.roles)


@pytest.fixture
def service(directory) -> MessagingService:
    return MessagingService(directory)


@pytest.fixture
def ctx(directory):
    """Look up a hydrated context by id; fails the test on unknown ids."""
    def _get(employee_id: str):
        context = directory.get_employee(employee_id)
        assert context is not None, f"unknown fixture employee {employee_id!r}"
        return context
    return _get


@pytest.fixture
def flaky_factory(acme_org):
    """Build an Acme FlakyDirectory with the given failing operations."""
    def _make(failing: set[str] = frozenset(), fail_ids: set[str] = frozenset()) -> FlakyDirectory:
        org = OrgFile.model_validate(acme_org)
        return FlakyDirectory(
            org.employees, org.departments, org.roles, failing=failing, fail_ids=fail_ids
        )
    return _make


@pytest.fixture
def org_file(tmp_path, acme_org) -> Path:
    path = tmp_path / "org.yaml"
    path.write_text(yaml.safe_dump(acme_org, sort_keys=False), encoding="utf-8")
    return path
