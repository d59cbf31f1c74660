"""Directory gateway backed by an org.yaml snapshot file.

Expected layout::

    company:
      name: Acme
    departments:
      - {id: eng, name: Engineering}
    roles:
      - {id: engineer, name: Engineer}
    employees:
      - id: e1
        name: Ada
        email: ada@acme.test
        department_id: eng
        role_id: engineer
        manager_id: e2
        status: active
        job_title: Backend Engineer
        hire_date: 2021-03-01
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from orgchat.directory.memory import InMemoryDirectory
from orgchat.errors import OrgFileError
from orgchat.schemas import Department, Employee, Role

logger = logging.getLogger(__name__)

_ID_FIELDS = ("id", "department_id", "role_id", "manager_id")


class OrgFile(BaseModel):
    company: dict[str, Any] = Field(default_factory=dict)
    departments: list[Department] = Field(default_factory=list)
    roles: list[Role] = Field(default_factory=list)
    employees: list[Employee] = Field(default_factory=list)


def _stringify_ids(records: list[Any]) -> list[Any]:
    """YAML turns bare numeric ids into ints; ids are strings everywhere else."""
    out = []
    for rec in records:
        if isinstance(rec, dict):
            rec = {
                k: (str(v) if k in _ID_FIELDS and isinstance(v, int) else v)
                for k, v in rec.items()
            }
        out.append(rec)
    return out


def load_org(path: str | Path) -> OrgFile:
    """Read and validate an org file."""
    p = Path(path)
    try:
        with open(p, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except OSError as exc:
        raise OrgFileError(str(p), f"cannot read file ({exc})") from exc
    except yaml.YAMLError as exc:
        raise OrgFileError(str(p), f"invalid YAML ({exc})") from exc

    if not isinstance(raw, dict):
        raise OrgFileError(str(p), "top level must be a mapping")

    for key in ("departments", "roles", "employees"):
        section = raw.get(key) or []
        if not isinstance(section, list):
            raise OrgFileError(str(p), f"'{key}' must be a list")
        raw[key] = _stringify_ids(section)

    try:
        return OrgFile.model_validate(raw)
    except ValidationError as exc:
        raise OrgFileError(str(p), f"invalid org data ({exc.error_count()} errors)") from exc


class YamlDirectory(InMemoryDirectory):
    """In-memory directory loaded once from an org.yaml file."""

    def __init__(self, org: OrgFile, source: str | None = None) -> None:
        super().__init__(org.employees, org.departments, org.roles)
        self.company = org.company
        self.source = source

    @classmethod
    def from_file(cls, path: str | Path) -> YamlDirectory:
        org = load_org(path)
        logger.info(
            "Loaded org file %s: %d employees, %d departments, %d roles",
            path,
            len(org.employees),
            len(org.departments),
            len(org.roles),
        )
        return cls(org, source=str(path))
