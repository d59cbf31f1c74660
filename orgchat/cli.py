"""orgchat CLI: query messaging permissions against an org.yaml snapshot.

Usage:
    orgchat --org company/org.yaml can-message e-101 e-202
    orgchat --json contacts e-101
    orgchat chain e-101
    orgchat escalate e-101 --higher
    orgchat search ada --limit 5
    orgchat roster engineering
    orgchat hr
    orgchat status
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from orgchat.classification import RoleClass, classify_role
from orgchat.config import settings
from orgchat.directory.yaml_store import YamlDirectory
from orgchat.errors import OrgFileError
from orgchat.schemas import ChainEntry, ContactSet, EmployeeSummary
from orgchat.service import MessagingService

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DENIED = 1
EXIT_ORG_FILE = 2


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_dump(v) for v in value]
    return value


def _print_json(value: Any) -> None:
    print(json.dumps(_dump(value), ensure_ascii=False, indent=2))


def _format_person(p: EmployeeSummary) -> str:
    parts = [p.name, f"({p.id})"]
    if p.role_name:
        parts.append(f"- {p.role_name}")
    if p.department_name:
        parts.append(f"@ {p.department_name}")
    role_class = classify_role(p.role_name)
    if role_class != RoleClass.employee:
        parts.append(f"[{role_class}]")
    return " ".join(parts)


def _print_people(title: str, people: list[EmployeeSummary]) -> None:
    print(f"\n--- {title}: {len(people)} ---")
    for p in people:
        print(f"  {_format_person(p)}")


def _print_contacts(contacts: ContactSet) -> None:
    print("\n--- Manager ---")
    print(f"  {_format_person(contacts.manager)}" if contacts.manager else "  (none)")
    _print_people("Direct reports", contacts.subordinates)
    _print_people("Department", contacts.department_peers)
    _print_people("HR", contacts.hr_staff)
    print(f"\nTotal unique contacts: {contacts.total_unique}")


def _print_chain(chain: list[ChainEntry]) -> None:
    if not chain:
        print("(empty escalation chain)")
        return
    for entry in chain:
        tag = " [HR]" if entry.is_hr else ""
        role = f" - {entry.role_name}" if entry.role_name else ""
        print(f"  {entry.level}. {entry.name} ({entry.employee_id}){role}{tag}")


def show_status(directory: YamlDirectory) -> None:
    """Display org overview: departments, headcount and reporting lines."""
    company = directory.company.get("name", "?") if directory.company else "?"
    print(f"\n=== {company} ===\n")
    print("--- Departments ---")
    for dept in directory.list_departments():
        members = directory.list_department_members(dept.id)
        print(f"  {dept.name} ({dept.id}): {len(members)} active")

    print("\n--- Chain of Command ---")
    for dept in directory.list_departments():
        for member in directory.list_department_members(dept.id):
            reports_to = member.manager_name or "-"
            print(f"  {member.name} → reports to: {reports_to}")

    hr = directory.list_hr_staff()
    print(f"\n--- HR staff: {len(hr)} ---")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orgchat",
        description="Org-hierarchy messaging permissions",
    )
    parser.add_argument("--org", default=settings.org_file, help="Path to org.yaml")
    parser.add_argument("--json", action="store_true", help="Emit JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("can-message", help="Check whether SENDER may message RECIPIENT")
    p.add_argument("sender")
    p.add_argument("recipient")

    p = sub.add_parser("contacts", help="List who EMPLOYEE may message")
    p.add_argument("employee")

    p = sub.add_parser("chain", help="Escalation chain for EMPLOYEE")
    p.add_argument("employee")

    p = sub.add_parser("escalate", help="Who receives an escalation from EMPLOYEE")
    p.add_argument("employee")
    p.add_argument("--higher", action="store_true", help="Skip to the manager's manager")

    p = sub.add_parser("search", help="Search active employees by name")
    p.add_argument("query")
    p.add_argument("--limit", type=int, default=None)

    p = sub.add_parser("roster", help="Active members of matching departments")
    p.add_argument("department")

    sub.add_parser("hr", help="List HR staff")
    sub.add_parser("status", help="Org overview")
    return parser


def run(args: argparse.Namespace, directory: YamlDirectory) -> int:
    service = MessagingService(directory)

    if args.command == "can-message":
        decision = service.can_message(args.sender, args.recipient)
        if args.json:
            _print_json(decision)
        else:
            verdict = "ALLOWED" if decision.allowed else "DENIED"
            print(f"{verdict}: {decision.reason} [{decision.rule}]")
            if decision.suggestion:
                print(f"  {decision.suggestion}")
        return EXIT_OK if decision.allowed else EXIT_DENIED

    if args.command == "contacts":
        result = service.messageable_contacts(args.employee)
        if args.json:
            _print_json(result)
        else:
            _print_contacts(result)
        return EXIT_OK

    if args.command == "chain":
        chain = service.escalation_chain(args.employee)
        if args.json:
            _print_json(chain)
        else:
            _print_chain(chain)
        return EXIT_OK

    if args.command == "escalate":
        target = service.escalation_target(args.employee, escalate_higher=args.higher)
        if args.json:
            _print_json(target)
        elif target is None:
            print("No manager assigned; contact HR instead.")
        else:
            print(f"Level {target.level}: {_format_person(target.recipient)}")
        return EXIT_OK

    if args.command == "status":
        show_status(directory)
        return EXIT_OK

    if args.command == "search":
        people = service.search(args.query, limit=args.limit)
        title = f"Matches for {args.query!r}"
    elif args.command == "roster":
        people = service.department_roster(args.department)
        title = f"Department {args.department!r}"
    else:
        people = service.hr_staff()
        title = "HR staff"

    if args.json:
        _print_json(people)
    else:
        _print_people(title, people)
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        directory = YamlDirectory.from_file(args.org)
    except OrgFileError as exc:
        logger.error("%s", exc)
        print(f"Cannot load org file: {exc}", file=sys.stderr)
        return EXIT_ORG_FILE

    return run(args, directory)


if __name__ == "__main__":
    sys.exit(main())
