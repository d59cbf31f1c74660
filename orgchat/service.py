"""
Id-based messaging authorization service.

Wraps the pure resolvers behind the id-keyed interface the chat feature
consumes.  Each public call hydrates its inputs through a fresh
``CachingDirectory`` so one call never reads the same employee twice and no
state survives between calls.
"""
from __future__ import annotations

import logging

from orgchat import contacts, escalation, permissions, queries
from orgchat.directory.base import DirectoryGateway
from orgchat.directory.cache import CachingDirectory
from orgchat.errors import DirectoryUnavailable
from orgchat.schemas import (
    ChainEntry,
    ContactSet,
    Decision,
    EmployeeSummary,
    EscalationTarget,
    Rule,
)

logger = logging.getLogger(__name__)

CHECK_FAILED_REASON = "Permission check failed"


class MessagingService:
    """Produced interface over a directory gateway."""

    def __init__(self, directory: DirectoryGateway) -> None:
        self.directory = directory

    def _scope(self) -> CachingDirectory:
        return CachingDirectory(self.directory)

    # ------------------------------------------------------------------
    # Permission checks
    # ------------------------------------------------------------------

    def can_message(self, sender_id: str, recipient_id: str) -> Decision:
        """Fail-closed permission check between two employee ids."""
        directory = self._scope()
        try:
            sender = directory.get_employee(sender_id)
            recipient = directory.get_employee(recipient_id)
        except DirectoryUnavailable as exc:
            logger.error("Permission check %s → %s failed: %s", sender_id, recipient_id, exc)
            return Decision(
                allowed=False, reason=CHECK_FAILED_REASON, rule=Rule.directory_unavailable
            )

        decision = permissions.can_message(sender, recipient)
        if not decision.allowed:
            logger.warning(
                "[MESSAGE DENIED] %s → %s | rule=%s | reason: %s",
                sender_id, recipient_id, decision.rule, decision.reason,
            )
        return decision

    def can_announce(self, employee_id: str) -> Decision:
        try:
            employee = self._scope().get_employee(employee_id)
        except DirectoryUnavailable as exc:
            logger.error("Announcement check for %s failed: %s", employee_id, exc)
            return Decision(
                allowed=False, reason=CHECK_FAILED_REASON, rule=Rule.directory_unavailable
            )
        return permissions.can_announce(employee)

    def announcement_recipients(self, employee_id: str) -> list[EmployeeSummary]:
        """Recipients of a department announcement; empty when not permitted."""
        directory = self._scope()
        try:
            employee = directory.get_employee(employee_id)
        except DirectoryUnavailable as exc:
            logger.warning("Announcement lookup for %s failed: %s", employee_id, exc)
            return []
        if not permissions.can_announce(employee).allowed:
            return []
        return queries.announcement_recipients(employee, directory)

    # ------------------------------------------------------------------
    # Contact set & escalation
    # ------------------------------------------------------------------

    def messageable_contacts(self, employee_id: str) -> ContactSet:
        directory = self._scope()
        try:
            employee = directory.get_employee(employee_id)
        except DirectoryUnavailable as exc:
            logger.warning("Contact set for %s unavailable: %s", employee_id, exc)
            return ContactSet()
        return contacts.messageable_contacts(employee, directory)

    def escalation_chain(self, employee_id: str) -> list[ChainEntry]:
        return escalation.escalation_chain(employee_id, self._scope())

    def escalation_target(
        self, employee_id: str, escalate_higher: bool = False
    ) -> EscalationTarget | None:
        return escalation.escalation_target(employee_id, self._scope(), escalate_higher)

    # ------------------------------------------------------------------
    # Directory queries
    # ------------------------------------------------------------------

    def search(self, query: str, limit: int | None = None) -> list[EmployeeSummary]:
        return queries.search_employees(self.directory, query, limit)

    def department_roster(self, department_name: str) -> list[EmployeeSummary]:
        return queries.department_roster(self.directory, department_name)

    def hr_staff(self) -> list[EmployeeSummary]:
        return queries.hr_staff(self.directory)

    def primary_hr_contact(self) -> EmployeeSummary | None:
        return queries.primary_hr_contact(self.directory)
