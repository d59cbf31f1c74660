"""
Messaging permission resolver: who may initiate a message to whom.

Rule cascade (first match wins, order is policy precedence):

    1. self-message              → deny
    2. sender is admin / HR role → allow (may message anyone)
    3. recipient is own manager  → allow
    4. recipient works in HR     → allow (HR is always reachable)
    5. same department           → allow
    6. recipient is direct report→ allow
    7. leadership to leadership  → allow (heads/directors ↔ heads/directors/admin)
    8. manager to manager        → allow (both have direct reports)
    9. anything else             → deny

The resolver is a pure function of two hydrated snapshots.  Missing input
denies rather than raises.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from orgchat.schemas import Decision, EmployeeContext, Rule

logger = logging.getLogger(__name__)

DEFAULT_DENY_REASON = (
    "You can only message your manager, HR, or colleagues in your department. "
    "Ask your manager to forward if needed."
)
DEFAULT_DENY_SUGGESTION = (
    "To contact someone outside your department, please ask your manager or HR to facilitate."
)


# --------------------------------------------------------------------------
# Rule predicates: (sender, recipient) → bool
# --------------------------------------------------------------------------

def _is_self(sender: EmployeeContext, recipient: EmployeeContext) -> bool:
    return sender.id == recipient.id


def _sender_is_admin_or_hr(sender: EmployeeContext, recipient: EmployeeContext) -> bool:
    return sender.capabilities.can_message_anyone


def _recipient_is_own_manager(sender: EmployeeContext, recipient: EmployeeContext) -> bool:
    return sender.manager_id is not None and sender.manager_id == recipient.id


def _recipient_in_hr(sender: EmployeeContext, recipient: EmployeeContext) -> bool:
    return recipient.capabilities.is_hr_department


def _same_department(sender: EmployeeContext, recipient: EmployeeContext) -> bool:
    # Two employees without a department do not share one
    return sender.department_id is not None and sender.department_id == recipient.department_id


def _recipient_is_direct_report(sender: EmployeeContext, recipient: EmployeeContext) -> bool:
    return recipient.id in sender.subordinate_ids


def _leadership_peers(sender: EmployeeContext, recipient: EmployeeContext) -> bool:
    return sender.capabilities.is_leadership and recipient.capabilities.is_leadership_contact


def _both_people_managers(sender: EmployeeContext, recipient: EmployeeContext) -> bool:
    return sender.is_people_manager and recipient.is_people_manager


@dataclass(frozen=True)
class CascadeRule:
    rule: Rule
    allowed: bool
    reason: str
    applies: Callable[[EmployeeContext, EmployeeContext], bool]


MESSAGE_RULES: tuple[CascadeRule, ...] = (
    CascadeRule(Rule.self_message, False, "Cannot message yourself", _is_self),
    CascadeRule(Rule.admin_hr_override, True, "Admin/HR can message anyone", _sender_is_admin_or_hr),
    CascadeRule(Rule.own_manager, True, "Messaging direct manager", _recipient_is_own_manager),
    CascadeRule(Rule.hr_recipient, True, "HR is always accessible", _recipient_in_hr),
    CascadeRule(Rule.same_department, True, "Same department colleague", _same_department),
    CascadeRule(Rule.direct_report, True, "Direct report", _recipient_is_direct_report),
    CascadeRule(Rule.leadership_peer, True, "Leadership communication", _leadership_peers),
    CascadeRule(
        Rule.manager_to_manager, True, "Manager-to-manager communication", _both_people_managers
    ),
)


# --------------------------------------------------------------------------
# Public API
# --------------------------------------------------------------------------

def not_found(party: str) -> Decision:
    """Denial for a sender or recipient the directory does not know."""
    return Decision(allowed=False, reason=f"{party} not found", rule=Rule.not_found)


def can_message(
    sender: EmployeeContext | None,
    recipient: EmployeeContext | None,
) -> Decision:
    """
    Decide whether ``sender`` may initiate a message to ``recipient``.

    Args:
        sender: hydrated sender snapshot, or None if the lookup found nothing
        recipient: hydrated recipient snapshot, or None

    Returns:
        Decision carrying the outcome, a user-facing reason and the rule
        that decided it
    """
    if sender is None:
        return not_found("Sender")
    if recipient is None:
        return not_found("Recipient")

    for entry in MESSAGE_RULES:
        if entry.applies(sender, recipient):
            logger.debug(
                "can_message %s → %s: %s (%s)",
                sender.id, recipient.id, "allow" if entry.allowed else "deny", entry.rule,
            )
            return Decision(allowed=entry.allowed, reason=entry.reason, rule=entry.rule)

    logger.debug("can_message %s → %s: deny (no rule matched)", sender.id, recipient.id)
    return Decision(
        allowed=False,
        reason=DEFAULT_DENY_REASON,
        rule=Rule.permission_denied,
        suggestion=DEFAULT_DENY_SUGGESTION,
    )


def can_announce(employee: EmployeeContext | None) -> Decision:
    """Only people-managers and admins may broadcast to their department."""
    if employee is None:
        return not_found("Employee")
    if employee.is_people_manager:
        return Decision(
            allowed=True, reason="Managers can send team announcements", rule=Rule.people_manager
        )
    if employee.capabilities.is_admin:
        return Decision(
            allowed=True, reason="Admins can send team announcements", rule=Rule.admin_override
        )
    return Decision(
        allowed=False,
        reason="Only managers can send team announcements",
        rule=Rule.permission_denied,
        suggestion="Ask your manager to send announcements on your behalf",
    )
