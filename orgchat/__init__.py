"""orgchat: organizational-hierarchy messaging authorization."""

from orgchat.contacts import messageable_contacts
from orgchat.escalation import escalation_chain, escalation_target
from orgchat.permissions import can_announce, can_message
from orgchat.schemas import (
    ChainEntry,
    ContactSet,
    Decision,
    Department,
    Employee,
    EmployeeContext,
    EmployeeStatus,
    EmployeeSummary,
    EscalationTarget,
    Role,
    Rule,
)
from orgchat.service import MessagingService

__version__ = "0.1.0"

__all__ = [
    "ChainEntry",
    "ContactSet",
    "Decision",
    "Department",
    "Employee",
    "EmployeeContext",
    "EmployeeStatus",
    "EmployeeSummary",
    "EscalationTarget",
    "MessagingService",
    "Role",
    "Rule",
    "can_announce",
    "can_message",
    "escalation_chain",
    "escalation_target",
    "messageable_contacts",
]
