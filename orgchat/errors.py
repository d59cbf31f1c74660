"""
Exception taxonomy for the directory boundary.

Expected outcomes of a permission check (unknown employee, self-message,
denial) are never raised; they travel as ``Decision.rule`` values.  Only
failures of the directory backend are exceptions, and the core turns those
into partial results or fail-closed denials.
"""
from __future__ import annotations


class OrgChatError(Exception):
    """Base class for all orgchat errors."""


class DirectoryError(OrgChatError):
    """A directory gateway could not answer a lookup."""


class DirectoryUnavailable(DirectoryError):
    """The directory backend failed while serving a lookup."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        self.detail = detail
        msg = f"[DIRECTORY UNAVAILABLE] operation={operation!r}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class OrgFileError(DirectoryUnavailable):
    """An org file could not be read or does not describe a valid org."""

    def __init__(self, path: str, detail: str = "") -> None:
        self.path = path
        super().__init__("load_org", f"{path}: {detail}" if detail else path)
