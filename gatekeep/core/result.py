"""
Authorization result - an immutable snapshot of one check.

Everything is captured when the result is built, so message() and
explain() stay accurate even if the subject or resource change later.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Collection, Hashable, Mapping

from gatekeep.core.acl import AccessList
from gatekeep.core.entry import normalize_action
from gatekeep.core.errors import UsageError
from gatekeep.core.registration import normalize_resource_type


def subject_sids(subject: Any, **context: Any) -> Collection[Hashable]:
    """
    Ask the subject for its SIDs, checking what comes back.

    Raises UsageError for a None subject, or if subject_sids() returns
    anything but a list, tuple, set or frozenset.
    """
    if subject is None:
        raise UsageError("Subject should not be None")

    sids = subject.subject_sids(**context)
    if not isinstance(sids, (list, tuple, set, frozenset)):
        raise UsageError(
            "Expected subject to respond to subject_sids() with list or set of SIDs "
            f"but got '{type(sids).__name__}'"
        )
    return sids


@dataclass(frozen=True, eq=False)
class AuthorizationResult:
    """
    Outcome of authorizing one action on one resource for one subject.

    Usage:
        result = authorizer.authorize(user, post, "read")
        result.success        # True
        print(result.explain())
    """

    subject: Any
    resource: Any
    action: str
    acl: AccessList
    context: Mapping[str, Any] = field(default_factory=dict)

    # Captured at construction
    subject_id: Any = field(init=False)
    subject_type: str | None = field(init=False)
    subject_sids: tuple = field(init=False)
    resource_id: Any = field(init=False)
    resource_type: str = field(init=False)
    success: bool = field(init=False)

    def __post_init__(self):
        sids = subject_sids(self.subject, **self.context)
        subject_type = self.subject.subject_type

        _set = object.__setattr__
        _set(self, "action", normalize_action(self.action))
        _set(self, "context", MappingProxyType(dict(self.context)))
        _set(self, "subject_sids", tuple(dict.fromkeys(sids)))
        _set(self, "subject_id", self.subject.subject_id)
        _set(self, "subject_type", None if subject_type is None else normalize_resource_type(subject_type))
        _set(self, "resource_id", self.resource.resource_id)
        _set(self, "resource_type", normalize_resource_type(self.resource.resource_type))
        _set(self, "success", self.acl.is_allowed(self.action, self.subject_sids))

    @property
    def failure(self) -> bool:
        return not self.success

    @property
    def allowed_actions(self) -> frozenset[str]:
        """Every action the captured SIDs may perform on this resource."""
        return self.acl.allowed_actions(self.subject_sids)

    @property
    def message(self) -> str:
        status = "SUCCESS" if self.success else "FAILURE"
        return (
            f"Authorization {status}. Subject '{self.subject_type}' id='{self.subject_id}'. "
            f"Resource '{self.resource_type}' id='{self.resource_id}'. Action '{self.action}'"
        )

    def explain(self) -> str:
        """Multi-line description of the decision, suitable for logs and audits."""
        sids_count = len(self.subject_sids) or "empty"
        acl_count = len(self.acl) or "empty"
        entries = "\n".join(f"    {entry}" for entry in self.acl)

        return (
            f"{self.message}\n"
            "\n"
            f"  Subject SIDs ({sids_count}):\n"
            f"    {list(self.subject_sids)}\n"
            "\n"
            "  Context:\n"
            f"    {dict(self.context)}\n"
            "\n"
            f"  Resource ACL ({acl_count}):\n"
            f"{entries}\n"
            "\n"
            f"Reason: {self.reason}\n"
        )

    @property
    def reason(self) -> str:
        if self.success:
            allowed = self._matching(self.acl.allowed_sids(self.action))
            return (
                f"subject SID(s) {allowed} allowed for '{self.action}' action. "
                "No SIDs denied among subject SIDs"
            )

        if self.acl.empty:
            return "resource ACL is empty, no actions allowed for any subject"
        if not self.subject_sids:
            return "subject SIDs are empty, no actions allowed for any resource"

        denied = self._matching(self.acl.denied_sids(self.action))
        if not denied:
            return (
                f"among {len(self.subject_sids)} subject SID(s), none is listed as allowed "
                f"for '{self.action}' action"
            )
        return (
            f"subject SID(s) {denied} denied for '{self.action}' action. "
            "Denied SIDs always win regardless of allowed SIDs"
        )

    def _matching(self, sids: frozenset) -> list:
        # subject order, for stable output
        return [sid for sid in self.subject_sids if sid in sids]

    def __str__(self) -> str:
        return self.message
