"""
Error taxonomy for the authorization engine.

Three kinds of failure:
- ConfigurationError: raised while wiring resource types, fatal at setup
- UsageError: raised per call when a caller passes something invalid
- AuthorizationError: the expected "no" answer, carries the full result
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from gatekeep.core.acl import AccessList
    from gatekeep.core.result import AuthorizationResult


class GatekeepError(Exception):
    """Base class for every error raised by gatekeep."""

    def explain(self) -> str:
        """Human-readable diagnostics. Same as the message unless overridden."""
        return str(self)


class ConfigurationError(GatekeepError):
    """Invalid resource registration (duplicate type, bad actions, no provider)."""


class UsageError(GatekeepError):
    """Invalid call: nil subject/resource, unknown type or action, bad provider output."""


class AuthorizationError(GatekeepError):
    """
    Raised by Authorizer.authorize() when the action is not allowed.

    Exposes everything captured in the result so callers can log or
    render a denial without going back to the subject or resource.
    """

    def __init__(self, result: AuthorizationResult):
        self.result = result
        super().__init__(result.message)

    @property
    def subject(self) -> Any:
        return self.result.subject

    @property
    def subject_type(self) -> str | None:
        return self.result.subject_type

    @property
    def subject_id(self) -> Any:
        return self.result.subject_id

    @property
    def subject_sids(self) -> tuple:
        return self.result.subject_sids

    @property
    def resource(self) -> Any:
        return self.result.resource

    @property
    def resource_type(self) -> str:
        return self.result.resource_type

    @property
    def resource_id(self) -> Any:
        return self.result.resource_id

    @property
    def action(self) -> str:
        return self.result.action

    @property
    def acl(self) -> AccessList:
        return self.result.acl

    @property
    def context(self) -> Mapping[str, Any]:
        return self.result.context

    def explain(self) -> str:
        return self.result.explain()
