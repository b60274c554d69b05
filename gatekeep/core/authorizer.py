"""
Authorizer - ties subjects, resources and actions to ACL evaluation.

One check goes through these steps, each failing with its own error:

1. resource is not None and has a type
2. the type is registered
3. the action is possible for that type
4. the provider returns an AccessList
5. the subject is not None and returns a list/set of SIDs

Steps 1-5 raise UsageError. Only a negative decision raises
AuthorizationError (or returns False from is_authorized()).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable

from gatekeep.core.acl import AccessList
from gatekeep.core.entry import normalize_action
from gatekeep.core.errors import AuthorizationError, ConfigurationError, UsageError
from gatekeep.core.registration import ResourceRegistration, normalize_resource_type
from gatekeep.core.result import AuthorizationResult, subject_sids

if TYPE_CHECKING:
    from gatekeep.config import Settings

logger = logging.getLogger(__name__)


class Authorizer:
    """
    Authorization entry point.

    Holds the registrations by resource type; immutable after construction,
    so one instance can serve concurrent requests.

    Usage:
        authorizer = Authorizer([
            ResourceRegistration("post", ["read", "write"], post_acl),
        ])
        authorizer.authorize(current_user, post, "read")    # raises if denied
        authorizer.is_authorized(current_user, post, "write")  # True/False
    """

    def __init__(
        self,
        registrations: Iterable[ResourceRegistration],
        settings: Settings | None = None,
    ):
        if settings is None:
            from gatekeep.config import get_settings
            settings = get_settings()

        self.settings = settings
        self._resources = self._index(registrations)

        logger.debug(f"Authorizer ready with resource types: {sorted(self._resources)}")

    # =========================================================================
    # Checks
    # =========================================================================

    def authorize(self, subject: Any, resource: Any, action: Any, **context: Any) -> AuthorizationResult:
        """
        Authorize the action, raising AuthorizationError if it's not allowed.

        The error carries the full result, so callers can log
        error.explain() or inspect error.subject_sids.
        """
        result = self._authorization_result(subject, resource, action, context)
        if result.failure:
            if self.settings.explain_denials:
                logger.info(f"Authorization denied\n{result.explain()}")
            else:
                logger.info(result.message)
            raise AuthorizationError(result)
        return result

    def is_authorized(self, subject: Any, resource: Any, action: Any, **context: Any) -> bool:
        """Same as authorize() but returns False instead of raising on denial."""
        return self._authorization_result(subject, resource, action, context).success

    def allowed_actions(self, subject: Any, resource: Any, **context: Any) -> frozenset[str]:
        """Every action the subject may perform on the resource."""
        acl = self.resource_acl(resource, **context)
        sids = subject_sids(subject, **context)
        return acl.allowed_actions(sids)

    # =========================================================================
    # Registrations
    # =========================================================================

    def resource_registration(self, resource_type: Any) -> ResourceRegistration:
        """Get the registration for a type. Raises UsageError if unknown."""
        resource_type = normalize_resource_type(resource_type)
        if resource_type not in self._resources:
            raise UsageError(
                f"Unknown resource '{resource_type}'. Did you forget to register this resource type?"
            )
        return self._resources[resource_type]

    def has_resource_type(self, resource_type: Any) -> bool:
        return normalize_resource_type(resource_type) in self._resources

    @property
    def resource_types(self) -> list[str]:
        return list(self._resources)

    def resource_acl(self, resource: Any, **context: Any) -> AccessList:
        """Call the resource type's ACL provider and check what it returns."""
        registration = self._registration_for(resource)
        acl = registration.acl_provider(resource, **context)
        if not isinstance(acl, AccessList):
            raise UsageError(
                f"'{registration.resource_type}' resource acl_provider should return "
                f"an AccessList but got '{type(acl).__name__}'"
            )
        return acl

    # =========================================================================
    # Internal
    # =========================================================================

    @staticmethod
    def _index(registrations: Iterable[ResourceRegistration]) -> dict[str, ResourceRegistration]:
        by_type: dict[str, ResourceRegistration] = {}
        for registration in registrations:
            resource_type = registration.resource_type
            if resource_type in by_type:
                raise ConfigurationError(
                    f"'{resource_type}' resource registered multiple times. "
                    "Probably code copy-paste and a bug?"
                )
            by_type[resource_type] = registration
        return by_type

    def _registration_for(self, resource: Any) -> ResourceRegistration:
        if resource is None:
            raise UsageError("Resource should not be None")

        resource_type = getattr(resource, "resource_type", None)
        if resource_type is None:
            raise UsageError("Resource should have a non-None resource_type")

        return self.resource_registration(resource_type)

    def _authorization_result(
        self,
        subject: Any,
        resource: Any,
        action: Any,
        context: dict[str, Any],
    ) -> AuthorizationResult:
        action = normalize_action(action)
        registration = self._registration_for(resource)
        if not registration.has_action(action):
            raise UsageError(
                f"'{action}' action is not registered as possible for "
                f"'{registration.resource_type}' resource"
            )

        acl = self.resource_acl(resource, **context)
        result = AuthorizationResult(subject, resource, action, acl, context)

        logger.debug(result.message)
        return result
