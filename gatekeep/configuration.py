"""
Configuration - the registration surface for resource types.

Usage:
    def configure(config: Configuration) -> None:
        config.register_resource("post", ["read", "write", "comment"], post_acl)
        config.register_resource("page", ["read"], page_acl)

    authz = gatekeep.authorizer(configure)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable

from gatekeep.core.authorizer import Authorizer
from gatekeep.core.protocols import AclProvider
from gatekeep.core.registration import ResourceRegistration

if TYPE_CHECKING:
    from gatekeep.config import Settings


class Configuration:
    """Collects resource registrations before an Authorizer is built."""

    def __init__(self):
        self._resources: list[ResourceRegistration] = []

    @property
    def resources(self) -> list[ResourceRegistration]:
        return list(self._resources)

    def register_resource(
        self,
        resource_type: Any,
        possible_actions: Iterable[Any],
        acl_provider: AclProvider,
    ) -> Configuration:
        """Register a resource type. Raises ConfigurationError if invalid."""
        self._resources.append(
            ResourceRegistration(resource_type, possible_actions, acl_provider)
        )
        return self

    def build(self, settings: Settings | None = None) -> Authorizer:
        """Build the Authorizer. Raises ConfigurationError on duplicate types."""
        return Authorizer(self._resources, settings=settings)


def authorizer(
    configure: Callable[[Configuration], Any],
    settings: Settings | None = None,
) -> Authorizer:
    """Create an Authorizer from a configure(config) callback."""
    config = Configuration()
    configure(config)
    return config.build(settings=settings)
