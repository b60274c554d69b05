"""
Resource registration - binds a resource type to its actions and ACL provider.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable

from gatekeep.core.entry import normalize_action
from gatekeep.core.errors import ConfigurationError
from gatekeep.core.protocols import AclProvider


def normalize_resource_type(resource_type: Any) -> str:
    """Same normalization as actions: string enums collapse to their value."""
    return normalize_action(resource_type)


@dataclass(frozen=True)
class ResourceRegistration:
    """
    One registered resource type.

    possible_actions must be non-empty and free of duplicates, and a
    provider is required. Violations raise ConfigurationError.
    """

    resource_type: str
    possible_actions: frozenset[str] = field(repr=False)
    acl_provider: AclProvider = field(repr=False, compare=False)

    def __init__(self, resource_type: Any, possible_actions: Iterable[Any], acl_provider: AclProvider):
        resource_type = normalize_resource_type(resource_type)
        object.__setattr__(self, "resource_type", resource_type)
        object.__setattr__(
            self, "possible_actions", _action_set(resource_type, possible_actions)
        )
        if acl_provider is None:
            raise ConfigurationError(f"'{resource_type}' resource acl_provider should not be None")
        if not callable(acl_provider):
            raise ConfigurationError(
                f"'{resource_type}' resource acl_provider should be callable "
                f"but got '{type(acl_provider).__name__}'"
            )
        object.__setattr__(self, "acl_provider", acl_provider)

    def has_action(self, action: Any) -> bool:
        return normalize_action(action) in self.possible_actions


def _action_set(resource_type: str, possible_actions: Iterable[Any]) -> frozenset[str]:
    actions = [normalize_action(action) for action in possible_actions]
    if not actions:
        raise ConfigurationError(
            f"Empty possible actions for '{resource_type}' resource. Probably a bug?"
        )

    counts = Counter(actions)
    duplicates = [action for action, count in counts.items() if count > 1]
    if duplicates:
        raise ConfigurationError(
            f"{duplicates} possible actions for '{resource_type}' resource are specified "
            "several times. Probably code copy-paste and a bug?"
        )
    return frozenset(actions)
