"""
gatekeep - embeddable ACL authorization engine.

Design principles:
1. ACLs are immutable values, decisions are set intersections
2. Denied SIDs always win over allowed SIDs
3. Framework-agnostic: subjects, resources and ACL storage belong to the app
4. Every decision is explainable
"""

from gatekeep import sid
from gatekeep.core import (
    AccessList,
    EntryListBuilder,
    Entry,
    EMPTY_ACL,
    Authorizer,
    AuthorizationResult,
    ResourceRegistration,
    Subject,
    Resource,
    AclProvider,
    GatekeepError,
    ConfigurationError,
    UsageError,
    AuthorizationError,
)
from gatekeep.configuration import Configuration, authorizer
from gatekeep.config_loader import ConfigLoader, load_authorizer

__version__ = "0.1.0"

__all__ = [
    # Main interface
    "authorizer",
    "Authorizer",
    "Configuration",
    "AuthorizationResult",
    "ResourceRegistration",
    # ACL
    "AccessList",
    "EntryListBuilder",
    "Entry",
    "EMPTY_ACL",
    # Protocols
    "Subject",
    "Resource",
    "AclProvider",
    # Errors
    "GatekeepError",
    "ConfigurationError",
    "UsageError",
    "AuthorizationError",
    # Loading
    "ConfigLoader",
    "load_authorizer",
    # Helpers
    "sid",
]
