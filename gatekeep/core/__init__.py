"""
Core module - ACL data structures and the authorization pipeline.

This module contains:
- entry: Entry (a single allow/deny fact)
- acl: AccessList, EntryListBuilder
- registration: ResourceRegistration
- result: AuthorizationResult
- authorizer: Authorizer
- errors: error taxonomy
"""

from gatekeep.core.entry import Entry, normalize_action
from gatekeep.core.acl import AccessList, EntryListBuilder, EMPTY_ACL
from gatekeep.core.registration import ResourceRegistration, normalize_resource_type
from gatekeep.core.result import AuthorizationResult, subject_sids
from gatekeep.core.authorizer import Authorizer
from gatekeep.core.protocols import AclProvider, Resource, Subject
from gatekeep.core.errors import (
    GatekeepError,
    ConfigurationError,
    UsageError,
    AuthorizationError,
)

__all__ = [
    # ACL
    "Entry",
    "AccessList",
    "EntryListBuilder",
    "EMPTY_ACL",
    "normalize_action",
    # Registration
    "ResourceRegistration",
    "normalize_resource_type",
    # Authorization
    "Authorizer",
    "AuthorizationResult",
    "subject_sids",
    # Protocols
    "Subject",
    "Resource",
    "AclProvider",
    # Errors
    "GatekeepError",
    "ConfigurationError",
    "UsageError",
    "AuthorizationError",
]
