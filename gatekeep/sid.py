"""
SID naming helpers.

Optional conventions for building Security Identifiers. The core treats
SIDs as opaque values, these just keep naming consistent across an app.
"""

from __future__ import annotations

from typing import Any

ANONYMOUS = "anonymous"
AUTHENTICATED = "authenticated"
ROOT = "root"


def anonymous_sid() -> str:
    """SID for subjects that are not logged in."""
    return ANONYMOUS


def authenticated_sid() -> str:
    """SID for any logged-in subject."""
    return AUTHENTICATED


def root_sid() -> str:
    """SID for superusers."""
    return ROOT


def user_sid(user_id: Any) -> str:
    return f"user:{user_id}"


def role_sid(role_id: Any) -> str:
    return f"role:{role_id}"


def organization_sid(organization_id: Any) -> str:
    return f"org:{organization_id}"
