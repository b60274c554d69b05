"""
Access Control Entry - the smallest unit of an ACL.

An entry says whether one SID may perform one action.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable


def normalize_action(action: Any) -> str:
    """
    Map an action name to its canonical key.

    String enums collapse to their value, so Action.READ and "read"
    are the same action.
    """
    if isinstance(action, Enum):
        return str(action.value)
    return str(action)


@dataclass(frozen=True)
class Entry:
    """
    A single (sid, action, allow) fact.

    The SID is typically a string like "role:admin", but any hashable
    value with sane equality works.
    """

    sid: Hashable
    action: str
    allow: bool

    def __post_init__(self):
        object.__setattr__(self, "action", normalize_action(self.action))
        object.__setattr__(self, "allow", bool(self.allow))

    @property
    def deny(self) -> bool:
        return not self.allow

    def to_dict(self) -> dict[str, Any]:
        return {"sid": self.sid, "action": self.action, "allow": self.allow}

    def __str__(self) -> str:
        return str(self.to_dict())
