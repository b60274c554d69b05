"""
Structural contracts for the objects the authorizer works with.

gatekeep never loads subjects or resources itself. Anything with the
right attributes works, ORM models and plain dataclasses alike.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Collection, Hashable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gatekeep.core.acl import AccessList


@runtime_checkable
class Subject(Protocol):
    """
    The actor requesting an action.

    Example:
        @dataclass
        class User:
            id: str
            roles: list[str]

            subject_type = "user"

            @property
            def subject_id(self):
                return self.id

            def subject_sids(self, **context):
                return [sid.authenticated_sid(), sid.user_sid(self.id)]
    """

    @property
    def subject_id(self) -> Any: ...

    @property
    def subject_type(self) -> Any: ...

    def subject_sids(self, **context: Any) -> Collection[Hashable]: ...


@runtime_checkable
class Resource(Protocol):
    """The object an action is requested against."""

    @property
    def resource_type(self) -> Any: ...

    @property
    def resource_id(self) -> Any: ...


class AclProvider(Protocol):
    """Returns the ACL for a resource. May hit a database, gatekeep doesn't care."""

    def __call__(self, resource: Any, **context: Any) -> AccessList: ...
