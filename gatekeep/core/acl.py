"""
Access Control List - the decision core.

An AccessList is an immutable set of entries plus an index built once
at construction:

    action -> (allowed SIDs, denied SIDs)

Decisions are set intersections against that index. A denied SID always
wins, no matter how many of the subject's other SIDs are allowed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterable, Iterator

from gatekeep.core.entry import Entry, normalize_action


_NO_SIDS: frozenset = frozenset()


@dataclass(frozen=True)
class _AllowDeny:
    allowed: frozenset
    denied: frozenset


_UNKNOWN_ACTION = _AllowDeny(allowed=_NO_SIDS, denied=_NO_SIDS)


class EntryListBuilder:
    """
    Mutable accumulator for entries.

    Usage:
        acl = (
            EntryListBuilder()
            .allow("authenticated", ["read", "comment"])
            .deny("org:666", ["read", "comment"])
            .build()
        )
    """

    def __init__(self, initial: Iterable[Entry] = ()):
        self._entries: list[Entry] = list(initial)

    def allow(self, sid: Hashable, actions: Iterable[Any]) -> EntryListBuilder:
        """Add an allow entry for each action."""
        self._entries.extend(Entry(sid, action, True) for action in actions)
        return self

    def deny(self, sid: Hashable, actions: Iterable[Any]) -> EntryListBuilder:
        """Add a deny entry for each action."""
        self._entries.extend(Entry(sid, action, False) for action in actions)
        return self

    def build(self) -> AccessList:
        return AccessList(self._entries)


class AccessList:
    """
    Immutable list of entries governing one resource.

    Duplicate entries collapse to one. Two lists are equal when they hold
    the same entries, whatever the insertion order.
    """

    __slots__ = ("_entries", "_entry_set", "_index", "_allowed_actions")

    def __init__(self, entries: Iterable[Entry] = ()):
        # dict keeps first-insertion order for display, set drives equality
        ordered = tuple(dict.fromkeys(entries))
        self._entries = ordered
        self._entry_set = frozenset(ordered)
        self._index = self._build_index(ordered)
        self._allowed_actions = frozenset(
            action for action, allow_deny in self._index.items() if allow_deny.allowed
        )

    @classmethod
    def build(cls, fn: Callable[[EntryListBuilder], Any]) -> AccessList:
        """
        Build a new list by letting fn populate a builder.

            acl = AccessList.build(lambda acl: acl.allow("root", ["read", "write"]))
        """
        builder = EntryListBuilder()
        fn(builder)
        return builder.build()

    # =========================================================================
    # Decisions
    # =========================================================================

    def is_allowed(self, action: Any, sids: Iterable[Hashable]) -> bool:
        """
        True if any of sids is allowed the action and none is denied it.
        """
        if not self._entries:
            return False
        sids = _as_set(sids)
        if not sids:
            return False

        action = normalize_action(action)
        if action not in self._allowed_actions:
            return False

        allow_deny = self._index[action]
        return not allow_deny.allowed.isdisjoint(sids) and allow_deny.denied.isdisjoint(sids)

    def is_denied(self, action: Any, sids: Iterable[Hashable]) -> bool:
        return not self.is_allowed(action, sids)

    def allowed_actions(self, sids: Iterable[Hashable]) -> frozenset[str]:
        """All actions the given SIDs are allowed to perform."""
        sids = _as_set(sids)
        if not sids:
            return _NO_SIDS
        return frozenset(
            action for action in self._allowed_actions if self.is_allowed(action, sids)
        )

    # =========================================================================
    # Introspection
    # =========================================================================

    def allowed_sids(self, action: Any) -> frozenset:
        """SIDs allowed the action. Empty for actions the list never mentions."""
        return self._index.get(normalize_action(action), _UNKNOWN_ACTION).allowed

    def denied_sids(self, action: Any) -> frozenset:
        """SIDs denied the action. Empty for actions the list never mentions."""
        return self._index.get(normalize_action(action), _UNKNOWN_ACTION).denied

    def extend(self, fn: Callable[[EntryListBuilder], Any]) -> AccessList:
        """
        Return a new list with this list's entries plus whatever fn adds.

        The original list is left untouched.
        """
        builder = EntryListBuilder(self._entries)
        fn(builder)
        return builder.build()

    @property
    def empty(self) -> bool:
        return not self._entries

    def to_list(self) -> list[Entry]:
        return list(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry: object) -> bool:
        return entry in self._entry_set

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccessList):
            return NotImplemented
        return self._entry_set == other._entry_set

    def __hash__(self) -> int:
        return hash((AccessList, self._entry_set))

    def __str__(self) -> str:
        return str([entry.to_dict() for entry in self._entries])

    def __repr__(self) -> str:
        return f"AccessList({list(self._entries)!r})"

    @staticmethod
    def _build_index(entries: tuple[Entry, ...]) -> dict[str, _AllowDeny]:
        allowed: dict[str, set] = {}
        denied: dict[str, set] = {}
        for entry in entries:
            allowed.setdefault(entry.action, set())
            denied.setdefault(entry.action, set())
            (allowed if entry.allow else denied)[entry.action].add(entry.sid)

        return {
            action: _AllowDeny(allowed=frozenset(allowed[action]), denied=frozenset(denied[action]))
            for action in allowed
        }


def _as_set(sids: Iterable[Hashable]) -> frozenset | set:
    if isinstance(sids, (set, frozenset)):
        return sids
    if isinstance(sids, (str, bytes)):
        raise TypeError(f"Expected a collection of SIDs but got '{type(sids).__name__}'")
    return set(sids)


EMPTY_ACL = AccessList()
