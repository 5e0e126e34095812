"""Access scope resolution.

Role checks are resolved once per request into an explicit capability value
(``AllSites``, ``GrantedSites`` or ``OwnRecordsOnly``) carried by an ``Actor``.
Services ask the actor instead of re-deriving role rules at each call site.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Protocol, Union

from ..core.enums import Role


@dataclass(frozen=True)
class AllSites:
    """ADMIN: manage and read every site."""


@dataclass(frozen=True)
class GrantedSites:
    """SUPERVISOR: manage and read only the granted sites."""

    site_ids: FrozenSet[int] = field(default_factory=frozenset)


@dataclass(frozen=True)
class OwnRecordsOnly:
    """EMPLOYEE: read own shifts, confirm own shifts, manage nothing."""

    user_id: int


Scope = Union[AllSites, GrantedSites, OwnRecordsOnly]


@dataclass(frozen=True)
class Actor:
    user_id: int
    role: Role
    scope: Scope

    @property
    def is_manager(self) -> bool:
        return not isinstance(self.scope, OwnRecordsOnly)

    def can_manage_site(self, site_id: int) -> bool:
        if isinstance(self.scope, AllSites):
            return True
        if isinstance(self.scope, GrantedSites):
            return int(site_id) in self.scope.site_ids
        return False


class GrantLookup(Protocol):
    def list_granted_sites(self, user_id: int) -> set[int]:
        raise NotImplementedError

    def is_granted(self, user_id: int, site_id: int) -> bool:
        raise NotImplementedError


class AccessScopeResolver:
    """Maps (user id, role) to the capability the user holds. Default-deny."""

    def __init__(self, grants: GrantLookup):
        self._grants = grants

    def resolve(self, user_id: int, role: Role) -> Actor:
        role = Role(role)
        if role == Role.ADMIN:
            scope: Scope = AllSites()
        elif role == Role.SUPERVISOR:
            scope = GrantedSites(frozenset(int(s) for s in self._grants.list_granted_sites(int(user_id))))
        else:
            scope = OwnRecordsOnly(int(user_id))
        return Actor(user_id=int(user_id), role=role, scope=scope)

    def can_manage_site(self, user_id: int, role: Role, site_id: int) -> bool:
        if role == Role.ADMIN:
            return True
        if role != Role.SUPERVISOR:
            return False
        return bool(self._grants.is_granted(int(user_id), int(site_id)))
