from __future__ import annotations

from site_scheduler.access.scope import AccessScopeResolver, AllSites, GrantedSites, OwnRecordsOnly
from site_scheduler.core.enums import Role

from tests.fakes import ADMIN_ID, EMPLOYEE_ID, SITE_A, SITE_B, SUPERVISOR_ID, InMemoryGrants


def test_admin_manages_all_sites():
    actor = AccessScopeResolver(InMemoryGrants()).resolve(ADMIN_ID, Role.ADMIN)
    assert actor.scope == AllSites()
    assert actor.can_manage_site(SITE_A)
    assert actor.can_manage_site(12345)
    assert actor.is_manager


def test_supervisor_scope_is_exactly_the_granted_sites():
    grants = InMemoryGrants()
    grants.grant(user_id=SUPERVISOR_ID, site_id=SITE_A)
    actor = AccessScopeResolver(grants).resolve(SUPERVISOR_ID, Role.SUPERVISOR)

    assert actor.scope == GrantedSites(frozenset({SITE_A}))
    assert actor.can_manage_site(SITE_A)
    assert not actor.can_manage_site(SITE_B)


def test_supervisor_without_grants_manages_nothing():
    actor = AccessScopeResolver(InMemoryGrants()).resolve(SUPERVISOR_ID, Role.SUPERVISOR)
    assert actor.scope == GrantedSites(frozenset())
    assert not actor.can_manage_site(SITE_A)
    assert actor.is_manager


def test_employee_reads_only_own_records():
    grants = InMemoryGrants()
    # A stray grant row never gives an employee management rights.
    grants.grant(user_id=EMPLOYEE_ID, site_id=SITE_A)
    resolver = AccessScopeResolver(grants)
    actor = resolver.resolve(EMPLOYEE_ID, Role.EMPLOYEE)

    assert actor.scope == OwnRecordsOnly(EMPLOYEE_ID)
    assert not actor.can_manage_site(SITE_A)
    assert not actor.is_manager
    assert not resolver.can_manage_site(EMPLOYEE_ID, Role.EMPLOYEE, SITE_A)


def test_can_manage_site_checks_grant_for_exact_site():
    grants = InMemoryGrants()
    grants.grant(user_id=SUPERVISOR_ID, site_id=SITE_B)
    resolver = AccessScopeResolver(grants)

    assert resolver.can_manage_site(ADMIN_ID, Role.ADMIN, SITE_A)
    assert resolver.can_manage_site(SUPERVISOR_ID, Role.SUPERVISOR, SITE_B)
    assert not resolver.can_manage_site(SUPERVISOR_ID, Role.SUPERVISOR, SITE_A)


def test_role_strings_are_accepted():
    actor = AccessScopeResolver(InMemoryGrants()).resolve(ADMIN_ID, "ADMIN")
    assert actor.role == Role.ADMIN
