from __future__ import annotations

import pytest

from site_scheduler.access.scope import AccessScopeResolver
from site_scheduler.access.service import AccessService
from site_scheduler.core.enums import Role
from site_scheduler.core.exceptions import Forbidden, NotFound, ValidationError

from tests.fakes import ADMIN_ID, EMPLOYEE_ID, SITE_A, SUPERVISOR_ID, InMemoryGrants, make_sites, make_users


def _env():
    users = make_users()
    sites = make_sites()
    grants = InMemoryGrants(users, sites)
    return AccessService(grants, users, sites), grants, AccessScopeResolver(grants)


def test_admin_grants_access_idempotently():
    svc, grants, resolver = _env()
    admin = resolver.resolve(ADMIN_ID, Role.ADMIN)

    first = svc.grant(actor=admin, user_id=SUPERVISOR_ID, site_id=SITE_A)
    second = svc.grant(actor=admin, user_id=SUPERVISOR_ID, site_id=SITE_A)

    assert first == second
    assert grants.is_granted(SUPERVISOR_ID, SITE_A)
    listing = svc.list_all(actor=admin)
    assert len(listing) == 1
    assert listing[0].user_name == "Sup"
    assert listing[0].site_name == "AMECCI"


def test_only_supervisors_can_receive_grants():
    svc, _, resolver = _env()
    with pytest.raises(ValidationError):
        svc.grant(actor=resolver.resolve(ADMIN_ID, Role.ADMIN), user_id=EMPLOYEE_ID, site_id=SITE_A)


def test_grant_requires_existing_user_and_site():
    svc, _, resolver = _env()
    admin = resolver.resolve(ADMIN_ID, Role.ADMIN)
    with pytest.raises(NotFound):
        svc.grant(actor=admin, user_id=999, site_id=SITE_A)
    with pytest.raises(NotFound):
        svc.grant(actor=admin, user_id=SUPERVISOR_ID, site_id=999)


def test_non_admin_cannot_manage_access():
    svc, grants, resolver = _env()
    grants.grant(user_id=SUPERVISOR_ID, site_id=SITE_A)
    sup = resolver.resolve(SUPERVISOR_ID, Role.SUPERVISOR)

    with pytest.raises(Forbidden):
        svc.grant(actor=sup, user_id=SUPERVISOR_ID, site_id=SITE_A)
    with pytest.raises(Forbidden):
        svc.revoke(actor=sup, user_id=SUPERVISOR_ID, site_id=SITE_A)
    with pytest.raises(Forbidden):
        svc.list_all(actor=sup)


def test_revoke_removes_grant_and_missing_grant_is_not_found():
    svc, grants, resolver = _env()
    admin = resolver.resolve(ADMIN_ID, Role.ADMIN)
    grants.grant(user_id=SUPERVISOR_ID, site_id=SITE_A)

    svc.revoke(actor=admin, user_id=SUPERVISOR_ID, site_id=SITE_A)

    assert not grants.is_granted(SUPERVISOR_ID, SITE_A)
    with pytest.raises(NotFound):
        svc.revoke(actor=admin, user_id=SUPERVISOR_ID, site_id=SITE_A)
