from __future__ import annotations

import pytest

from site_scheduler.access.scope import AccessScopeResolver
from site_scheduler.core.enums import Role, ShiftStatus
from site_scheduler.core.exceptions import Forbidden
from site_scheduler.payroll.aggregator import PayrollAggregator
from site_scheduler.payroll.service import PayrollReportService

from tests.fakes import (
    ADMIN_ID,
    EMPLOYEE_ID,
    OTHER_EMPLOYEE_ID,
    SITE_A,
    SITE_B,
    SUPERVISOR_ID,
    InMemoryGrants,
    InMemoryShifts,
    make_shift,
    make_sites,
    make_user,
    make_users,
)


def test_single_employee_rows_are_summed():
    users = make_users()
    shifts = [
        make_shift(1, day=1, start=17 * 60, end=20 * 60),
        make_shift(2, day=3, start=9 * 60, end=11 * 60 + 30),
    ]

    rows = PayrollAggregator().aggregate(shifts, users.get_many([EMPLOYEE_ID]))

    assert len(rows) == 1
    row = rows[0]
    assert row.user_id == EMPLOYEE_ID
    assert row.minutes == 330
    assert row.hours == 5.5
    assert row.rate_cents == 2200
    assert row.pay_cents == 12100


def test_rows_sorted_by_pay_descending_and_absent_employees_omitted():
    users = make_users()
    shifts = [
        make_shift(1, employee_id=EMPLOYEE_ID, start=0, end=60),  # 2200
        make_shift(2, employee_id=OTHER_EMPLOYEE_ID, start=0, end=120),  # 5000
    ]

    rows = PayrollAggregator().aggregate(shifts, users.get_many([EMPLOYEE_ID, OTHER_EMPLOYEE_ID, ADMIN_ID]))

    assert [r.user_id for r in rows] == [OTHER_EMPLOYEE_ID, EMPLOYEE_ID]
    assert [r.pay_cents for r in rows] == [5000, 2200]
    assert ADMIN_ID not in {r.user_id for r in rows}


def test_ties_broken_by_name_then_id():
    users = make_users()
    users.add(make_user(7, Role.EMPLOYEE, name="Zoe", rate=1000))
    users.add(make_user(8, Role.EMPLOYEE, name="Anna", rate=1000))
    shifts = [make_shift(1, employee_id=7, start=0, end=60), make_shift(2, employee_id=8, start=0, end=60)]

    rows = PayrollAggregator().aggregate(shifts, users.get_many([7, 8]))

    assert [r.name for r in rows] == ["Anna", "Zoe"]


def test_missing_rate_counts_as_zero():
    users = make_users()
    users.add(make_user(9, Role.EMPLOYEE, name="NoRate", rate=None))
    rows = PayrollAggregator().aggregate([make_shift(1, employee_id=9)], users.get_many([9]))
    assert rows[0].pay_cents == 0
    assert rows[0].minutes == 180


def test_empty_visible_set_gives_no_rows():
    assert PayrollAggregator().aggregate([], {}) == []


def _service(shifts):
    users = make_users()
    sites = make_sites()
    grants = InMemoryGrants(users, sites)
    return PayrollReportService(InMemoryShifts(shifts), users, sites), grants, AccessScopeResolver(grants)


def test_summary_is_limited_to_supervisor_sites():
    svc, grants, resolver = _service(
        [
            make_shift(1, employee_id=EMPLOYEE_ID, site_id=SITE_A),
            make_shift(2, employee_id=OTHER_EMPLOYEE_ID, site_id=SITE_B),
        ]
    )
    grants.grant(user_id=SUPERVISOR_ID, site_id=SITE_A)

    admin_rows = svc.summary(actor=resolver.resolve(ADMIN_ID, Role.ADMIN))
    sup_rows = svc.summary(actor=resolver.resolve(SUPERVISOR_ID, Role.SUPERVISOR))

    assert {r.user_id for r in admin_rows} == {EMPLOYEE_ID, OTHER_EMPLOYEE_ID}
    assert [r.user_id for r in sup_rows] == [EMPLOYEE_ID]


def test_supervisor_without_grants_sees_empty_summary():
    svc, _, resolver = _service([make_shift(1)])
    assert svc.summary(actor=resolver.resolve(SUPERVISOR_ID, Role.SUPERVISOR)) == []


def test_employee_cannot_read_payroll_or_export():
    svc, _, resolver = _service([make_shift(1)])
    emp = resolver.resolve(EMPLOYEE_ID, Role.EMPLOYEE)
    with pytest.raises(Forbidden):
        svc.summary(actor=emp)
    with pytest.raises(Forbidden):
        svc.hours_export(actor=emp)


def test_hours_export_rows():
    svc, _, resolver = _service(
        [
            make_shift(1, day=5, start=17 * 60, end=20 * 60, status=ShiftStatus.CONFIRMED),
            make_shift(2, day=1, start=17 * 60, end=20 * 60),
        ]
    )

    rows = svc.hours_export(actor=resolver.resolve(ADMIN_ID, Role.ADMIN))

    assert [r["dayOfWeek"] for r in rows] == [1, 5]
    assert rows[1] == {
        "dayOfWeek": 5,
        "employee": "Emma",
        "employeeEmail": "emma@lavepropre.ca",
        "hourlyRateCents": 2200,
        "site": "AMECCI",
        "city": "Sherbrooke",
        "start": 1020,
        "end": 1200,
        "durationMin": 180,
        "status": "CONFIRMED",
        "checklist": "",
    }
