from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterable, Optional

from werkzeug.security import generate_password_hash

from site_scheduler.access.model import SiteAccess, SiteAccessView
from site_scheduler.access.scope import AllSites, GrantedSites, OwnRecordsOnly
from site_scheduler.core.enums import Role, ShiftStatus
from site_scheduler.core.exceptions import DeliveryFailed
from site_scheduler.shifts.model import NewShift, Shift
from site_scheduler.sites.model import Site
from site_scheduler.users.model import User


class InMemoryShifts:
    def __init__(self, shifts: Iterable[Shift] = ()):
        self._rows: dict[int, Shift] = {s.shift_id: s for s in shifts}
        self._next_id = max(self._rows, default=0) + 1
        self._lock = threading.RLock()
        self.in_atomic = False
        self.writes = 0

    @contextmanager
    def atomic(self):
        with self._lock:
            snapshot = dict(self._rows)
            outer = self.in_atomic
            self.in_atomic = True
            try:
                yield
            except Exception:
                self._rows = snapshot
                raise
            finally:
                self.in_atomic = outer

    def all(self) -> list[Shift]:
        return sorted(self._rows.values(), key=lambda s: s.shift_id)

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        return self._rows.get(int(shift_id))

    def find_by_employee_day(self, *, employee_id, day_of_week, exclude_id=None):
        return [
            s
            for s in self.all()
            if s.employee_id == employee_id and s.day_of_week == day_of_week and s.shift_id != exclude_id
        ]

    def create(self, shift: NewShift) -> Shift:
        assert self.in_atomic, "writes must happen inside atomic()"
        created = Shift(shift_id=self._next_id, **shift.__dict__)
        self._rows[created.shift_id] = created
        self._next_id += 1
        self.writes += 1
        return created

    def update(self, shift_id: int, fields: dict) -> Optional[Shift]:
        current = self._rows.get(int(shift_id))
        if not current:
            return None
        updated = replace(current, **fields)
        self._rows[updated.shift_id] = updated
        self.writes += 1
        return updated

    def delete(self, shift_id: int) -> bool:
        self.writes += 1
        return self._rows.pop(int(shift_id), None) is not None

    def find_visible(self, scope):
        rows = self.all()
        if isinstance(scope, GrantedSites):
            rows = [s for s in rows if s.site_id in scope.site_ids]
        elif isinstance(scope, OwnRecordsOnly):
            rows = [s for s in rows if s.employee_id == scope.user_id]
        else:
            assert isinstance(scope, AllSites)
        return sorted(rows, key=lambda s: (s.day_of_week, s.start_min, s.shift_id))


class InMemoryUsers:
    def __init__(self, users: Iterable[User] = ()):
        self._by_id = {u.user_id: u for u in users}

    def add(self, user: User) -> User:
        self._by_id[user.user_id] = user
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        for u in self._by_id.values():
            if u.email.lower() == email.lower():
                return u
        return None

    def get_many(self, user_ids) -> dict[int, User]:
        return {int(i): self._by_id[int(i)] for i in set(user_ids) if int(i) in self._by_id}

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda u: u.user_id, reverse=True)


class InMemorySites:
    def __init__(self, sites: Iterable[Site] = ()):
        self._by_id = {s.site_id: s for s in sites}

    def get_by_id(self, site_id: int) -> Optional[Site]:
        return self._by_id.get(int(site_id))

    def get_many(self, site_ids) -> dict[int, Site]:
        return {int(i): self._by_id[int(i)] for i in set(site_ids) if int(i) in self._by_id}

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda s: s.site_id, reverse=True)


class InMemoryGrants:
    def __init__(self, users: Optional[InMemoryUsers] = None, sites: Optional[InMemorySites] = None):
        self._pairs: dict[tuple[int, int], SiteAccess] = {}
        self._users = users
        self._sites = sites

    def list_granted_sites(self, user_id: int) -> set[int]:
        return {site_id for (uid, site_id) in self._pairs if uid == int(user_id)}

    def is_granted(self, user_id: int, site_id: int) -> bool:
        return (int(user_id), int(site_id)) in self._pairs

    def grant(self, *, user_id: int, site_id: int) -> SiteAccess:
        key = (int(user_id), int(site_id))
        if key not in self._pairs:
            self._pairs[key] = SiteAccess(access_id=len(self._pairs) + 1, user_id=key[0], site_id=key[1])
        return self._pairs[key]

    def revoke(self, *, user_id: int, site_id: int) -> bool:
        return self._pairs.pop((int(user_id), int(site_id)), None) is not None

    def list_all(self):
        out = []
        for a in sorted(self._pairs.values(), key=lambda a: a.access_id, reverse=True):
            user = self._users.get_by_id(a.user_id) if self._users else None
            site = self._sites.get_by_id(a.site_id) if self._sites else None
            out.append(
                SiteAccessView(
                    access_id=a.access_id,
                    user_id=a.user_id,
                    user_name=user.name if user else "",
                    user_email=user.email if user else "",
                    site_id=a.site_id,
                    site_name=site.name if site else "",
                )
            )
        return out


class RecordingSink:
    def __init__(self, *, fail: bool = False):
        self.sent = []
        self._fail = fail

    def notify(self, message) -> None:
        if self._fail:
            raise DeliveryFailed("smtp down")
        self.sent.append(message)


class RecordingPublisher:
    def __init__(self):
        self.events = []

    def publish(self, event) -> None:
        self.events.append(event)


ADMIN_ID = 1
SUPERVISOR_ID = 2
EMPLOYEE_ID = 3
OTHER_EMPLOYEE_ID = 4

SITE_A = 10
SITE_B = 20


def make_user(user_id: int, role: Role, *, name: str, rate: Optional[int] = None, password: str = "secret123", active: bool = True) -> User:
    return User(
        user_id=user_id,
        name=name,
        email=f"{name.lower().replace(' ', '.')}@lavepropre.ca",
        password_hash=generate_password_hash(password),
        role=role,
        is_active=active,
        hourly_rate_cents=rate,
    )


def make_users() -> InMemoryUsers:
    return InMemoryUsers(
        [
            make_user(ADMIN_ID, Role.ADMIN, name="Admin", rate=0),
            make_user(SUPERVISOR_ID, Role.SUPERVISOR, name="Sup", rate=0),
            make_user(EMPLOYEE_ID, Role.EMPLOYEE, name="Emma", rate=2200),
            make_user(OTHER_EMPLOYEE_ID, Role.EMPLOYEE, name="Bob", rate=2500),
        ]
    )


def make_sites() -> InMemorySites:
    return InMemorySites(
        [
            Site(site_id=SITE_A, name="AMECCI", city="Sherbrooke", default_duration_min=180),
            Site(site_id=SITE_B, name="Residentiel", city="Magog", default_duration_min=150),
        ]
    )


def make_shift(shift_id: int, *, employee_id: int = EMPLOYEE_ID, site_id: int = SITE_A, day: int = 1,
               start: int = 8 * 60, end: int = 11 * 60, status: ShiftStatus = ShiftStatus.PLANNED) -> Shift:
    return Shift(
        shift_id=shift_id,
        employee_id=employee_id,
        site_id=site_id,
        day_of_week=day,
        start_min=start,
        end_min=end,
        status=status,
    )
