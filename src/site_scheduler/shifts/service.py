from __future__ import annotations

import dataclasses
import logging
from typing import Optional, Sequence

from ..access.scope import Actor
from ..common.validators import require_day_of_week, require_status
from ..core.enums import Role, ShiftStatus
from ..core.exceptions import Forbidden, NotFound
from ..sites.repository import SiteRepository
from ..users.repository import UserRepository
from .conflicts import ShiftConflictChecker
from .events import EventPublisher, ShiftConfirmed, ShiftCreated, ShiftDeleted, ShiftEvent, ShiftUpdated
from .interval import TimeInterval
from .model import NewShift, Shift, ShiftPatch, ShiftView
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


class SchedulingService:
    """Use case: create, edit, delete and confirm recurring weekly shifts.

    Every mutation validates the interval, checks the actor's capability and
    rejects overlaps before anything is written. The overlap read and the
    write share one repository transaction; events are published after it
    commits.
    """

    def __init__(
        self,
        shifts: ShiftRepository,
        users: UserRepository,
        sites: SiteRepository,
        *,
        events: Optional[EventPublisher] = None,
        checker: Optional[ShiftConflictChecker] = None,
    ):
        self._shifts = shifts
        self._users = users
        self._sites = sites
        self._events = events
        self._checker = checker or ShiftConflictChecker()

    def _publish(self, event: ShiftEvent) -> None:
        if self._events is None:
            return
        # The mutation is already committed; a publisher error must not surface.
        try:
            self._events.publish(event)
        except Exception:
            logger.exception("Publishing %s for shift #%s failed", type(event).__name__, event.shift.shift_id)

    @staticmethod
    def _require_manage(actor: Actor, site_id: int) -> None:
        if not actor.can_manage_site(site_id):
            raise Forbidden(f"Not allowed to manage site #{site_id}")

    def _require_references(self, *, employee_id: int, site_id: int) -> None:
        if not self._users.get_by_id(employee_id):
            raise NotFound(f"Employee #{employee_id} not found")
        if not self._sites.get_by_id(site_id):
            raise NotFound(f"Site #{site_id} not found")

    def _load(self, shift_id: int) -> Shift:
        shift = self._shifts.get_by_id(int(shift_id))
        if not shift:
            raise NotFound(f"Shift #{shift_id} not found")
        return shift

    def create_shift(self, candidate: NewShift, actor: Actor) -> Shift:
        interval = TimeInterval(candidate.start_min, candidate.end_min)
        day = require_day_of_week(candidate.day_of_week)
        status = require_status(candidate.status)
        self._require_manage(actor, candidate.site_id)
        self._require_references(employee_id=candidate.employee_id, site_id=candidate.site_id)

        candidate = dataclasses.replace(candidate, day_of_week=day, status=status)
        with self._shifts.atomic():
            existing = self._shifts.find_by_employee_day(employee_id=candidate.employee_id, day_of_week=day)
            self._checker.check(interval, existing)
            shift = self._shifts.create(candidate)

        logger.info(
            "Created shift #%s: employee #%s site #%s day %s %s",
            shift.shift_id, shift.employee_id, shift.site_id, shift.day_of_week, interval,
        )
        self._publish(ShiftCreated(shift=shift, actor_id=actor.user_id))
        return shift

    def update_shift(self, shift_id: int, patch: ShiftPatch, actor: Actor) -> Shift:
        with self._shifts.atomic():
            current = self._load(shift_id)
            merged = dataclasses.replace(current, **patch.fields())

            interval = TimeInterval(merged.start_min, merged.end_min)
            day = require_day_of_week(merged.day_of_week)
            status = require_status(merged.status)
            self._require_manage(actor, merged.site_id)
            if merged.employee_id != current.employee_id or merged.site_id != current.site_id:
                self._require_references(employee_id=merged.employee_id, site_id=merged.site_id)

            existing = self._shifts.find_by_employee_day(
                employee_id=merged.employee_id,
                day_of_week=day,
                exclude_id=current.shift_id,
            )
            self._checker.check(interval, existing)

            shift = self._shifts.update(
                current.shift_id,
                {
                    "employee_id": merged.employee_id,
                    "site_id": merged.site_id,
                    "day_of_week": day,
                    "start_min": merged.start_min,
                    "end_min": merged.end_min,
                    "status": status,
                    "note": merged.note,
                },
            )
            if shift is None:
                raise NotFound(f"Shift #{shift_id} not found")

        logger.info("Updated shift #%s by user #%s", shift.shift_id, actor.user_id)
        self._publish(ShiftUpdated(shift=shift, actor_id=actor.user_id))
        return shift

    def delete_shift(self, shift_id: int, actor: Actor) -> None:
        with self._shifts.atomic():
            current = self._load(shift_id)
            self._require_manage(actor, current.site_id)
            if not self._shifts.delete(current.shift_id):
                raise NotFound(f"Shift #{shift_id} not found")

        logger.info("Deleted shift #%s by user #%s", current.shift_id, actor.user_id)
        self._publish(ShiftDeleted(shift=current, actor_id=actor.user_id))

    def confirm_own_shift(self, shift_id: int, actor: Actor) -> Shift:
        with self._shifts.atomic():
            current = self._load(shift_id)
            if actor.role != Role.EMPLOYEE or actor.user_id != current.employee_id:
                raise Forbidden("Only the assigned employee can confirm this shift")

            shift = self._shifts.update(current.shift_id, {"status": ShiftStatus.CONFIRMED})
            if shift is None:
                raise NotFound(f"Shift #{shift_id} not found")

        logger.info("Employee #%s confirmed shift #%s", actor.user_id, shift.shift_id)
        self._publish(ShiftConfirmed(shift=shift, actor_id=actor.user_id))
        return shift

    def list_visible(self, actor: Actor) -> Sequence[ShiftView]:
        shifts = self._shifts.find_visible(actor.scope)
        users = self._users.get_many(s.employee_id for s in shifts)
        sites = self._sites.get_many(s.site_id for s in shifts)

        views: list[ShiftView] = []
        for s in shifts:
            user = users.get(s.employee_id)
            site = sites.get(s.site_id)
            views.append(
                ShiftView(
                    shift=s,
                    employee_name=user.name if user else "",
                    employee_email=user.email if user else "",
                    hourly_rate_cents=user.hourly_rate_cents if user else None,
                    site_name=site.name if site else "",
                    site_city=site.city if site else None,
                )
            )
        return views
