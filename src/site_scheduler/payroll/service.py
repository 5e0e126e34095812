from __future__ import annotations

from typing import Optional

from ..access.scope import Actor
from ..core.exceptions import Forbidden
from ..shifts.repository import ShiftRepository
from ..sites.repository import SiteRepository
from ..users.repository import UserRepository
from .aggregator import PayrollAggregator, PayrollRow


class PayrollReportService:
    """Payroll summary and hours export over the shifts an actor can see."""

    def __init__(
        self,
        shifts: ShiftRepository,
        users: UserRepository,
        sites: SiteRepository,
        *,
        aggregator: Optional[PayrollAggregator] = None,
    ):
        self._shifts = shifts
        self._users = users
        self._sites = sites
        self._aggregator = aggregator or PayrollAggregator()

    @staticmethod
    def _require_manager(actor: Actor) -> None:
        if not actor.is_manager:
            raise Forbidden("Only admins and supervisors can read payroll")

    def summary(self, *, actor: Actor) -> list[PayrollRow]:
        self._require_manager(actor)
        visible = self._shifts.find_visible(actor.scope)
        employees = self._users.get_many(s.employee_id for s in visible)
        return self._aggregator.aggregate(visible, employees)

    def hours_export(self, *, actor: Actor) -> list[dict]:
        """One row per visible shift, keyed by the export column names."""
        self._require_manager(actor)
        visible = self._shifts.find_visible(actor.scope)
        users = self._users.get_many(s.employee_id for s in visible)
        sites = self._sites.get_many(s.site_id for s in visible)

        rows: list[dict] = []
        for s in visible:
            user = users.get(s.employee_id)
            site = sites.get(s.site_id)
            rate = user.hourly_rate_cents if user else None
            rows.append(
                {
                    "dayOfWeek": s.day_of_week,
                    "employee": user.name if user else "",
                    "employeeEmail": user.email if user else "",
                    "hourlyRateCents": rate if rate is not None else "",
                    "site": site.name if site else "",
                    "city": (site.city if site else None) or "",
                    "start": s.start_min,
                    "end": s.end_min,
                    "durationMin": s.duration_minutes,
                    "status": s.status.value,
                    "checklist": s.note or "",
                }
            )
        return rows
