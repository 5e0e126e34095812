from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from ..shifts.model import Shift
from ..users.model import User
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator


@dataclass(frozen=True)
class PayrollRow:
    user_id: int
    name: str
    email: str
    minutes: int
    rate_cents: int
    hours: float
    pay_cents: int

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "name": self.name,
            "email": self.email,
            "minutes": self.minutes,
            "rateCents": self.rate_cents,
            "hours": self.hours,
            "payCents": self.pay_cents,
        }


class PayrollAggregator:
    """Reduces a visible shift set into one payroll row per employee.

    Rows are ordered by pay (highest first), then employee name, then id.
    Employees without visible shifts do not appear.
    """

    def __init__(self, calculator: Optional[PayrollCalculator] = None):
        self._calculator = calculator or StandardPayrollCalculator()

    def aggregate(self, shifts: Iterable[Shift], employees: Mapping[int, User]) -> list[PayrollRow]:
        minutes_by_user: dict[int, int] = {}
        for s in shifts:
            minutes_by_user[s.employee_id] = minutes_by_user.get(s.employee_id, 0) + self._calculator.worked_minutes(s)

        rows: list[PayrollRow] = []
        for user_id, minutes in minutes_by_user.items():
            user = employees.get(user_id)
            rate = int(user.hourly_rate_cents or 0) if user else 0
            rows.append(
                PayrollRow(
                    user_id=user_id,
                    name=user.name if user else "",
                    email=user.email if user else "",
                    minutes=minutes,
                    rate_cents=rate,
                    hours=minutes / 60,
                    pay_cents=self._calculator.pay_cents(minutes, rate),
                )
            )

        rows.sort(key=lambda r: (-r.pay_cents, r.name, r.user_id))
        return rows
