from __future__ import annotations

from abc import ABC, abstractmethod

from ...shifts.model import Shift


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def worked_minutes(self, shift: Shift) -> int:
        raise NotImplementedError

    @abstractmethod
    def pay_cents(self, minutes: int, rate_cents: int) -> int:
        raise NotImplementedError
