from __future__ import annotations

import math

from .base import PayrollCalculator
from ...shifts.model import Shift


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: paid minutes = end - start; pay = hours x rate, half rounded up."""

    def worked_minutes(self, shift: Shift) -> int:
        return max(int(shift.end_min) - int(shift.start_min), 0)

    def pay_cents(self, minutes: int, rate_cents: int) -> int:
        hours = minutes / 60
        return int(math.floor(hours * rate_cents + 0.5))
