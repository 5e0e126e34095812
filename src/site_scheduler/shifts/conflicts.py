from __future__ import annotations

from typing import Iterable, Optional

from ..core.exceptions import OverlapConflict
from .interval import TimeInterval, overlaps
from .model import Shift


class ShiftConflictChecker:
    """Rejects a candidate interval that collides with the employee's other shifts.

    ``existing`` must already be limited to the same employee and day with the
    edited shift (if any) left out. Every status occupies its interval.
    """

    def find_conflict(self, candidate: TimeInterval, existing: Iterable[Shift]) -> Optional[Shift]:
        for shift in existing:
            if overlaps(candidate, shift.interval):
                return shift
        return None

    def check(self, candidate: TimeInterval, existing: Iterable[Shift]) -> None:
        conflict = self.find_conflict(candidate, existing)
        if conflict is not None:
            raise OverlapConflict(
                f"Shift {candidate} overlaps shift #{conflict.shift_id} ({conflict.interval})",
                conflicting=conflict,
            )
