from __future__ import annotations

from dataclasses import dataclass

from ..common.time_utils import format_minutes
from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import InvalidInterval


@dataclass(frozen=True)
class TimeInterval:
    """Half-open minute-of-day interval ``[start_min, end_min)``."""

    start_min: int
    end_min: int

    def __post_init__(self):
        for value in (self.start_min, self.end_min):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInterval("Start and end must be whole minutes")
        if not 0 <= self.start_min < self.end_min <= MINUTES_PER_DAY:
            raise InvalidInterval(
                f"Invalid interval {self.start_min}-{self.end_min}: "
                f"expected 0 <= start < end <= {MINUTES_PER_DAY}"
            )

    @property
    def duration_minutes(self) -> int:
        return self.end_min - self.start_min

    def overlaps(self, other: "TimeInterval") -> bool:
        return overlaps(self, other)

    def __str__(self) -> str:
        return f"{format_minutes(self.start_min)}-{format_minutes(self.end_min)}"


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    # Touching endpoints (a.end == b.start) do not overlap.
    return a.start_min < b.end_min and b.start_min < a.end_min
