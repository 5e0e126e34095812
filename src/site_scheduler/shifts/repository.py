from __future__ import annotations

from typing import ContextManager, Optional, Protocol, Sequence

from ..access.scope import Scope
from .model import NewShift, Shift


class ShiftRepository(Protocol):
    """Storage boundary for shifts.

    The scheduling service depends on this interface only, so an in-memory
    implementation can stand in for MySQL.
    """

    def atomic(self) -> ContextManager[None]:
        """Transaction boundary: reads and writes inside it commit together."""

        raise NotImplementedError

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def find_by_employee_day(
        self,
        *,
        employee_id: int,
        day_of_week: int,
        exclude_id: Optional[int] = None,
    ) -> Sequence[Shift]:
        raise NotImplementedError

    def create(self, shift: NewShift) -> Shift:
        raise NotImplementedError

    def update(self, shift_id: int, fields: dict) -> Optional[Shift]:
        """Apply ``fields`` and return the stored row, or None if absent."""

        raise NotImplementedError

    def delete(self, shift_id: int) -> bool:
        raise NotImplementedError

    def find_visible(self, scope: Scope) -> Sequence[Shift]:
        """Shifts readable under ``scope``, ordered by day then start."""

        raise NotImplementedError
