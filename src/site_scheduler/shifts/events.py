from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .model import Shift


@dataclass(frozen=True)
class ShiftEvent:
    """Emitted after a shift mutation has been committed."""

    shift: Shift
    actor_id: int


@dataclass(frozen=True)
class ShiftCreated(ShiftEvent):
    pass


@dataclass(frozen=True)
class ShiftUpdated(ShiftEvent):
    pass


@dataclass(frozen=True)
class ShiftDeleted(ShiftEvent):
    pass


@dataclass(frozen=True)
class ShiftConfirmed(ShiftEvent):
    pass


class EventPublisher(Protocol):
    def publish(self, event: ShiftEvent) -> None:
        raise NotImplementedError
