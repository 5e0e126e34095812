"""Post-commit dispatch of shift events to employee notifications."""

from __future__ import annotations

import logging
from typing import Optional

from ..common.time_utils import format_minutes
from ..core.constants import DEFAULT_NOTIFY_SIGNATURE
from ..core.exceptions import DeliveryFailed
from ..shifts.events import EventPublisher, ShiftCreated, ShiftEvent, ShiftUpdated
from ..users.repository import UserRepository
from .model import Notification
from .sink import NotificationSink

logger = logging.getLogger(__name__)


class NotificationDispatcher(EventPublisher):
    def __init__(
        self,
        sink: NotificationSink,
        users: UserRepository,
        *,
        signature: str = DEFAULT_NOTIFY_SIGNATURE,
    ):
        self._sink = sink
        self._users = users
        self._signature = signature

    def build(self, event: ShiftEvent) -> Optional[Notification]:
        """Message for the shift's employee, or None when nothing is sent."""
        if isinstance(event, ShiftCreated):
            subject = "Nouveau quart"
            line = "Un nouveau quart a été planifié"
        elif isinstance(event, ShiftUpdated):
            subject = "Mise à jour de quart"
            line = "Votre quart a été modifié"
        else:
            return None

        employee = self._users.get_by_id(event.shift.employee_id)
        if not employee or not employee.email:
            return None

        shift = event.shift
        when = f"jour {shift.day_of_week}, {format_minutes(shift.start_min)}-{format_minutes(shift.end_min)}"
        return Notification(
            recipient=employee.email,
            subject=f"{subject} - {self._signature}",
            text=f"Bonjour {employee.name},\n\n{line} ({when}).\n\n- {self._signature}",
        )

    def publish(self, event: ShiftEvent) -> None:
        logger.info("%s shift #%s by user #%s", type(event).__name__, event.shift.shift_id, event.actor_id)

        try:
            message = self.build(event)
            if message is None:
                return
            self._sink.notify(message)
        except DeliveryFailed as e:
            logger.warning("Notification for shift #%s not delivered: %s", event.shift.shift_id, e)
        except Exception:
            logger.exception("Notification for shift #%s failed", event.shift.shift_id)
