from __future__ import annotations

import logging
from typing import Protocol

from .model import Notification

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    """Delivery boundary. Implementations raise DeliveryFailed on failure."""

    def notify(self, message: Notification) -> None:
        raise NotImplementedError


class LoggingNotificationSink(NotificationSink):
    """Writes messages to the log instead of sending them.

    Used when no mail transport is configured.
    """

    def __init__(self, *, level: int = logging.INFO):
        self._level = level

    def notify(self, message: Notification) -> None:
        logger.log(
            self._level,
            "[notify] to=%s subject=%r text=%r",
            message.recipient,
            message.subject,
            message.text,
        )
