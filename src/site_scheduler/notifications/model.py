from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Notification:
    """Plain-text message addressed to one recipient."""

    recipient: str
    subject: str
    text: str
