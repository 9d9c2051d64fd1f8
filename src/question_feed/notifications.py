"""Structured outcome events emitted to the toast layer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal

LOGGER = logging.getLogger(__name__)

NotificationKind = Literal["info", "error"]


@dataclass(frozen=True)
class Notification:
    """A transient, user-visible outcome."""

    kind: NotificationKind
    title: str
    description: str

    @classmethod
    def info(cls, title: str, description: str) -> Notification:
        return cls(kind="info", title=title, description=description)

    @classmethod
    def error(cls, description: str, title: str = "Error") -> Notification:
        return cls(kind="error", title=title, description=description)


Notifier = Callable[[Notification], None]


def log_notification(notification: Notification) -> None:
    """Notifier that reports through the logging system."""
    level = logging.ERROR if notification.kind == "error" else logging.INFO
    LOGGER.log(level, "%s: %s", notification.title, notification.description)
