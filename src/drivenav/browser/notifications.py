"""Transient notifications (toasts) emitted by the browser."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Protocol

logger = logging.getLogger(__name__)

Variant = Literal["success", "info", "warning", "error"]

DEFAULT_ITEM_LABEL: str = "Document"


@dataclass(frozen=True)
class Notification:
    title: str
    message: str
    variant: Variant = "info"


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None: ...


class LoggingNotifier:
    """Default notifier: writes notifications to the log."""

    def notify(self, notification: Notification) -> None:
        level = logging.ERROR if notification.variant == "error" else logging.INFO
        logger.log(level, "%s: %s", notification.title, notification.message)


def item_label(name: str | None) -> str:
    """Name shown in notifications; falls back to a generic label."""
    return name if name else DEFAULT_ITEM_LABEL
