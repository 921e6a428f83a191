"""In-process message channel with cancellable subscriptions."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


class Subscription:
    """Handle returned by MessageChannel.subscribe(); cancel() is idempotent."""

    def __init__(self, channel: "MessageChannel", handler: Handler) -> None:
        self._channel: Optional[MessageChannel] = channel
        self._handler = handler

    @property
    def active(self) -> bool:
        return self._channel is not None

    def cancel(self) -> None:
        channel = self._channel
        if channel is None:
            return
        self._channel = None
        channel._remove(self)

    def _deliver(self, payload: Any) -> None:
        self._handler(payload)


class MessageChannel:
    """
    Carries messages posted back to the window that started an auth popup.

    Listeners live only as long as their Subscription.
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    @property
    def listener_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, handler: Handler) -> Subscription:
        sub = Subscription(self, handler)
        self._subscriptions.append(sub)
        return sub

    def post(self, payload: Any) -> None:
        # Handlers may cancel themselves while being delivered to.
        for sub in list(self._subscriptions):
            if sub.active:
                sub._deliver(payload)

    def _remove(self, sub: Subscription) -> None:
        try:
            self._subscriptions.remove(sub)
        except ValueError:
            logger.debug("Subscription already removed")
