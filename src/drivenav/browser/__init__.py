"""Browser core: auth gate, navigation, search and mutations."""

from __future__ import annotations

from .auth_gate import AUTH_SUCCESS_SIGNAL, AuthGate
from .generation import RequestGeneration
from .navigation import NavigationStateMachine
from .notifications import DEFAULT_ITEM_LABEL, LoggingNotifier, Notification, Notifier, item_label
from .operations import DeleteTarget, OperationOrchestrator
from .preview import PreviewController
from .search import DEFAULT_QUIET_WINDOW_SEC, SearchDebouncer
from .signals import MessageChannel, Subscription
from .timer import CancellableTimer

__all__ = [
    "AUTH_SUCCESS_SIGNAL",
    "AuthGate",
    "RequestGeneration",
    "NavigationStateMachine",
    "DEFAULT_ITEM_LABEL",
    "LoggingNotifier",
    "Notification",
    "Notifier",
    "item_label",
    "DeleteTarget",
    "OperationOrchestrator",
    "PreviewController",
    "DEFAULT_QUIET_WINDOW_SEC",
    "SearchDebouncer",
    "MessageChannel",
    "Subscription",
    "CancellableTimer",
]
