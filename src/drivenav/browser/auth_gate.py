"""Authentication gate: token check and the popup sign-in handshake."""

from __future__ import annotations

import asyncio
import logging
import webbrowser
from typing import Any, Awaitable, Callable, Optional

from drivenav.errors import NO_TOKEN_MARKER, DriveNavError
from drivenav.models import AuthState, ErrorInfo, OperationOutcome
from drivenav.store import RemoteFileStoreClient

from .notifications import Notification, Notifier
from .signals import MessageChannel, Subscription

logger = logging.getLogger(__name__)

AUTH_SUCCESS_SIGNAL: str = "DRIVENAV_AUTH_SUCCESS"

Opener = Callable[[str], Any]


def open_in_browser(url: str) -> None:
    webbrowser.open(url, new=1)


class AuthGate:
    """
    UNKNOWN -> CHECKING -> AUTHENTICATED | UNAUTHENTICATED.

    From UNAUTHENTICATED, login() opens the consent page and listens on the
    channel for the completion signal. The listener belongs to that one
    attempt: it is removed on success, on cancel_login(), when a new attempt
    starts, and on close().
    """

    def __init__(
        self,
        store: RemoteFileStoreClient,
        channel: MessageChannel,
        *,
        on_authenticated: Callable[[], Awaitable[Any]],
        notifier: Notifier,
        opener: Optional[Opener] = None,
        completion_signal: str = AUTH_SUCCESS_SIGNAL,
    ) -> None:
        self._store = store
        self._channel = channel
        self._on_authenticated = on_authenticated
        self._notifier = notifier
        self._opener = opener or open_in_browser
        self._completion_signal = completion_signal

        self._state = AuthState.UNKNOWN
        self._subscription: Optional[Subscription] = None
        self._load_task: Optional[asyncio.Task] = None

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def is_authenticated(self) -> bool:
        return self._state is AuthState.AUTHENTICATED

    @property
    def show_login(self) -> bool:
        return self._state is AuthState.UNAUTHENTICATED

    @property
    def login_in_progress(self) -> bool:
        return self._subscription is not None and self._subscription.active

    async def start(self) -> AuthState:
        """Check for a stored token; load the root folder if there is one."""
        if self._state is not AuthState.UNKNOWN:
            return self._state

        self._state = AuthState.CHECKING
        try:
            has_token = await self._store.has_valid_token()
        except Exception as exc:
            # Fail closed: any failure means the user has to sign in.
            if NO_TOKEN_MARKER in str(exc):
                logger.warning("User is not authorized with a token: %s", exc)
            else:
                logger.error("Token check failed: %s", exc, exc_info=not isinstance(exc, DriveNavError))
            self._state = AuthState.UNAUTHENTICATED
            return self._state

        if not has_token:
            self._state = AuthState.UNAUTHENTICATED
            return self._state

        self._state = AuthState.AUTHENTICATED
        await self._on_authenticated()
        return self._state

    async def login(self) -> OperationOutcome:
        """Open the consent popup for a new attempt."""
        if self._state is not AuthState.UNAUTHENTICATED:
            return OperationOutcome("login", "rejected")

        try:
            url = await self._store.initiate_auth_flow()
        except DriveNavError as exc:
            error = ErrorInfo.from_exception(exc)
            logger.error("initiate_auth_flow failed: %s", error.message)
            return OperationOutcome("login", "failed", error=error)

        self.cancel_login()
        self._subscription = self._channel.subscribe(self._on_message)
        self._opener(url)
        return OperationOutcome("login", "success")

    async def complete_login(self, authorization_response: str) -> OperationOutcome:
        """Popup redirect target: exchange the code, then signal completion."""
        try:
            await self._store.complete_auth_flow(authorization_response)
        except DriveNavError as exc:
            error = ErrorInfo.from_exception(exc)
            logger.error("OAuth completion failed: %s", error.message)
            return OperationOutcome("complete_login", "failed", error=error)

        self._channel.post(self._completion_signal)
        return OperationOutcome("complete_login", "success")

    def cancel_login(self) -> None:
        """Forget the current attempt (popup closed without finishing)."""
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    async def wait_ready(self) -> Any:
        """Await the root load started by a completed handshake."""
        task = self._load_task
        if task is None:
            return None
        return await task

    def close(self) -> None:
        self.cancel_login()

    def _on_message(self, payload: Any) -> None:
        if payload != self._completion_signal:
            logger.debug("Ignoring message on auth channel: %r", payload)
            return

        self.cancel_login()
        if self._state is AuthState.AUTHENTICATED:
            return

        self._state = AuthState.AUTHENTICATED
        self._notifier.notify(
            Notification(
                title="Success",
                message="You are signed in and may browse drive files.",
                variant="success",
            )
        )
        self._load_task = asyncio.get_running_loop().create_task(self._on_authenticated())
