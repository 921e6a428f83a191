"""DriveBrowser: wires auth, navigation, search and mutations for one host record."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from drivenav.auth import AuthInfo
from drivenav.browser import (
    AuthGate,
    CancellableTimer,
    LoggingNotifier,
    MessageChannel,
    NavigationStateMachine,
    Notifier,
    OperationOrchestrator,
    PreviewController,
    SearchDebouncer,
)
from drivenav.browser.auth_gate import open_in_browser
from drivenav.errors import ValidationError
from drivenav.models import (
    AuthState,
    ErrorInfo,
    FileEntry,
    Location,
    OperationOutcome,
    OperationStatus,
    RowAction,
    Trail,
    UploadFile,
)
from drivenav.settings import BrowserSettings
from drivenav.store import GoogleDriveFileStore, RemoteFileStoreClient

logger = logging.getLogger(__name__)


class DriveBrowser:
    """High-level browser for the folder linked to one host record."""

    def __init__(
        self,
        settings: BrowserSettings,
        auth_info: AuthInfo,
        *,
        notifier: Optional[Notifier] = None,
        channel: Optional[MessageChannel] = None,
        opener: Optional[Callable[[str], Any]] = None,
    ) -> None:
        store = GoogleDriveFileStore(
            auth_info,
            scopes=settings.scopes,
            supports_all_drives=settings.supports_all_drives,
        )
        self._wire(settings, store, notifier, channel, opener, None)

    @classmethod
    def from_store(
        cls,
        settings: BrowserSettings,
        store: RemoteFileStoreClient,
        *,
        notifier: Optional[Notifier] = None,
        channel: Optional[MessageChannel] = None,
        opener: Optional[Callable[[str], Any]] = None,
        timer: Optional[CancellableTimer] = None,
    ) -> "DriveBrowser":
        """Create a browser around an injected store (useful for tests)."""
        obj = cls.__new__(cls)
        obj._wire(settings, store, notifier, channel, opener, timer)
        return obj

    def _wire(
        self,
        settings: BrowserSettings,
        store: RemoteFileStoreClient,
        notifier: Optional[Notifier],
        channel: Optional[MessageChannel],
        opener: Optional[Callable[[str], Any]],
        timer: Optional[CancellableTimer],
    ) -> None:
        self._settings = settings
        self._store = store
        self._notifier = notifier or LoggingNotifier()
        self._channel = channel or MessageChannel()
        opener = opener or open_in_browser

        self._navigator = NavigationStateMachine(
            store,
            record_id=settings.record_id,
            object_type=settings.object_type,
        )
        self._auth = AuthGate(
            store,
            self._channel,
            on_authenticated=self._navigator.go_to_root,
            notifier=self._notifier,
            opener=opener,
            completion_signal=settings.completion_signal,
        )
        self._search = SearchDebouncer(
            self._navigator,
            store,
            record_id=settings.record_id,
            object_type=settings.object_type,
            quiet_window=settings.quiet_window_sec,
            timer=timer,
        )
        self._operations = OperationOrchestrator(store, self._navigator, self._notifier)
        self._preview = PreviewController(store, opener)

        # A settled navigation is the latest word on the screen status.
        self._navigator.add_settle_listener(self._operations.clear_error)
        self._navigator.add_settle_listener(self._search.clear_error)

    # ----------------------------
    # Components and state
    # ----------------------------
    @property
    def settings(self) -> BrowserSettings:
        return self._settings

    @property
    def channel(self) -> MessageChannel:
        return self._channel

    @property
    def auth(self) -> AuthGate:
        return self._auth

    @property
    def navigator(self) -> NavigationStateMachine:
        return self._navigator

    @property
    def search(self) -> SearchDebouncer:
        return self._search

    @property
    def operations(self) -> OperationOrchestrator:
        return self._operations

    @property
    def preview(self) -> PreviewController:
        return self._preview

    @property
    def auth_state(self) -> AuthState:
        return self._auth.state

    @property
    def location(self) -> Location:
        return self._navigator.location

    @property
    def breadcrumbs(self) -> Trail:
        return self._navigator.breadcrumbs

    @property
    def files(self) -> tuple[FileEntry, ...]:
        return self._navigator.files

    @property
    def status(self) -> OperationStatus:
        """Screen status: loading if anything is in flight; mutation errors win over listing errors."""
        parts = (self._navigator.status, self._search.status, self._operations.status)
        is_loading = any(p.is_loading for p in parts) or self._preview.is_loading
        error = self._operations.status.error or self._search.status.error or self._navigator.status.error
        return OperationStatus(is_loading=is_loading, error=error)

    @property
    def can_go_back(self) -> bool:
        return len(self.breadcrumbs) >= 1 and self._navigator.current_target.is_resolved

    @property
    def can_upload(self) -> bool:
        return self._navigator.current_target.is_resolved and not self._operations.busy

    # ----------------------------
    # Auth
    # ----------------------------
    async def start(self) -> AuthState:
        return await self._auth.start()

    async def login(self) -> OperationOutcome:
        return await self._auth.login()

    async def complete_login(self, authorization_response: str) -> OperationOutcome:
        return await self._auth.complete_login(authorization_response)

    def cancel_login(self) -> None:
        self._auth.cancel_login()

    # ----------------------------
    # Navigation
    # ----------------------------
    async def open_folder(self, row: RowAction) -> OperationOutcome:
        if not self._auth.is_authenticated:
            return OperationOutcome("go_to_folder", "rejected")
        if not row.id or not row.drive_id:
            error = ErrorInfo.from_exception(ValidationError("Folder row is missing its drive or item id."))
            return OperationOutcome("go_to_folder", "failed", error=error)
        return await self._navigator.go_to_folder(row.drive_id, row.id, row.name)

    async def go_to_breadcrumb(self, index: int) -> OperationOutcome:
        if not self._auth.is_authenticated:
            return OperationOutcome("go_to_breadcrumb", "rejected")
        return await self._navigator.go_to_breadcrumb(index)

    async def go_back(self) -> OperationOutcome:
        if not self._auth.is_authenticated:
            return OperationOutcome("go_back", "rejected")
        return await self._navigator.go_back()

    async def refresh(self) -> OperationOutcome:
        if not self._auth.is_authenticated:
            return OperationOutcome("refresh", "rejected")
        return await self._navigator.refresh()

    # ----------------------------
    # Search
    # ----------------------------
    def on_search_input(self, raw: str) -> None:
        if self._auth.is_authenticated:
            self._search.on_input(raw)

    async def toggle_search(self) -> Optional[OperationOutcome]:
        return await self._search.toggle()

    # ----------------------------
    # Mutations
    # ----------------------------
    async def upload(self, file: UploadFile) -> OperationOutcome:
        if not self._auth.is_authenticated:
            return OperationOutcome("upload", "rejected", item_name=file.name)
        return await self._operations.upload_file(file)

    async def upload_dropped(self, files: Sequence[UploadFile]) -> OperationOutcome:
        if not self._auth.is_authenticated:
            return OperationOutcome("upload", "rejected")
        return await self._operations.upload_dropped(files)

    async def create_folder(self, name: str) -> OperationOutcome:
        if not self._auth.is_authenticated:
            return OperationOutcome("create_folder", "rejected", item_name=name)
        return await self._operations.create_folder(name)

    def request_delete(self, row: RowAction) -> OperationOutcome:
        if not self._auth.is_authenticated:
            return OperationOutcome("request_delete", "rejected", item_name=row.name)
        return self._operations.request_delete(row.id, row.name)

    def cancel_delete(self) -> None:
        if self._auth.is_authenticated:
            self._operations.cancel_delete()

    async def confirm_delete(self) -> OperationOutcome:
        if not self._auth.is_authenticated:
            return OperationOutcome("delete", "rejected")
        return await self._operations.confirm_delete()

    # ----------------------------
    # Preview
    # ----------------------------
    async def open_preview(self, row: RowAction) -> OperationOutcome:
        return await self._preview.open_preview(row)

    def close_preview(self) -> None:
        self._preview.close_preview()

    # ----------------------------
    # Teardown
    # ----------------------------
    def close(self) -> None:
        """Cancel the search timer and drop the auth listener."""
        self._search.dispose()
        self._auth.close()
        logger.debug("DriveBrowser for %s/%s closed", self._settings.object_type, self._settings.record_id)
