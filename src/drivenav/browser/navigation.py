"""Folder navigation: current location, breadcrumb trail and the displayed listing."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from drivenav.errors import DriveNavError, ValidationError
from drivenav.models import (
    Breadcrumb,
    ErrorInfo,
    FileEntry,
    Location,
    OperationOutcome,
    OperationStatus,
    Trail,
    append_crumb,
    build_trail,
    truncate_trail,
)
from drivenav.store import RemoteFileStoreClient

from .generation import RequestGeneration

logger = logging.getLogger(__name__)


class NavigationStateMachine:
    """
    Owns "where am I": Location, breadcrumb trail and the file list.

    Every navigation is committed only when its listing call succeeds and is
    still the latest one issued. A failed or stale fetch leaves Location,
    breadcrumbs and the file list exactly as they were.
    """

    def __init__(
        self,
        store: RemoteFileStoreClient,
        *,
        record_id: str,
        object_type: str,
    ) -> None:
        self._store = store
        self._record_id = record_id
        self._object_type = object_type

        self._location: Location = Location.ROOT
        self._root_location: Optional[Location] = None
        self._trail: Trail = ()
        self._files: tuple[FileEntry, ...] = ()
        self._status = OperationStatus()
        self._listing = RequestGeneration()
        self._settle_listeners: list[Callable[[], None]] = []

    # ----------------------------
    # State
    # ----------------------------
    @property
    def location(self) -> Location:
        return self._location

    @property
    def root_location(self) -> Optional[Location]:
        """Coordinates of the record's linked folder, once a root listing revealed them."""
        return self._root_location

    @property
    def current_target(self) -> Location:
        """Folder that uploads, deletes and new folders apply to."""
        if self._location.is_root:
            return self._root_location or Location.ROOT
        return self._location

    @property
    def breadcrumbs(self) -> Trail:
        return self._trail

    @property
    def files(self) -> tuple[FileEntry, ...]:
        return self._files

    @property
    def status(self) -> OperationStatus:
        return self._status

    def add_settle_listener(self, callback: Callable[[], None]) -> None:
        """Call back whenever a navigation settles (success or current failure)."""
        self._settle_listeners.append(callback)

    @property
    def listing_generation(self) -> int:
        return self._listing.latest

    # ----------------------------
    # Navigation
    # ----------------------------
    async def go_to_root(self) -> OperationOutcome:
        return await self._load("go_to_root", Location.ROOT, ())

    async def go_to_folder(self, drive_id: str, item_id: str, name: str) -> OperationOutcome:
        trail = append_crumb(self._trail, name, drive_id, item_id)
        return await self._load("go_to_folder", Location(drive_id, item_id), trail)

    async def go_to_breadcrumb(self, index: int) -> OperationOutcome:
        try:
            trail = truncate_trail(self._trail, index)
        except IndexError as exc:
            return self._reject("go_to_breadcrumb", ValidationError(str(exc), cause=exc))
        return await self._open_trail("go_to_breadcrumb", trail)

    async def go_back(self) -> OperationOutcome:
        if len(self._trail) <= 1:
            return await self.go_to_root()
        return await self._open_trail("go_back", build_trail(self._trail[:-1]))

    async def refresh(self) -> OperationOutcome:
        return await self._load("refresh", self._location, self._trail)

    def apply_search_results(self, entries: Iterable[FileEntry], listing_generation: int) -> bool:
        """
        Show search results in place of the listing.

        Returns False (and changes nothing) if a navigation was issued after
        the search started. Once applied, any listing still in flight is
        stale: it was issued before these results arrived.
        """
        if listing_generation != self._listing.latest:
            return False
        self._files = tuple(entries)
        self._listing.invalidate()
        self._status = OperationStatus()
        return True

    # ----------------------------
    # Internals
    # ----------------------------
    async def _open_trail(self, operation: str, trail: Trail) -> OperationOutcome:
        crumb: Breadcrumb = trail[-1]
        if not crumb.has_coordinates:
            return await self.go_to_root()
        return await self._load(operation, crumb.location, trail)

    async def _load(self, operation: str, location: Location, trail: Trail) -> OperationOutcome:
        token = self._listing.issue()
        self._status = OperationStatus(is_loading=True, error=self._status.error)

        try:
            if location.is_root:
                entries = await self._store.list_for_record(self._record_id, self._object_type)
            else:
                entries = await self._store.list_by_location(location.drive_id, location.item_id)  # type: ignore[arg-type]
        except DriveNavError as exc:
            if not self._listing.is_current(token):
                logger.debug("Discarding stale %s failure (generation %d)", operation, token)
                return OperationOutcome(operation, "stale", generation=token)

            error = ErrorInfo.from_exception(exc)
            if error.is_configuration_error:
                logger.warning("%s: record %s has no linked folder: %s", operation, self._record_id, error.message)
            else:
                logger.error("%s failed for %s: %s", operation, location, error.message)
            self._status = OperationStatus(is_loading=False, error=error)
            self._notify_settled()
            return OperationOutcome(operation, "failed", error=error, generation=token)

        if not self._listing.is_current(token):
            logger.debug("Discarding stale %s result (generation %d)", operation, token)
            return OperationOutcome(operation, "stale", generation=token)

        self._location = location
        self._trail = trail
        self._files = tuple(entries)
        if location.is_root and self._files:
            self._root_location = self._files[0].parent_location
        self._status = OperationStatus()
        self._notify_settled()
        return OperationOutcome(operation, "success", generation=token)

    def _reject(self, operation: str, exc: ValidationError) -> OperationOutcome:
        error = ErrorInfo.from_exception(exc)
        self._status = OperationStatus(is_loading=self._status.is_loading, error=error)
        self._notify_settled()
        return OperationOutcome(operation, "failed", error=error)

    def _notify_settled(self) -> None:
        for callback in list(self._settle_listeners):
            callback()
