"""Debounced name search over the current drive."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from drivenav.errors import DriveNavError
from drivenav.models import ErrorInfo, FileEntry, OperationOutcome, OperationStatus
from drivenav.store import RemoteFileStoreClient

from .generation import RequestGeneration
from .navigation import NavigationStateMachine
from .timer import CancellableTimer

logger = logging.getLogger(__name__)

DEFAULT_QUIET_WINDOW_SEC: float = 0.4


class SearchDebouncer:
    """
    Coalesces keystrokes into one search per quiet window.

    Each on_input() restarts the timer; when it fires the trimmed term
    becomes the active term. An empty term leaves search mode and refreshes
    the listing of the current location.
    """

    def __init__(
        self,
        navigator: NavigationStateMachine,
        store: RemoteFileStoreClient,
        *,
        record_id: str,
        object_type: str,
        quiet_window: float = DEFAULT_QUIET_WINDOW_SEC,
        timer: Optional[CancellableTimer] = None,
    ) -> None:
        self._navigator = navigator
        self._store = store
        self._record_id = record_id
        self._object_type = object_type
        self._quiet_window = quiet_window
        self._timer = timer or CancellableTimer()

        self._generation = RequestGeneration()
        self._term = ""
        self._is_open = False
        self._status = OperationStatus()
        self._task: Optional[asyncio.Task] = None

    @property
    def term(self) -> str:
        return self._term

    @property
    def is_searching(self) -> bool:
        """True while a non-empty term is active."""
        return bool(self._term)

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def pending(self) -> bool:
        return self._timer.pending

    @property
    def status(self) -> OperationStatus:
        return self._status

    # ----------------------------
    # Input
    # ----------------------------
    def on_input(self, raw: str) -> None:
        term = (raw or "").strip()
        logger.debug("search input %r", term)
        self._timer.start(self._quiet_window, lambda: self._settle(term))

    def open(self) -> None:
        self._is_open = True

    async def close(self) -> OperationOutcome:
        """Hide the search box, drop the term and restore the folder listing."""
        self._is_open = False
        self._timer.cancel()
        return await self.apply_term("")

    async def toggle(self) -> Optional[OperationOutcome]:
        if self._is_open:
            return await self.close()
        self.open()
        return None

    async def wait_idle(self) -> Optional[OperationOutcome]:
        """Await the search started by the last timer fire, if any."""
        task = self._task
        if task is None:
            return None
        return await task

    def clear_error(self) -> None:
        self._status = OperationStatus(is_loading=self._status.is_loading)

    def dispose(self) -> None:
        self._timer.cancel()
        self._generation.invalidate()

    # ----------------------------
    # Execution
    # ----------------------------
    async def apply_term(self, term: str) -> OperationOutcome:
        self._term = term.strip()
        if not self._term:
            self._generation.invalidate()
            self._status = OperationStatus()
            return await self._navigator.refresh()
        return await self._run_search(self._term)

    def _settle(self, term: str) -> None:
        self._task = asyncio.get_running_loop().create_task(self.apply_term(term))

    async def _run_search(self, term: str) -> OperationOutcome:
        token = self._generation.issue()
        listing_generation = self._navigator.listing_generation
        self._status = OperationStatus(is_loading=True)
        drive_id = self._navigator.current_target.drive_id

        try:
            if drive_id:
                results = await self._store.search(drive_id, term)
            else:
                # No drive known yet: filter the record's root listing.
                raw = await self._store.list_for_record(self._record_id, self._object_type)
                results = _filter_by_name(raw, term)
        except DriveNavError as exc:
            if not self._generation.is_current(token):
                return OperationOutcome("search", "stale", generation=token)
            error = ErrorInfo.from_exception(exc)
            logger.error("search for %r failed: %s", term, error.message)
            self._status = OperationStatus(error=error)
            return OperationOutcome("search", "failed", error=error, generation=token)

        if not self._generation.is_current(token):
            logger.debug("Discarding stale search result for %r", term)
            return OperationOutcome("search", "stale", generation=token)

        self._status = OperationStatus()
        if not self._navigator.apply_search_results(results, listing_generation):
            logger.debug("Navigation moved on; dropping search result for %r", term)
            return OperationOutcome("search", "stale", generation=token)
        return OperationOutcome("search", "success", generation=token)


def _filter_by_name(entries: list[FileEntry], term: str) -> list[FileEntry]:
    needle = term.lower()
    return [e for e in entries if e.name and needle in e.name.lower()]
