"""File preview with fallback to the item's own link."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from drivenav.errors import DriveNavError
from drivenav.models import OperationOutcome, PreviewState, RowAction
from drivenav.store import RemoteFileStoreClient

logger = logging.getLogger(__name__)


class PreviewController:
    """
    Resolves a preview URL for a row.

    When the row lacks coordinates, or no preview URL can be resolved, the
    row's href is opened directly instead.
    """

    def __init__(self, store: RemoteFileStoreClient, opener: Callable[[str], Any]) -> None:
        self._store = store
        self._opener = opener
        self._preview: Optional[PreviewState] = None
        self._is_loading = False

    @property
    def preview(self) -> Optional[PreviewState]:
        return self._preview

    @property
    def is_open(self) -> bool:
        return self._preview is not None

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    async def open_preview(self, row: RowAction) -> OperationOutcome:
        if not row.drive_id or not row.id:
            logger.warning("Missing drive_id or item id for %r; opening link instead", row.name)
            return self._fall_back(row)

        self._is_loading = True
        try:
            url = await self._store.preview_url(row.drive_id, row.id)
        except DriveNavError as exc:
            logger.warning("Error getting preview URL for %s, falling back to link: %s", row.id, exc)
            return self._fall_back(row)
        finally:
            self._is_loading = False

        if not url:
            logger.warning("No preview URL for %s, falling back to link", row.id)
            return self._fall_back(row)

        self._preview = PreviewState(file_name=row.name, preview_url=url, download_url=row.href)
        return OperationOutcome("preview", "success", item_name=row.name)

    def close_preview(self) -> None:
        self._preview = None

    def _fall_back(self, row: RowAction) -> OperationOutcome:
        if row.href:
            self._opener(row.href)
            return OperationOutcome("preview", "success", item_name=row.name)
        return OperationOutcome("preview", "failed", item_name=row.name)
