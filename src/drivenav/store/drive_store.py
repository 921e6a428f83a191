"""Google Drive implementation of RemoteFileStoreClient."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from drivenav.auth import AuthInfo, OAuthClient
from drivenav.controller import GoogleDriveController
from drivenav.models import FileEntry

logger = logging.getLogger(__name__)


class GoogleDriveFileStore:
    """
    Async adapter over the blocking Drive controller.

    Each call runs on a worker thread via asyncio.to_thread so the event loop
    stays responsive while requests (and their retries) are in flight. The
    controller is built lazily, once a token exists.
    """

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
    ) -> None:
        self._oauth = OAuthClient(auth_info)
        self._scopes = list(scopes) if scopes is not None else list(GoogleDriveController.DEFAULT_SCOPES)
        self._supports_all_drives = supports_all_drives
        self._controller: Optional[GoogleDriveController] = None

    @classmethod
    def from_controller(
        cls,
        controller: GoogleDriveController,
        oauth_client: OAuthClient,
        *,
        scopes: Optional[Sequence[str]] = None,
    ) -> "GoogleDriveFileStore":
        """Create a store around an injected controller (useful for tests)."""
        obj = cls.__new__(cls)
        obj._oauth = oauth_client
        obj._scopes = list(scopes) if scopes is not None else list(GoogleDriveController.DEFAULT_SCOPES)
        obj._supports_all_drives = True
        obj._controller = controller
        return obj

    # ----------------------------
    # Auth
    # ----------------------------
    async def has_valid_token(self) -> bool:
        return await asyncio.to_thread(self._oauth.has_valid_token, self._scopes)

    async def initiate_auth_flow(self) -> str:
        return await asyncio.to_thread(self._oauth.authorization_url, self._scopes)

    async def complete_auth_flow(self, authorization_response: str) -> None:
        await asyncio.to_thread(self._oauth.complete_authorization, authorization_response)
        # A fresh token means a fresh service.
        self._controller = None

    # ----------------------------
    # Listing
    # ----------------------------
    async def list_for_record(self, record_id: str, object_type: str) -> list[FileEntry]:
        controller = await self._get_controller()
        return await asyncio.to_thread(controller.list_for_record, record_id, object_type)

    async def list_by_location(self, drive_id: str, item_id: str) -> list[FileEntry]:
        controller = await self._get_controller()
        return await asyncio.to_thread(controller.list_children, drive_id, item_id)

    async def search(self, drive_id: str, term: str) -> list[FileEntry]:
        controller = await self._get_controller()
        return await asyncio.to_thread(controller.search, drive_id, term)

    # ----------------------------
    # Mutations
    # ----------------------------
    async def upload(self, data: bytes, file_name: str, drive_id: str, item_id: str) -> FileEntry:
        controller = await self._get_controller()
        entry = await asyncio.to_thread(controller.upload, data, file_name, drive_id, item_id)
        logger.info("Uploaded %s (%d bytes) into %s/%s", file_name, len(data), drive_id, item_id)
        return entry

    async def create_folder(self, name: str, drive_id: str, parent_item_id: str) -> FileEntry:
        controller = await self._get_controller()
        entry = await asyncio.to_thread(controller.create_folder, name, drive_id, parent_item_id)
        logger.info("Created folder %s in %s/%s", name, drive_id, parent_item_id)
        return entry

    async def delete(self, item_id: str, drive_id: str) -> None:
        controller = await self._get_controller()
        await asyncio.to_thread(controller.delete, item_id, drive_id)
        logger.info("Deleted %s from %s", item_id, drive_id)

    async def preview_url(self, drive_id: str, item_id: str) -> Optional[str]:
        controller = await self._get_controller()
        return await asyncio.to_thread(controller.preview_url, drive_id, item_id)

    # ----------------------------
    # Internals
    # ----------------------------
    async def _get_controller(self) -> GoogleDriveController:
        if self._controller is None:
            self._controller = await asyncio.to_thread(
                GoogleDriveController,
                self._oauth,
                scopes=self._scopes,
                supports_all_drives=self._supports_all_drives,
            )
        return self._controller
