"""Contract of the remote file store the browser depends on."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from drivenav.models import FileEntry


@runtime_checkable
class RemoteFileStoreClient(Protocol):
    """
    Asynchronous remote file store.

    Every call may raise a DriveNavError carrying a human-readable message.
    """

    async def has_valid_token(self) -> bool:
        """Return True if the current user holds a usable token."""

    async def initiate_auth_flow(self) -> str:
        """Start an authorization attempt and return the URL to open."""

    async def complete_auth_flow(self, authorization_response: str) -> None:
        """Finish the attempt with the redirect URL the popup landed on."""

    async def list_for_record(self, record_id: str, object_type: str) -> list[FileEntry]:
        """List the children of the folder linked to a host record."""

    async def list_by_location(self, drive_id: str, item_id: str) -> list[FileEntry]:
        """List the children of a folder."""

    async def search(self, drive_id: str, term: str) -> list[FileEntry]:
        """Search a drive by name."""

    async def upload(self, data: bytes, file_name: str, drive_id: str, item_id: str) -> FileEntry:
        """Upload bytes as a new file inside (drive_id, item_id)."""

    async def create_folder(self, name: str, drive_id: str, parent_item_id: str) -> FileEntry:
        """Create a folder inside (drive_id, parent_item_id)."""

    async def delete(self, item_id: str, drive_id: str) -> None:
        """Delete an item."""

    async def preview_url(self, drive_id: str, item_id: str) -> Optional[str]:
        """Return a preview URL for an item, or None."""
