"""Remote file store exports for drivenav."""

from __future__ import annotations

from .base import RemoteFileStoreClient
from .drive_store import GoogleDriveFileStore

__all__ = ["RemoteFileStoreClient", "GoogleDriveFileStore"]
