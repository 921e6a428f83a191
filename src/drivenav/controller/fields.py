"""Field definitions and constants for Google Drive API requests."""

from __future__ import annotations

FILE_FIELDS: str = (
    "id,"
    "name,"
    "mimeType,"
    "parents,"
    "driveId,"
    "trashed,"
    "modifiedTime,"
    "size,"
    "webViewLink"
)

LIST_FIELDS: str = f"nextPageToken,files({FILE_FIELDS})"

PREVIEW_FIELDS: str = "id,webViewLink"

# Items in "My Drive" carry no driveId; this stands in so every entry has one.
MY_DRIVE_ID: str = "my-drive"

# appProperties on the folder linked to a host record.
RECORD_ID_PROPERTY: str = "drivenavRecordId"
OBJECT_TYPE_PROPERTY: str = "drivenavObjectType"
