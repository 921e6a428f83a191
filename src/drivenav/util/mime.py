from __future__ import annotations

import mimetypes

FOLDER_MIME: str = "application/vnd.google-apps.folder"

DEFAULT_UPLOAD_MIME: str = "application/octet-stream"


def is_folder(mime_type: str) -> bool:
    return mime_type == FOLDER_MIME


def guess_upload_mime(file_name: str) -> str:
    """Guess the MIME type sent with an upload; unknown names are sent as octet-stream."""
    guessed, _ = mimetypes.guess_type(file_name)
    return guessed or DEFAULT_UPLOAD_MIME
