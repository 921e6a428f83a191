from __future__ import annotations

import os

ACCEPTED_UPLOAD_EXTENSIONS: tuple[str, ...] = (
    ".pdf",
    ".doc",
    ".docx",
    ".xls",
    ".xlsx",
    ".ppt",
    ".pptx",
    ".txt",
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".zip",
)


def is_accepted_upload(file_name: str) -> bool:
    """Return True if the file name carries an allowed extension (case-insensitive)."""
    if not file_name:
        return False
    _, ext = os.path.splitext(file_name)
    return ext.lower() in ACCEPTED_UPLOAD_EXTENSIONS


def accepted_formats_label() -> str:
    """Comma-joined extension list shown next to the file picker."""
    return ", ".join(ACCEPTED_UPLOAD_EXTENSIONS)
