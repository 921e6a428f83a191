"""Payloads handed to the core by the interaction layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RowAction:
    """An actionable row (folder click, preview, delete)."""

    id: Optional[str]
    drive_id: Optional[str]
    name: str = ""
    href: Optional[str] = None


@dataclass(frozen=True)
class UploadFile:
    """Raw file from the picker or a drag-and-drop."""

    data: bytes
    name: str


@dataclass(frozen=True)
class PreviewState:
    """What the preview modal shows."""

    file_name: str
    preview_url: str
    download_url: Optional[str] = None
