"""Data model for listed Drive items."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from drivenav.util.format import human_date, human_size, icon_for

from .location import Location


@dataclass(frozen=True)
class FileEntry:
    """
    One row of a listing.

    Notes:
        - Folders carry no icon/size/date display fields (empty strings).
        - drive_id comes from the parent reference for files and folders alike.
    """

    id: str
    name: str
    is_folder: bool
    drive_id: Optional[str]
    parent_item_id: Optional[str]

    size: Optional[int] = None
    last_modified_iso: Optional[str] = None
    web_url: Optional[str] = None

    icon_name: str = ""
    formatted_size: str = ""
    formatted_date: str = ""

    @property
    def parent_location(self) -> Location:
        return Location(self.drive_id, self.parent_item_id)


def make_file_entry(
    *,
    id: str,
    name: str,
    is_folder: bool,
    drive_id: Optional[str],
    parent_item_id: Optional[str],
    size: Optional[int] = None,
    last_modified_iso: Optional[str] = None,
    web_url: Optional[str] = None,
) -> FileEntry:
    """Build a FileEntry and fill the display fields for files."""
    if is_folder:
        return FileEntry(
            id=id,
            name=name,
            is_folder=True,
            drive_id=drive_id,
            parent_item_id=parent_item_id,
            size=size,
            last_modified_iso=last_modified_iso,
            web_url=web_url,
        )

    return FileEntry(
        id=id,
        name=name,
        is_folder=False,
        drive_id=drive_id,
        parent_item_id=parent_item_id,
        size=size,
        last_modified_iso=last_modified_iso,
        web_url=web_url,
        icon_name=icon_for(name),
        formatted_size=human_size(size),
        formatted_date=human_date(last_modified_iso),
    )
