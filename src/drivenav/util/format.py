"""Display formatting for file metadata (icon, size, date)."""

from __future__ import annotations

import math
from typing import Optional

from .time import parse_rfc3339

UNKNOWN_ICON: str = "doctype:unknown"

ICON_BY_EXTENSION: dict[str, str] = {
    "pdf": "doctype:pdf",
    "doc": "doctype:word",
    "docx": "doctype:word",
    "xls": "doctype:excel",
    "xlsx": "doctype:excel",
    "ppt": "doctype:ppt",
    "pptx": "doctype:ppt",
    "txt": "doctype:txt",
    "jpg": "doctype:image",
    "jpeg": "doctype:image",
    "png": "doctype:image",
    "gif": "doctype:image",
    "zip": "doctype:zip",
}

SIZE_UNITS: tuple[str, ...] = ("Bytes", "KB", "MB", "GB")


def icon_for(name: Optional[str]) -> str:
    """Map a file name to its icon name by (lowercased) extension."""
    if not name or "." not in name:
        return UNKNOWN_ICON
    ext = name.rsplit(".", 1)[1].lower()
    return ICON_BY_EXTENSION.get(ext, UNKNOWN_ICON)


def human_size(size: Optional[int]) -> str:
    """
    Format a byte count as e.g. '1.5 KB'.

    Zero or missing sizes render as an empty string. Sizes beyond the unit
    table stay in GB.
    """
    if not size or size < 0:
        return ""
    index = int(math.floor(math.log(size) / math.log(1024)))
    index = max(0, min(index, len(SIZE_UNITS) - 1))
    return f"{size / math.pow(1024, index):.1f} {SIZE_UNITS[index]}"


def human_date(iso: Optional[str]) -> str:
    """Format an RFC3339 timestamp as 'Mon D, YYYY' in local time; '' if absent or invalid."""
    if not iso:
        return ""
    try:
        dt = parse_rfc3339(iso).astimezone()
    except ValueError:
        return ""
    return f"{dt:%b} {dt.day}, {dt.year}"
