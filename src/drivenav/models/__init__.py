"""Public model exports for drivenav."""

from __future__ import annotations

from .file_entry import FileEntry, make_file_entry
from .location import (
    Breadcrumb,
    Location,
    Trail,
    append_crumb,
    build_trail,
    trail_location,
    truncate_trail,
)
from .payloads import PreviewState, RowAction, UploadFile
from .results import (
    AuthState,
    ErrorInfo,
    ErrorKind,
    OperationOutcome,
    OperationStatus,
    OutcomeStatus,
)

__all__ = [
    "Location",
    "Breadcrumb",
    "Trail",
    "build_trail",
    "append_crumb",
    "truncate_trail",
    "trail_location",
    "FileEntry",
    "make_file_entry",
    "RowAction",
    "UploadFile",
    "PreviewState",
    "AuthState",
    "ErrorInfo",
    "ErrorKind",
    "OperationStatus",
    "OperationOutcome",
    "OutcomeStatus",
]
