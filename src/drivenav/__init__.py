"""drivenav public API."""

from __future__ import annotations

from drivenav.auth import AuthInfo, OAuthClient
from drivenav.browser import (
    AUTH_SUCCESS_SIGNAL,
    AuthGate,
    CancellableTimer,
    LoggingNotifier,
    MessageChannel,
    NavigationStateMachine,
    Notification,
    Notifier,
    OperationOrchestrator,
    PreviewController,
    SearchDebouncer,
)
from drivenav.errors import (
    MISSING_LINK_MARKER,
    NO_TOKEN_MARKER,
    AccessDeniedError,
    AuthError,
    ConfigurationError,
    DriveNavError,
    InvalidStateError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RemoteOperationError,
    ValidationError,
)
from drivenav.manager import DriveBrowser
from drivenav.models import (
    AuthState,
    Breadcrumb,
    ErrorInfo,
    FileEntry,
    Location,
    OperationOutcome,
    OperationStatus,
    PreviewState,
    RowAction,
    UploadFile,
)
from drivenav.settings import BrowserSettings
from drivenav.store import GoogleDriveFileStore, RemoteFileStoreClient
from drivenav.util.format import human_date, human_size, icon_for

__all__ = [
    # High-level
    "DriveBrowser",
    "BrowserSettings",
    # Auth
    "AuthInfo",
    "OAuthClient",
    "AUTH_SUCCESS_SIGNAL",
    # Core
    "AuthGate",
    "NavigationStateMachine",
    "SearchDebouncer",
    "OperationOrchestrator",
    "PreviewController",
    "CancellableTimer",
    "MessageChannel",
    "Notification",
    "Notifier",
    "LoggingNotifier",
    # Store
    "RemoteFileStoreClient",
    "GoogleDriveFileStore",
    # Models
    "AuthState",
    "Breadcrumb",
    "ErrorInfo",
    "FileEntry",
    "Location",
    "OperationOutcome",
    "OperationStatus",
    "PreviewState",
    "RowAction",
    "UploadFile",
    # Formatting
    "icon_for",
    "human_size",
    "human_date",
    # Errors
    "MISSING_LINK_MARKER",
    "NO_TOKEN_MARKER",
    "DriveNavError",
    "AuthError",
    "ConfigurationError",
    "ValidationError",
    "InvalidStateError",
    "RemoteOperationError",
    "AccessDeniedError",
    "NotFoundError",
    "RateLimitError",
    "NetworkError",
]
