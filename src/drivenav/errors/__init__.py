"""Public error exports for drivenav."""

from __future__ import annotations

from .exceptions import (
    MISSING_LINK_MARKER,
    NO_TOKEN_MARKER,
    AccessDeniedError,
    AuthError,
    ConfigurationError,
    DriveNavError,
    HttpErrorInfo,
    InvalidStateError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RemoteOperationError,
    ValidationError,
    classify_error,
    map_http_error,
)

__all__ = [
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
    "HttpErrorInfo",
    "classify_error",
    "map_http_error",
]
