"""Exception hierarchy and remote error mapping for drivenav."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

# Remote messages containing this marker mean the record has no linked folder.
MISSING_LINK_MARKER: str = "Missing drive link"

# Remote messages containing this marker mean the user has never signed in.
NO_TOKEN_MARKER: str = "No token record found for this user"


class DriveNavError(Exception):
    """
    Base exception for drivenav.

    Attributes:
        details: Optional structured information (e.g., HTTP status, reason).
        cause: Optional original exception that triggered this error.
    """

    kind: str = "remote"

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause

    @property
    def message(self) -> str:
        return str(self)


class AuthError(DriveNavError):
    """Raised when the token check, refresh or OAuth exchange fails."""

    kind = "auth"


class ConfigurationError(DriveNavError):
    """Raised when the record has no linked root folder."""

    kind = "configuration"


class ValidationError(DriveNavError):
    """Raised when a local precondition fails (never reaches the network)."""

    kind = "validation"


class InvalidStateError(DriveNavError):
    """Raised when the library is used in an invalid state (e.g., no auth flow started)."""

    kind = "validation"


class RemoteOperationError(DriveNavError):
    """Raised for listing/search/upload/delete/create-folder failures."""


class AccessDeniedError(RemoteOperationError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class NotFoundError(RemoteOperationError):
    """Raised when a Drive resource is not found (HTTP 404)."""


class RateLimitError(RemoteOperationError):
    """Raised when rate-limited (HTTP 429, or 403 with a quota reason)."""


class NetworkError(RemoteOperationError):
    """Raised when network/timeout issues prevent the request."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to drivenav exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "rateLimitExceeded",
    "userRateLimitExceeded",
    "dailyLimitExceeded",
    "usageLimits",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> DriveNavError:
    """
    Map an HTTP error to a drivenav exception.

    Policy:
        - 401 -> AuthError
        - 403 -> AccessDeniedError, but RateLimitError if quota-related
        - 404 -> NotFoundError
        - 429 -> RateLimitError
        - otherwise -> RemoteOperationError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if _is_quota_reason(info.reason):
            return RateLimitError(message, details=details, cause=cause)
        return AccessDeniedError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return RemoteOperationError(message, details=details, cause=cause)


def classify_error(exc: BaseException) -> DriveNavError:
    """
    Normalise any exception into the drivenav taxonomy.

    The marker strings win over the exception type: a remote error whose
    message names a missing link is a ConfigurationError even if the store
    raised it as a generic failure.
    """
    message = str(exc) or exc.__class__.__name__
    if MISSING_LINK_MARKER in message and not isinstance(exc, ConfigurationError):
        return ConfigurationError(message, cause=exc)
    if NO_TOKEN_MARKER in message and not isinstance(exc, AuthError):
        return AuthError(message, cause=exc)
    if isinstance(exc, DriveNavError):
        return exc
    return RemoteOperationError(message, cause=exc)
