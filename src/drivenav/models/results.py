"""Status and result models for browser operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional

from drivenav.errors import DriveNavError, classify_error

ErrorKind = Literal["auth", "configuration", "remote", "validation"]
OutcomeStatus = Literal["success", "failed", "stale", "rejected"]


class AuthState(str, Enum):
    """Authentication state of the browser."""

    UNKNOWN = "UNKNOWN"
    CHECKING = "CHECKING"
    AUTHENTICATED = "AUTHENTICATED"
    UNAUTHENTICATED = "UNAUTHENTICATED"


@dataclass(frozen=True)
class ErrorInfo:
    """User-visible error (banner or notification)."""

    message: str
    kind: ErrorKind = "remote"

    @property
    def is_configuration_error(self) -> bool:
        return self.kind == "configuration"

    @property
    def is_auth_error(self) -> bool:
        return self.kind == "auth"

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorInfo":
        err: DriveNavError = classify_error(exc)
        return cls(message=err.message, kind=err.kind)  # type: ignore[arg-type]


@dataclass(frozen=True)
class OperationStatus:
    """Loading/error slot for one screen."""

    is_loading: bool = False
    error: Optional[ErrorInfo] = None


@dataclass(frozen=True)
class OperationOutcome:
    """Result of a single navigation, search or mutation call."""

    operation: str
    status: OutcomeStatus

    error: Optional[ErrorInfo] = None
    item_name: Optional[str] = None
    generation: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"
