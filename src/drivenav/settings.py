"""Browser configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from drivenav.browser.auth_gate import AUTH_SUCCESS_SIGNAL
from drivenav.browser.search import DEFAULT_QUIET_WINDOW_SEC

DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)

ENV_PREFIX: str = "DRIVENAV_"


@dataclass(frozen=True)
class BrowserSettings:
    """
    Settings for one browser instance.

    record_id / object_type identify the host record whose linked folder is
    the root of the tree.
    """

    record_id: str
    object_type: str

    quiet_window_sec: float = DEFAULT_QUIET_WINDOW_SEC
    completion_signal: str = AUTH_SUCCESS_SIGNAL
    scopes: tuple[str, ...] = field(default=DEFAULT_SCOPES)
    supports_all_drives: bool = True

    def __post_init__(self) -> None:
        for name in ("record_id", "object_type", "completion_signal"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"BrowserSettings.{name} must be a non-empty string")

        if self.quiet_window_sec < 0:
            raise ValueError("BrowserSettings.quiet_window_sec must be >= 0")

        if not self.scopes or not all(isinstance(s, str) and s.strip() for s in self.scopes):
            raise ValueError("BrowserSettings.scopes must be a non-empty sequence of strings")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BrowserSettings":
        """
        Read settings from DRIVENAV_* variables.

        Required: DRIVENAV_RECORD_ID, DRIVENAV_OBJECT_TYPE.
        Optional: DRIVENAV_QUIET_WINDOW_MS, DRIVENAV_SCOPES (comma-separated),
        DRIVENAV_SUPPORTS_ALL_DRIVES (0/1).
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> str:
            return env.get(ENV_PREFIX + name, "").strip()

        kwargs: dict = {
            "record_id": _get("RECORD_ID"),
            "object_type": _get("OBJECT_TYPE"),
        }

        quiet_ms = _get("QUIET_WINDOW_MS")
        if quiet_ms:
            kwargs["quiet_window_sec"] = int(quiet_ms) / 1000.0

        scopes_raw = _get("SCOPES")
        if scopes_raw:
            kwargs["scopes"] = tuple(s.strip() for s in scopes_raw.split(",") if s.strip())

        all_drives = _get("SUPPORTS_ALL_DRIVES")
        if all_drives:
            kwargs["supports_all_drives"] = all_drives.lower() not in ("0", "false", "no")

        return cls(**kwargs)
