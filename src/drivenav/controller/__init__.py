"""Internal controller exports for drivenav."""

from __future__ import annotations

from .drive_controller import GoogleDriveController
from .fields import MY_DRIVE_ID

__all__ = ["GoogleDriveController", "MY_DRIVE_ID"]
