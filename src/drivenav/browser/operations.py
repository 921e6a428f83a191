"""Upload, delete and create-folder orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Sequence

from drivenav.errors import DriveNavError, ValidationError
from drivenav.models import (
    ErrorInfo,
    Location,
    OperationOutcome,
    OperationStatus,
    UploadFile,
)
from drivenav.store import RemoteFileStoreClient
from drivenav.util.files import accepted_formats_label, is_accepted_upload

from .navigation import NavigationStateMachine
from .notifications import Notification, Notifier, item_label

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteTarget:
    item_id: str
    name: str = ""


@dataclass(frozen=True)
class _Messages:
    success_title: str
    success_message: str
    success_variant: str
    failure_title: str


class OperationOrchestrator:
    """
    Runs one mutation at a time against the current folder.

    Pattern for every mutation:
        validate -> take the in-flight token -> remote call ->
        success: close the prompt, notify, refresh the listing;
        failure: record and notify the error, listing untouched ->
        release the token.
    A trigger that arrives while another mutation is in flight is rejected.
    """

    def __init__(
        self,
        store: RemoteFileStoreClient,
        navigator: NavigationStateMachine,
        notifier: Notifier,
    ) -> None:
        self._store = store
        self._navigator = navigator
        self._notifier = notifier

        self._busy = False
        self._status = OperationStatus()
        self._pending_delete: Optional[DeleteTarget] = None
        self._upload_open = False
        self._create_folder_open = False

    # ----------------------------
    # State
    # ----------------------------
    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def status(self) -> OperationStatus:
        return self._status

    @property
    def pending_delete(self) -> Optional[DeleteTarget]:
        return self._pending_delete

    @property
    def delete_confirm_open(self) -> bool:
        return self._pending_delete is not None

    @property
    def upload_open(self) -> bool:
        return self._upload_open

    @property
    def create_folder_open(self) -> bool:
        return self._create_folder_open

    @property
    def accepted_formats(self) -> str:
        return accepted_formats_label()

    # ----------------------------
    # Prompts
    # ----------------------------
    def clear_error(self) -> None:
        """Drop the last mutation error; an in-flight mutation keeps its loading flag."""
        self._status = OperationStatus(is_loading=self._status.is_loading)

    def open_upload(self) -> None:
        self._upload_open = True

    def close_upload(self) -> None:
        self._upload_open = False

    def open_create_folder(self) -> None:
        self._create_folder_open = True

    def cancel_create_folder(self) -> None:
        self._create_folder_open = False

    def request_delete(self, item_id: Optional[str], name: str = "") -> OperationOutcome:
        """First step of a delete: remember the target and show the confirmation."""
        if not item_id:
            return self._fail_validation(
                "delete", name, ValidationError("Missing required information to delete file.")
            )
        self._pending_delete = DeleteTarget(item_id=item_id, name=name or "")
        return OperationOutcome("request_delete", "success", item_name=name)

    def cancel_delete(self) -> None:
        self._pending_delete = None

    # ----------------------------
    # Mutations
    # ----------------------------
    async def upload(self, data: bytes, file_name: str) -> OperationOutcome:
        def precheck() -> None:
            if not data:
                raise ValidationError("No file content to upload.")
            if not is_accepted_upload(file_name):
                raise ValidationError(
                    f"Unsupported file type: {file_name or '(unnamed)'}. "
                    f"Accepted formats: {accepted_formats_label()}",
                    details={"file_name": file_name},
                )

        label = item_label(file_name)
        return await self._run(
            "upload",
            file_name,
            precheck,
            lambda target: self._store.upload(data, file_name, target.drive_id, target.item_id),  # type: ignore[arg-type]
            on_success=self.close_upload,
            messages=_Messages(
                success_title="File Upload Succeeded",
                success_message=f"Uploaded {label}",
                success_variant="success",
                failure_title="Error uploading file",
            ),
        )

    async def upload_file(self, file: UploadFile) -> OperationOutcome:
        return await self.upload(file.data, file.name)

    async def upload_dropped(self, files: Sequence[UploadFile]) -> OperationOutcome:
        """Drag-and-drop entry point: the first dropped file goes through upload()."""
        if not files:
            return self._fail_validation("upload", None, ValidationError("No file was dropped."))
        return await self.upload_file(files[0])

    async def create_folder(self, name: str) -> OperationOutcome:
        folder_name = (name or "").strip()

        def precheck() -> None:
            if not folder_name:
                raise ValidationError("Missing required information to create folder.")

        return await self._run(
            "create_folder",
            folder_name,
            precheck,
            lambda target: self._store.create_folder(folder_name, target.drive_id, target.item_id),  # type: ignore[arg-type]
            on_success=self.cancel_create_folder,
            messages=_Messages(
                success_title="Folder Created",
                success_message=f"Created {item_label(folder_name)}",
                success_variant="success",
                failure_title="Error creating folder",
            ),
        )

    async def confirm_delete(self) -> OperationOutcome:
        """Second step of a delete: run it for the remembered target."""
        target = self._pending_delete
        if target is None:
            return self._fail_validation("delete", None, ValidationError("No item selected for deletion."))

        outcome = await self.delete_item(target.item_id, target.name)
        if outcome.status != "rejected":
            # The confirmation closes whether the delete worked or not.
            self._pending_delete = None
        return outcome

    async def delete_item(self, item_id: str, name: str = "") -> OperationOutcome:
        """Delete without the confirmation step."""

        def precheck() -> None:
            if not item_id:
                raise ValidationError("Missing required information to delete file.")

        return await self._run(
            "delete",
            name,
            precheck,
            lambda target: self._store.delete(item_id, target.drive_id),  # type: ignore[arg-type]
            on_success=self.cancel_delete,
            messages=_Messages(
                success_title="File Deleted",
                success_message=f"Deleted {item_label(name)} successfully.",
                success_variant="info",
                failure_title="Error deleting file",
            ),
        )

    # ----------------------------
    # Internals
    # ----------------------------
    async def _run(
        self,
        operation: str,
        item_name: Optional[str],
        precheck: Callable[[], None],
        action: Callable[[Location], Awaitable[Any]],
        *,
        on_success: Callable[[], None],
        messages: _Messages,
    ) -> OperationOutcome:
        if self._busy:
            logger.info("%s rejected: another operation is in flight", operation)
            return OperationOutcome(operation, "rejected", item_name=item_name)

        target = self._navigator.current_target
        try:
            if not target.is_resolved:
                raise ValidationError(
                    f"Missing required information to {operation.replace('_', ' ')}: no current folder.",
                )
            precheck()
        except ValidationError as exc:
            return self._fail_validation(operation, item_name, exc)

        self._busy = True
        self._status = OperationStatus(is_loading=True)
        try:
            await action(target)
        except DriveNavError as exc:
            error = ErrorInfo.from_exception(exc)
            logger.error("%s failed for %s: %s", operation, item_label(item_name), error.message)
            self._status = OperationStatus(error=error)
            self._notifier.notify(Notification(messages.failure_title, error.message, "error"))
            return OperationOutcome(operation, "failed", error=error, item_name=item_name)
        else:
            on_success()
            self._notifier.notify(
                Notification(
                    messages.success_title,
                    messages.success_message,
                    messages.success_variant,  # type: ignore[arg-type]
                )
            )
            await self._navigator.refresh()
            self._status = OperationStatus()
            return OperationOutcome(operation, "success", item_name=item_name)
        finally:
            self._busy = False

    def _fail_validation(
        self,
        operation: str,
        item_name: Optional[str],
        exc: ValidationError,
    ) -> OperationOutcome:
        error = ErrorInfo.from_exception(exc)
        logger.warning("%s not started: %s", operation, error.message)
        self._status = OperationStatus(error=error)
        return OperationOutcome(operation, "failed", error=error, item_name=item_name)
