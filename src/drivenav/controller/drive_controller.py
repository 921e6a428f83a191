"""Google Drive API controller (internal use only)."""

from __future__ import annotations

import io
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, TypeVar

from drivenav.auth import OAuthClient
from drivenav.errors import (
    MISSING_LINK_MARKER,
    AuthError,
    ConfigurationError,
    HttpErrorInfo,
    NetworkError,
    RateLimitError,
    RemoteOperationError,
    map_http_error,
)
from drivenav.models import FileEntry, make_file_entry
from drivenav.util.mime import FOLDER_MIME, guess_upload_mime, is_folder

from .fields import (
    FILE_FIELDS,
    LIST_FIELDS,
    MY_DRIVE_ID,
    OBJECT_TYPE_PROPERTY,
    PREVIEW_FIELDS,
    RECORD_ID_PROPERTY,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


class GoogleDriveController:
    """
    Blocking Drive API controller (internal only).

    Notes:
        - The Drive `service` object is NOT exposed.
        - `supports_all_drives` is applied to all requests consistently.
        - Items are addressed by (drive_id, item_id); MY_DRIVE_ID stands for
          the user's own drive.
    """

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)

    def __init__(
        self,
        oauth_client: OAuthClient,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
    ) -> None:
        self._supports_all_drives = supports_all_drives
        self._retry_policy = _RetryPolicy()

        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        self._service = oauth_client.build_drive_service(use_scopes)

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        supports_all_drives: bool = True,
    ) -> "GoogleDriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._supports_all_drives = supports_all_drives
        obj._retry_policy = _RetryPolicy()
        obj._service = service
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def find_linked_folder(self, record_id: str, object_type: str) -> FileEntry:
        """
        Return the folder linked to a host record.

        Raises:
            ConfigurationError: if no folder carries the record's appProperties.
        """
        q = (
            f"mimeType='{FOLDER_MIME}' and trashed=false"
            f" and appProperties has {{ key='{RECORD_ID_PROPERTY}' and value='{_quote(record_id)}' }}"
            f" and appProperties has {{ key='{OBJECT_TYPE_PROPERTY}' and value='{_quote(object_type)}' }}"
        )
        found = self._find_by_query(q, drive_id=None)
        if not found:
            raise ConfigurationError(
                f"{MISSING_LINK_MARKER} for {object_type} record {record_id}",
                details={"record_id": record_id, "object_type": object_type},
            )
        if len(found) > 1:
            logger.warning(
                "Record %s/%s is linked to %d folders; using %s",
                object_type,
                record_id,
                len(found),
                found[0].id,
            )
        return found[0]

    def list_for_record(self, record_id: str, object_type: str) -> list[FileEntry]:
        root = self.find_linked_folder(record_id, object_type)
        return self.list_children(root.drive_id or MY_DRIVE_ID, root.id)

    def list_children(self, drive_id: str, item_id: str) -> list[FileEntry]:
        q = f"'{_quote(item_id)}' in parents and trashed=false"
        return self._find_by_query(q, drive_id=drive_id)

    def search(self, drive_id: str, term: str) -> list[FileEntry]:
        q = f"name contains '{_quote(term)}' and trashed=false"
        return self._find_by_query(q, drive_id=drive_id)

    def create_folder(self, name: str, drive_id: str, parent_item_id: str) -> FileEntry:
        body = {"name": name, "mimeType": FOLDER_MIME, "parents": [parent_item_id]}
        req = self._service.files().create(
            body=body,
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_entry(data)

    def upload(self, data: bytes, file_name: str, drive_id: str, item_id: str) -> FileEntry:
        try:
            from googleapiclient.http import MediaIoBaseUpload
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "google-api-python-client is not available",
                cause=exc,
            ) from exc

        media = MediaIoBaseUpload(
            io.BytesIO(data),
            mimetype=guess_upload_mime(file_name),
            resumable=True,
        )
        body = {"name": file_name, "parents": [item_id]}

        req = self._service.files().create(
            body=body,
            media_body=media,
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        result = self._execute(req.execute)
        return _file_dict_to_entry(result)

    def delete(self, item_id: str, drive_id: str) -> None:
        req = self._service.files().delete(
            fileId=item_id,
            **self._common_write_kwargs(),
        )
        self._execute(req.execute)

    def preview_url(self, drive_id: str, item_id: str) -> Optional[str]:
        req = self._service.files().get(
            fileId=item_id,
            fields=PREVIEW_FIELDS,
            **self._common_get_kwargs(),
        )
        data = self._execute(req.execute)
        link = data.get("webViewLink")
        return link if isinstance(link, str) and link else None

    # ----------------------------
    # Internals
    # ----------------------------
    def _common_get_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _common_list_kwargs(self, drive_id: Optional[str]) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        kwargs: dict[str, Any] = {"supportsAllDrives": True, "includeItemsFromAllDrives": True}
        if drive_id and drive_id != MY_DRIVE_ID:
            kwargs["corpora"] = "drive"
            kwargs["driveId"] = drive_id
        return kwargs

    def _common_write_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _find_by_query(self, q: str, *, drive_id: Optional[str]) -> list[FileEntry]:
        entries: list[FileEntry] = []
        page_token: Optional[str] = None

        while True:
            req = self._service.files().list(
                q=q,
                fields=LIST_FIELDS,
                pageToken=page_token,
                **self._common_list_kwargs(drive_id),
            )
            data = self._execute(req.execute)
            for f in data.get("files", []):
                entries.append(_file_dict_to_entry(f))

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return entries

    def _execute(self, func: Callable[[], T]) -> T:
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                if self._should_retry(mapped) and attempt < self._retry_policy.max_retries:
                    logger.debug("Retrying Drive request after %s (attempt %d)", mapped, attempt + 1)
                    time.sleep(delay)
                    delay *= 2
                    continue
                raise mapped from exc

        raise RemoteOperationError("Unexpected retry loop termination")

    def _should_retry(self, exc: Exception) -> bool:
        if isinstance(exc, (RateLimitError, NetworkError)):
            return True
        if type(exc) is RemoteOperationError:
            status_code = getattr(exc, "details", {}).get("status_code")
            return isinstance(status_code, int) and 500 <= status_code <= 599
        return False

    def _map_exception(self, exc: Exception) -> Exception:
        try:
            from googleapiclient.errors import HttpError
        except Exception:  # pragma: no cover
            HttpError = None  # type: ignore[assignment]

        if HttpError is not None and isinstance(exc, HttpError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError("Network error", cause=exc)

        return RemoteOperationError("Drive API error", cause=exc)


def _quote(value: str) -> str:
    """Escape a value for a single-quoted Drive query literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _file_dict_to_entry(data: dict[str, Any]) -> FileEntry:
    file_id = data.get("id")
    name = data.get("name", "")
    mime_type = data.get("mimeType", "")
    parents = data.get("parents", []) or []

    drive_id = data.get("driveId")
    if not isinstance(drive_id, str) or not drive_id:
        drive_id = MY_DRIVE_ID

    size = None
    if isinstance(data.get("size"), str) and data["size"].isdigit():
        size = int(data["size"])
    elif isinstance(data.get("size"), int):
        size = data["size"]

    modified = data.get("modifiedTime")
    link = data.get("webViewLink")

    return make_file_entry(
        id=file_id if isinstance(file_id, str) else "",
        name=name if isinstance(name, str) else "",
        is_folder=is_folder(mime_type if isinstance(mime_type, str) else ""),
        drive_id=drive_id,
        parent_item_id=parents[0] if isinstance(parents, list) and parents else None,
        size=size,
        last_modified_iso=modified if isinstance(modified, str) else None,
        web_url=link if isinstance(link, str) else None,
    )


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = {}
        err = payload.get("error", {}) if isinstance(payload, dict) else {}
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                details["reason_detail"] = errors[0].get("reason")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
