import json
import unittest
from unittest.mock import Mock, patch

from drivenav.controller.drive_controller import (
    GoogleDriveController,
    _file_dict_to_entry,
    _quote,
)
from drivenav.controller.fields import MY_DRIVE_ID
from drivenav.errors import (
    MISSING_LINK_MARKER,
    AccessDeniedError,
    ConfigurationError,
    NotFoundError,
    RateLimitError,
)


def _http_error(status: int, reason: str, message: str = "err"):
    from googleapiclient.errors import HttpError

    resp = Mock()
    resp.status = status
    resp.reason = reason
    body = {"error": {"message": message, "errors": [{"reason": reason}]}}
    return HttpError(resp=resp, content=json.dumps(body).encode("utf-8"))


class TestDriveControllerHelpers(unittest.TestCase):
    def test_file_dict_to_entry_for_file(self) -> None:
        data = {
            "id": "F1",
            "name": "Q1.pdf",
            "mimeType": "application/pdf",
            "parents": ["P1"],
            "driveId": "D1",
            "modifiedTime": "2025-01-01T00:00:00Z",
            "size": "1536",
            "webViewLink": "https://drive.google.com/file/d/F1/view",
        }
        entry = _file_dict_to_entry(data)
        self.assertEqual(entry.id, "F1")
        self.assertFalse(entry.is_folder)
        self.assertEqual(entry.drive_id, "D1")
        self.assertEqual(entry.parent_item_id, "P1")
        self.assertEqual(entry.size, 1536)
        self.assertEqual(entry.formatted_size, "1.5 KB")
        self.assertEqual(entry.icon_name, "doctype:pdf")
        self.assertEqual(entry.web_url, "https://drive.google.com/file/d/F1/view")

    def test_file_dict_to_entry_for_my_drive_folder(self) -> None:
        data = {
            "id": "A",
            "name": "Reports",
            "mimeType": "application/vnd.google-apps.folder",
            "parents": ["root"],
        }
        entry = _file_dict_to_entry(data)
        self.assertTrue(entry.is_folder)
        self.assertEqual(entry.drive_id, MY_DRIVE_ID)
        self.assertEqual(entry.icon_name, "")
        self.assertEqual(entry.formatted_size, "")

    def test_quote_escapes_single_quotes(self) -> None:
        self.assertEqual(_quote("O'Brien"), "O\\'Brien")


class TestDriveControllerMocked(unittest.TestCase):
    def _mock_service_with_list(self, *pages):
        service = Mock()
        files_resource = Mock()
        request = Mock()

        service.files.return_value = files_resource
        request.execute.side_effect = list(pages)
        files_resource.list.return_value = request
        return service, files_resource, request

    def test_list_children_on_shared_drive_uses_drive_corpus(self) -> None:
        service, files_resource, _ = self._mock_service_with_list({"files": []})
        controller = GoogleDriveController.from_service(service, supports_all_drives=True)

        controller.list_children("D1", "P1")

        kwargs = files_resource.list.call_args.kwargs
        self.assertTrue(kwargs.get("supportsAllDrives"))
        self.assertTrue(kwargs.get("includeItemsFromAllDrives"))
        self.assertEqual(kwargs.get("corpora"), "drive")
        self.assertEqual(kwargs.get("driveId"), "D1")
        self.assertIn("'P1' in parents", kwargs["q"])

    def test_list_children_in_my_drive_has_no_drive_corpus(self) -> None:
        service, files_resource, _ = self._mock_service_with_list({"files": []})
        controller = GoogleDriveController.from_service(service)

        controller.list_children(MY_DRIVE_ID, "P1")

        kwargs = files_resource.list.call_args.kwargs
        self.assertNotIn("corpora", kwargs)
        self.assertNotIn("driveId", kwargs)

    def test_list_follows_pages(self) -> None:
        service, files_resource, _ = self._mock_service_with_list(
            {"files": [{"id": "A", "name": "a.txt", "mimeType": "text/plain"}], "nextPageToken": "t2"},
            {"files": [{"id": "B", "name": "b.txt", "mimeType": "text/plain"}]},
        )
        controller = GoogleDriveController.from_service(service)

        entries = controller.list_children("D1", "P1")

        self.assertEqual([e.id for e in entries], ["A", "B"])
        self.assertEqual(files_resource.list.call_args.kwargs["pageToken"], "t2")

    def test_list_for_record_lists_linked_folder(self) -> None:
        service, files_resource, _ = self._mock_service_with_list(
            {"files": [{"id": "ROOT", "name": "Acme", "mimeType": "application/vnd.google-apps.folder", "driveId": "D1"}]},
            {"files": [{"id": "F1", "name": "x.txt", "mimeType": "text/plain", "driveId": "D1", "parents": ["ROOT"]}]},
        )
        controller = GoogleDriveController.from_service(service)

        entries = controller.list_for_record("001", "Account")

        first_q = files_resource.list.call_args_list[0].kwargs["q"]
        self.assertIn("drivenavRecordId", first_q)
        self.assertIn("value='001'", first_q)
        self.assertIn("'ROOT' in parents", files_resource.list.call_args_list[1].kwargs["q"])
        self.assertEqual(entries[0].parent_location.item_id, "ROOT")

    def test_unlinked_record_is_configuration_error(self) -> None:
        service, _, _ = self._mock_service_with_list({"files": []})
        controller = GoogleDriveController.from_service(service)

        with self.assertRaises(ConfigurationError) as ctx:
            controller.list_for_record("001", "Account")

        self.assertIn(MISSING_LINK_MARKER, str(ctx.exception))

    def test_search_query_escapes_term(self) -> None:
        service, files_resource, _ = self._mock_service_with_list({"files": []})
        controller = GoogleDriveController.from_service(service)

        controller.search("D1", "it's")

        self.assertIn("name contains 'it\\'s'", files_resource.list.call_args.kwargs["q"])

    def test_upload_sends_media_into_folder(self) -> None:
        service = Mock()
        files_resource = Mock()
        req = Mock()
        service.files.return_value = files_resource
        files_resource.create.return_value = req
        req.execute.return_value = {"id": "N1", "name": "a.pdf", "mimeType": "application/pdf", "parents": ["P1"]}
        controller = GoogleDriveController.from_service(service)

        entry = controller.upload(b"%PDF", "a.pdf", "D1", "P1")

        kwargs = files_resource.create.call_args.kwargs
        self.assertEqual(kwargs["body"], {"name": "a.pdf", "parents": ["P1"]})
        self.assertEqual(kwargs["media_body"].mimetype(), "application/pdf")
        self.assertEqual(entry.id, "N1")

    def test_create_folder_body(self) -> None:
        service = Mock()
        files_resource = Mock()
        service.files.return_value = files_resource
        files_resource.create.return_value.execute.return_value = {
            "id": "N2",
            "name": "New",
            "mimeType": "application/vnd.google-apps.folder",
        }
        controller = GoogleDriveController.from_service(service)

        entry = controller.create_folder("New", "D1", "P1")

        body = files_resource.create.call_args.kwargs["body"]
        self.assertEqual(body["parents"], ["P1"])
        self.assertEqual(body["mimeType"], "application/vnd.google-apps.folder")
        self.assertTrue(entry.is_folder)

    def test_preview_url_returns_web_view_link(self) -> None:
        service = Mock()
        service.files.return_value.get.return_value.execute.return_value = {"webViewLink": "https://x/view"}
        controller = GoogleDriveController.from_service(service)

        self.assertEqual(controller.preview_url("D1", "F1"), "https://x/view")

    def test_preview_url_missing_link_is_none(self) -> None:
        service = Mock()
        service.files.return_value.get.return_value.execute.return_value = {"id": "F1"}
        controller = GoogleDriveController.from_service(service)

        self.assertIsNone(controller.preview_url("D1", "F1"))

    def test_delete_maps_http_404_to_not_found(self) -> None:
        service = Mock()
        service.files.return_value.delete.return_value.execute.side_effect = _http_error(404, "notFound")
        controller = GoogleDriveController.from_service(service)

        with self.assertRaises(NotFoundError):
            controller.delete("X", "D1")

    def test_delete_maps_http_403_to_access_denied(self) -> None:
        service = Mock()
        service.files.return_value.delete.return_value.execute.side_effect = _http_error(
            403, "insufficientFilePermissions"
        )
        controller = GoogleDriveController.from_service(service)

        with self.assertRaises(AccessDeniedError):
            controller.delete("X", "D1")

    def test_retry_on_429(self) -> None:
        service = Mock()
        req = Mock()
        service.files.return_value.get.return_value = req
        http_err = _http_error(429, "rateLimitExceeded", "rate limited")

        # Fail twice, then succeed.
        req.execute.side_effect = [http_err, http_err, {"webViewLink": "https://x/view"}]
        controller = GoogleDriveController.from_service(service)

        with patch("time.sleep", return_value=None):
            url = controller.preview_url("D1", "F1")

        self.assertEqual(url, "https://x/view")
        self.assertEqual(req.execute.call_count, 3)

    def test_map_429_to_rate_limit_error(self) -> None:
        service = Mock()
        service.files.return_value.get.return_value.execute.side_effect = _http_error(429, "rateLimitExceeded")
        controller = GoogleDriveController.from_service(service)

        with patch("time.sleep", return_value=None):
            with self.assertRaises(RateLimitError):
                controller.preview_url("D1", "X")


if __name__ == "__main__":
    unittest.main()
