import asyncio
import unittest

from fake_store import DRIVE, ROOT_ID, FakeNotifier, FakeStore

from drivenav.browser import NavigationStateMachine, OperationOrchestrator
from drivenav.errors import AccessDeniedError, RemoteOperationError
from drivenav.models import UploadFile


class TestOperations(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.store = FakeStore()
        self.notifier = FakeNotifier()
        self.nav = NavigationStateMachine(self.store, record_id="R1", object_type="Account")
        self.ops = OperationOrchestrator(self.store, self.nav, self.notifier)
        await self.nav.go_to_root()

    # ----------------------------
    # Upload
    # ----------------------------
    async def test_upload_to_root_then_refreshes(self) -> None:
        self.ops.open_upload()

        outcome = await self.ops.upload(b"hello", "notes.txt")

        self.assertTrue(outcome.ok)
        self.assertEqual(self.store.ops("upload"), [("upload", "notes.txt", DRIVE, ROOT_ID)])
        self.assertFalse(self.ops.upload_open)
        self.assertFalse(self.ops.busy)
        self.assertEqual(len(self.store.ops("list_for_record")), 2)
        self.assertIn("notes.txt", [f.name for f in self.nav.files])
        note = self.notifier.sent[-1]
        self.assertEqual((note.title, note.message, note.variant), ("File Upload Succeeded", "Uploaded notes.txt", "success"))

    async def test_upload_into_subfolder_uses_current_location(self) -> None:
        await self.nav.go_to_folder(DRIVE, "I1", "Reports")

        await self.ops.upload_file(UploadFile(data=b"x", name="chart.PNG"))

        self.assertEqual(self.store.ops("upload"), [("upload", "chart.PNG", DRIVE, "I1")])
        self.assertEqual(self.store.calls[-1], ("list_by_location", DRIVE, "I1"))

    async def test_upload_rejects_unaccepted_extension(self) -> None:
        outcome = await self.ops.upload(b"MZ", "setup.exe")

        self.assertEqual(outcome.status, "failed")
        self.assertEqual(outcome.error.kind, "validation")
        self.assertIn(".pdf", outcome.error.message)
        self.assertEqual(self.store.ops("upload"), [])

    async def test_upload_rejects_empty_content(self) -> None:
        outcome = await self.ops.upload(b"", "empty.txt")

        self.assertEqual(outcome.status, "failed")
        self.assertEqual(self.store.ops("upload"), [])

    async def test_upload_dropped_uses_first_file(self) -> None:
        files = [UploadFile(b"1", "a.pdf"), UploadFile(b"2", "b.pdf")]

        await self.ops.upload_dropped(files)

        self.assertEqual([c[1] for c in self.store.ops("upload")], ["a.pdf"])

    async def test_upload_dropped_with_nothing_fails(self) -> None:
        outcome = await self.ops.upload_dropped([])

        self.assertEqual(outcome.status, "failed")

    async def test_upload_failure_notifies_and_keeps_listing(self) -> None:
        files = self.nav.files
        self.store.fail["upload"] = RemoteOperationError("Upload quota exceeded")

        outcome = await self.ops.upload(b"data", "big.zip")

        self.assertEqual(outcome.status, "failed")
        self.assertEqual(self.nav.files, files)
        self.assertEqual(self.ops.status.error.message, "Upload quota exceeded")
        note = self.notifier.sent[-1]
        self.assertEqual((note.title, note.variant), ("Error uploading file", "error"))
        self.assertEqual(len(self.store.ops("list_for_record")), 1)
        self.assertFalse(self.ops.busy)

    async def test_mutation_requires_resolved_folder(self) -> None:
        nav = NavigationStateMachine(self.store, record_id="R2", object_type="Account")
        ops = OperationOrchestrator(self.store, nav, self.notifier)

        outcome = await ops.upload(b"x", "a.txt")

        self.assertEqual(outcome.status, "failed")
        self.assertEqual(outcome.error.kind, "validation")
        self.assertEqual(self.store.ops("upload"), [])

    async def test_second_mutation_while_busy_is_rejected(self) -> None:
        self.store.hold("upload", "a.txt")

        first = asyncio.create_task(self.ops.upload(b"x", "a.txt"))
        await asyncio.sleep(0)
        self.assertTrue(self.ops.busy)
        self.assertTrue(self.ops.status.is_loading)
        second = await self.ops.create_folder("Later")
        self.store.release("upload", "a.txt")
        first_outcome = await first

        self.assertEqual(second.status, "rejected")
        self.assertTrue(first_outcome.ok)
        self.assertEqual(self.store.ops("create_folder"), [])
        self.assertFalse(self.ops.busy)

    # ----------------------------
    # Create folder
    # ----------------------------
    async def test_create_folder_trims_name(self) -> None:
        self.ops.open_create_folder()

        outcome = await self.ops.create_folder("  Contracts  ")

        self.assertTrue(outcome.ok)
        self.assertEqual(self.store.ops("create_folder"), [("create_folder", "Contracts", DRIVE, ROOT_ID)])
        self.assertFalse(self.ops.create_folder_open)
        self.assertIn("Contracts", [f.name for f in self.nav.files])
        note = self.notifier.sent[-1]
        self.assertEqual((note.title, note.message), ("Folder Created", "Created Contracts"))

    async def test_create_folder_blank_name_fails_without_call(self) -> None:
        outcome = await self.ops.create_folder("   ")

        self.assertEqual(outcome.status, "failed")
        self.assertEqual(self.store.ops("create_folder"), [])

    async def test_create_folder_failure_keeps_prompt_open(self) -> None:
        self.ops.open_create_folder()
        self.store.fail["create_folder"] = AccessDeniedError("Insufficient permissions")

        outcome = await self.ops.create_folder("Contracts")

        self.assertEqual(outcome.status, "failed")
        self.assertTrue(self.ops.create_folder_open)
        self.assertEqual(self.notifier.sent[-1].title, "Error creating folder")

    # ----------------------------
    # Delete
    # ----------------------------
    async def test_delete_flow_end_to_end(self) -> None:
        self.ops.request_delete("F1", "readme.txt")
        self.assertTrue(self.ops.delete_confirm_open)

        outcome = await self.ops.confirm_delete()

        self.assertTrue(outcome.ok)
        self.assertEqual(self.store.ops("delete"), [("delete", "F1", DRIVE)])
        self.assertNotIn("F1", [f.id for f in self.nav.files])
        self.assertFalse(self.ops.delete_confirm_open)
        note = self.notifier.sent[-1]
        self.assertEqual(
            (note.title, note.message, note.variant),
            ("File Deleted", "Deleted readme.txt successfully.", "info"),
        )

    async def test_delete_without_name_uses_generic_label(self) -> None:
        await self.ops.delete_item("F1")

        self.assertEqual(self.notifier.sent[-1].message, "Deleted Document successfully.")

    async def test_cancel_delete_makes_no_call(self) -> None:
        self.ops.request_delete("F1", "readme.txt")

        self.ops.cancel_delete()

        self.assertIsNone(self.ops.pending_delete)
        self.assertEqual(self.store.ops("delete"), [])

    async def test_request_delete_without_id_opens_no_confirmation(self) -> None:
        outcome = self.ops.request_delete(None, "ghost.txt")

        self.assertEqual(outcome.status, "failed")
        self.assertEqual(outcome.error.kind, "validation")
        self.assertIsNone(self.ops.pending_delete)
        self.assertEqual(self.ops.status.error.message, "Missing required information to delete file.")

    async def test_clear_error_keeps_loading_flag(self) -> None:
        self.store.hold("upload", "a.pdf")
        pending = asyncio.create_task(self.ops.upload(b"x", "a.pdf"))
        await asyncio.sleep(0)

        self.ops.clear_error()

        self.assertTrue(self.ops.status.is_loading)
        self.store.release("upload", "a.pdf")
        await pending

    async def test_confirm_without_pending_target_fails(self) -> None:
        outcome = await self.ops.confirm_delete()

        self.assertEqual(outcome.status, "failed")
        self.assertEqual(self.store.ops("delete"), [])

    async def test_failed_delete_closes_confirmation_and_keeps_row(self) -> None:
        self.store.fail["delete"] = RemoteOperationError("File is locked")
        self.ops.request_delete("F1", "readme.txt")

        outcome = await self.ops.confirm_delete()

        self.assertEqual(outcome.status, "failed")
        self.assertFalse(self.ops.delete_confirm_open)
        self.assertIn("F1", [f.id for f in self.nav.files])
        note = self.notifier.sent[-1]
        self.assertEqual((note.title, note.message), ("Error deleting file", "File is locked"))

    def test_accepted_formats_label(self) -> None:
        self.assertTrue(self.ops.accepted_formats.startswith(".pdf, "))


if __name__ == "__main__":
    unittest.main()
