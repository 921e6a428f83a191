import unittest

from drivenav.models import Location, make_file_entry


class TestFileEntry(unittest.TestCase):
    def test_file_gets_display_fields(self) -> None:
        e = make_file_entry(
            id="F1",
            name="budget.XLSX",
            is_folder=False,
            drive_id="D1",
            parent_item_id="P1",
            size=1048576,
            last_modified_iso="2025-06-15T12:00:00Z",
        )
        self.assertEqual(e.icon_name, "doctype:excel")
        self.assertEqual(e.formatted_size, "1.0 MB")
        self.assertTrue(e.formatted_date.endswith(", 2025"))
        self.assertEqual(e.parent_location, Location("D1", "P1"))

    def test_folder_has_no_display_fields(self) -> None:
        e = make_file_entry(
            id="I1",
            name="Reports",
            is_folder=True,
            drive_id="D1",
            parent_item_id="P1",
            size=4096,
        )
        self.assertEqual((e.icon_name, e.formatted_size, e.formatted_date), ("", "", ""))

    def test_file_without_size_or_date(self) -> None:
        e = make_file_entry(id="F", name="x", is_folder=False, drive_id="D", parent_item_id=None)
        self.assertEqual(e.icon_name, "doctype:unknown")
        self.assertEqual(e.formatted_size, "")
        self.assertEqual(e.formatted_date, "")


if __name__ == "__main__":
    unittest.main()
