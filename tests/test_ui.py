import os
import tempfile
import unittest
from unittest import mock

import flet as ft

from campusgpa.services.record_store import USER_DATA_KEY, RecordStore
from campusgpa.services.storage import Storage
from campusgpa.ui.app import CampusGpaApp


def delete_buttons(controls):
    found = []
    queue = list(controls)
    while queue:
        control = queue.pop(0)
        if isinstance(control, ft.IconButton) and control.icon == ft.Icons.DELETE:
            found.append(control)
        queue.extend(getattr(control, "controls", None) or [])
        content = getattr(control, "content", None)
        if isinstance(content, ft.Control):
            queue.append(content)
    return found


class CampusGpaAppTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.storage = Storage(os.path.join(self.tmp.name, "ui.db"))
        self.records = RecordStore(self.storage)
        self.page = mock.MagicMock()
        self.ui = CampusGpaApp(self.page, self.storage)

    def tearDown(self):
        self.storage.close()
        self.tmp.cleanup()

    def rendered(self):
        return self.page.add.call_args.args

    def test_deleting_a_missing_subject_reports_it(self):
        semester = self.records.add_semester(2024, 1)
        self.records.add_subject(semester.id, "Algo", 3, "A")
        self.ui.show_semester(semester.id)
        [button] = delete_buttons(self.rendered())

        subject_id = self.records.get_semester(semester.id).subjects[0].id
        self.records.delete_subject(semester.id, subject_id)
        button.on_click(None)

        self.assertEqual(self.ui.status.value, "Subject no longer exists")

    def test_corruption_during_session_shows_error_screen(self):
        self.records.add_semester(2024, 1)
        self.ui.show_dashboard()
        [button] = delete_buttons(self.rendered())

        self.storage.set_raw(USER_DATA_KEY, "{broken")
        with mock.patch.object(self.ui, "show_storage_error") as show_error:
            button.on_click(None)
        show_error.assert_called_once()


if __name__ == "__main__":
    unittest.main()
