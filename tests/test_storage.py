import os
import tempfile
import unittest

from campusgpa.domain.logic.grading import DEFAULT_GRADE_POINTS, InvalidGradeScaleError
from campusgpa.services.grade_scale import GRADE_POINTS_KEY, GradeScaleStore
from campusgpa.services.preferences import PreferenceStore
from campusgpa.services.storage import Storage, StorageCorruptedError


class StorageTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.db_path = os.path.join(self.tmp.name, "nested", "test.db")
        self.storage = Storage(self.db_path)

    def tearDown(self):
        self.storage.close()
        self.tmp.cleanup()


class StorageTests(StorageTestCase):
    def test_json_round_trip_and_delete(self):
        self.assertIsNone(self.storage.get_json("missing"))
        self.storage.set_json("k", {"a": [1, 2]})
        self.storage.set_json("k", {"a": [3]})
        self.assertEqual(self.storage.get_json("k"), {"a": [3]})
        self.storage.delete("k")
        self.assertIsNone(self.storage.get_json("k"))

    def test_values_survive_reopen(self):
        self.storage.set_json("k", "v")
        self.storage.close()
        self.storage = Storage(self.db_path)
        self.assertEqual(self.storage.get_json("k"), "v")

    def test_malformed_json_raises(self):
        self.storage.set_raw("k", "{not json")
        with self.assertRaises(StorageCorruptedError) as ctx:
            self.storage.get_json("k")
        self.assertEqual(ctx.exception.key, "k")


class GradeScaleStoreTests(StorageTestCase):
    def test_load_defaults_when_nothing_saved(self):
        store = GradeScaleStore(self.storage)
        self.assertEqual(store.load(), DEFAULT_GRADE_POINTS)
        self.assertIsNot(store.load(), DEFAULT_GRADE_POINTS)

    def test_set_scale_replaces_without_merge(self):
        custom = {"S": 4.0, "A": 3.5}
        store = GradeScaleStore(self.storage)
        store.set_scale(custom)
        self.assertEqual(store.load(), custom)
        self.assertEqual(GradeScaleStore(self.storage).scale, custom)
        self.assertEqual(store.points_for("B"), 0.0)
        self.assertEqual(store.points_for("A"), 3.5)

    def test_scale_property_is_a_copy(self):
        store = GradeScaleStore(self.storage)
        store.scale["A"] = 0.5
        self.assertEqual(store.points_for("A"), 4.0)

    def test_reset(self):
        store = GradeScaleStore(self.storage)
        store.set_scale({"A": 1.0})
        store.reset()
        self.assertEqual(store.scale, DEFAULT_GRADE_POINTS)
        self.assertIsNone(self.storage.get_json(GRADE_POINTS_KEY))

    def test_corrupt_override_is_surfaced(self):
        self.storage.set_json(GRADE_POINTS_KEY, ["A", 4])
        with self.assertRaises(StorageCorruptedError):
            GradeScaleStore(self.storage).load()
        self.storage.set_raw(GRADE_POINTS_KEY, "nope")
        with self.assertRaises(StorageCorruptedError):
            GradeScaleStore(self.storage).points_for("A")

    def test_non_finite_scale_rejected(self):
        store = GradeScaleStore(self.storage)
        with self.assertRaises(InvalidGradeScaleError):
            store.set_scale({"A": float("inf")})
        self.assertEqual(store.scale, DEFAULT_GRADE_POINTS)
        self.assertIsNone(self.storage.get_json(GRADE_POINTS_KEY))

    def test_stored_non_finite_scale_is_corruption(self):
        self.storage.set_raw(GRADE_POINTS_KEY, '{"A": Infinity}')
        with self.assertRaises(StorageCorruptedError):
            GradeScaleStore(self.storage).load()


class PreferenceStoreTests(StorageTestCase):
    def test_theme_defaults_and_toggles(self):
        prefs = PreferenceStore(self.storage)
        self.assertEqual(prefs.get_theme(), "light")
        self.assertEqual(prefs.toggle_theme(), "dark")
        self.assertEqual(PreferenceStore(self.storage).get_theme(), "dark")
        self.assertEqual(prefs.toggle_theme(), "light")

    def test_theme_is_independent_of_scale(self):
        PreferenceStore(self.storage).set_theme("dark")
        self.assertEqual(GradeScaleStore(self.storage).scale, DEFAULT_GRADE_POINTS)
        with self.assertRaises(ValueError):
            PreferenceStore(self.storage).set_theme("blue")


if __name__ == "__main__":
    unittest.main()
