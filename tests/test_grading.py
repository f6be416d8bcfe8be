import unittest

from campusgpa.domain.logic.grading import (
    DEFAULT_GRADE_POINTS,
    InvalidGradeScaleError,
    default_scale,
    parse_scale_input,
    points_for,
)


class GradingTests(unittest.TestCase):
    def test_default_scale_values(self):
        self.assertEqual(
            default_scale(),
            {
                "A+": 4.0, "A": 4.0, "A-": 3.7,
                "B+": 3.3, "B": 3.0, "B-": 2.7,
                "C+": 2.3, "C": 2.0, "C-": 1.7,
                "D+": 1.3, "D": 1.0, "F": 0.0,
            },
        )

    def test_default_scale_is_a_copy(self):
        scale = default_scale()
        scale["A"] = 1.0
        self.assertEqual(DEFAULT_GRADE_POINTS["A"], 4.0)

    def test_points_for(self):
        self.assertEqual(points_for("B+", default_scale()), 3.3)
        self.assertEqual(points_for("Q", default_scale()), 0.0)

    def test_parse_scale_input(self):
        self.assertEqual(parse_scale_input({"A": "4", "B": " 3.25 "}), {"A": 4.0, "B": 3.25})
        with self.assertRaises(InvalidGradeScaleError):
            parse_scale_input({"A": "four"})

    def test_parse_scale_input_rejects_non_finite(self):
        for value in ("nan", "inf", "-Infinity"):
            with self.assertRaises(InvalidGradeScaleError):
                parse_scale_input({"A": "4", "B": value})


if __name__ == "__main__":
    unittest.main()
