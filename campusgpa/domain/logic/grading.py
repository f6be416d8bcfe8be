from __future__ import annotations

import math
from typing import Dict, Mapping

DEFAULT_GRADE_POINTS: Dict[str, float] = {
    "A+": 4.0,
    "A": 4.0,
    "A-": 3.7,
    "B+": 3.3,
    "B": 3.0,
    "B-": 2.7,
    "C+": 2.3,
    "C": 2.0,
    "C-": 1.7,
    "D+": 1.3,
    "D": 1.0,
    "F": 0.0,
}


class InvalidGradeScaleError(ValueError):
    pass


def default_scale() -> Dict[str, float]:
    return dict(DEFAULT_GRADE_POINTS)


def points_for(grade: str, scale: Mapping[str, float]) -> float:
    # Unknown letters count as zero points.
    return float(scale.get(grade, 0.0))


def parse_scale_input(raw: Mapping[str, str]) -> Dict[str, float]:
    """Parse grade point form values into a scale.

    Only basic numeric parsing is done; the 0-4 range is left to the form.
    """
    parsed: Dict[str, float] = {}
    for grade, value in raw.items():
        try:
            parsed[grade] = float(str(value).strip())
        except ValueError as exc:
            raise InvalidGradeScaleError(f"Invalid grade point for {grade}: {value!r}") from exc
        if not math.isfinite(parsed[grade]):
            raise InvalidGradeScaleError(f"Invalid grade point for {grade}: {value!r}")
    return parsed
