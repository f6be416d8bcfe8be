from __future__ import annotations

import logging
import math
from typing import Dict, Mapping, Optional

from campusgpa.domain.logic.grading import InvalidGradeScaleError, default_scale, points_for
from campusgpa.services.storage import Storage, StorageCorruptedError

logger = logging.getLogger(__name__)

GRADE_POINTS_KEY = "gradePoints"


class GradeScaleStore:
    """Holds the active grade scale and its persisted override.

    The active scale is read through ``scale`` and passed explicitly into the
    aggregation functions in ``campusgpa.domain.logic.gpa``.
    """

    def __init__(self, storage: Storage) -> None:
        self.storage = storage
        self._active: Optional[Dict[str, float]] = None

    def load(self) -> Dict[str, float]:
        saved = self.storage.get_json(GRADE_POINTS_KEY)
        if saved is None:
            return default_scale()
        if not isinstance(saved, dict):
            raise StorageCorruptedError(GRADE_POINTS_KEY, "expected a mapping of grade to points")
        try:
            scale = {str(grade): float(value) for grade, value in saved.items()}
        except (TypeError, ValueError) as exc:
            raise StorageCorruptedError(GRADE_POINTS_KEY, str(exc)) from exc
        if not all(math.isfinite(v) for v in scale.values()):
            raise StorageCorruptedError(GRADE_POINTS_KEY, "non-finite grade point")
        return scale

    def set_scale(self, new_scale: Mapping[str, float]) -> None:
        # Full replacement; grades missing from new_scale fall to 0 points.
        scale = dict(new_scale)
        bad = [grade for grade, value in scale.items() if not math.isfinite(value)]
        if bad:
            raise InvalidGradeScaleError(f"Invalid grade point for {bad[0]}: {scale[bad[0]]!r}")
        self.storage.set_json(GRADE_POINTS_KEY, scale)
        self._active = scale
        logger.info("Grade scale updated (%d grades)", len(scale))

    def reset(self) -> None:
        self.storage.delete(GRADE_POINTS_KEY)
        self._active = default_scale()
        logger.info("Grade scale reset to defaults")

    def _current(self) -> Dict[str, float]:
        if self._active is None:
            self._active = self.load()
        return self._active

    @property
    def scale(self) -> Dict[str, float]:
        return dict(self._current())

    def points_for(self, grade: str) -> float:
        return points_for(grade, self._current())
