from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping

from campusgpa.domain.logic.grading import points_for
from campusgpa.domain.models.entities import FlaggedSubject, Semester, Subject, UserRecord

DEFAULT_LOW_GRADE_THRESHOLD = 2.0


def _round2(value: float) -> float:
    # Halves round away from zero on the exact binary value.
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _all_subjects(record: UserRecord) -> list[Subject]:
    return [subject for semester in record.semesters for subject in semester.subjects]


def calc_gpa(subjects: Iterable[Subject], scale: Mapping[str, float]) -> float:
    """Credit-weighted GPA: sum(points * credits) / sum(credits), 2 decimals."""
    weighted = 0.0
    credits = 0.0
    for s in subjects:
        weighted += points_for(s.grade, scale) * s.credits
        credits += s.credits
    if credits == 0:
        return 0.0
    return _round2(weighted / credits)


def total_credits(subjects: Iterable[Subject]) -> float:
    return sum((s.credits for s in subjects), 0)


def semester_gpa(semester: Semester, scale: Mapping[str, float]) -> float:
    return calc_gpa(semester.subjects, scale)


def overall_gpa(record: UserRecord, scale: Mapping[str, float]) -> float:
    # Weighted across every subject, not a mean of semester GPAs.
    return calc_gpa(_all_subjects(record), scale)


def overall_credits(record: UserRecord) -> float:
    return total_credits(_all_subjects(record))


def semester_summaries(record: UserRecord, scale: Mapping[str, float]) -> list[tuple[Semester, float, float]]:
    return [(sem, semester_gpa(sem, scale), total_credits(sem.subjects)) for sem in record.semesters]


def low_performing_subjects(
    record: UserRecord,
    scale: Mapping[str, float],
    threshold: float = DEFAULT_LOW_GRADE_THRESHOLD,
) -> list[FlaggedSubject]:
    """Subjects whose grade point is strictly below ``threshold``.

    Sorted by grade point ascending, then most recent year and semester first.
    """
    flagged = [
        FlaggedSubject(
            subject=subject,
            year=semester.year,
            semester_number=semester.semester,
            grade_point=points_for(subject.grade, scale),
        )
        for semester in record.semesters
        for subject in semester.subjects
        if points_for(subject.grade, scale) < threshold
    ]
    return sorted(flagged, key=lambda f: (f.grade_point, -f.year, -f.semester_number))
