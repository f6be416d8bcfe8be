from __future__ import annotations

from typing import Any, Dict, Mapping

from campusgpa.domain.logic.gpa import overall_credits, overall_gpa, semester_summaries
from campusgpa.domain.logic.grading import points_for
from campusgpa.domain.models.entities import UserRecord


def build_report(record: UserRecord, scale: Mapping[str, float]) -> Dict[str, Any]:
    """Fully resolved transcript data for document exporters."""
    return {
        "name": record.name,
        "university": record.university,
        "overall_gpa": overall_gpa(record, scale),
        "overall_credits": overall_credits(record),
        "semesters": [
            {
                "id": sem.id,
                "year": sem.year,
                "semester": sem.semester,
                "gpa": gpa,
                "credits": credits,
                "subjects": [
                    {
                        "name": s.name,
                        "credits": s.credits,
                        "grade": s.grade,
                        "grade_point": points_for(s.grade, scale),
                    }
                    for s in sem.subjects
                ],
            }
            for sem, gpa, credits in semester_summaries(record, scale)
        ],
    }
