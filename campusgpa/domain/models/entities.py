from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict

DEFAULT_NAME = "Student Name"
DEFAULT_UNIVERSITY = "University Name"


def _stored_credits(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"credits must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"credits must be finite, got {value!r}")
    return value


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    credits: float
    grade: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "credits": self.credits, "grade": self.grade}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Subject":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            credits=_stored_credits(data["credits"]),
            grade=str(data["grade"]),
        )


@dataclass
class Semester:
    id: str
    year: int
    semester: int
    subjects: list[Subject] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "year": self.year,
            "semester": self.semester,
            "subjects": [s.to_dict() for s in self.subjects],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Semester":
        return cls(
            id=str(data["id"]),
            year=int(data["year"]),
            semester=int(data["semester"]),
            subjects=[Subject.from_dict(s) for s in data.get("subjects", [])],
        )


@dataclass
class UserRecord:
    name: str = DEFAULT_NAME
    university: str = DEFAULT_UNIVERSITY
    semesters: list[Semester] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "university": self.university,
            "semesters": [s.to_dict() for s in self.semesters],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserRecord":
        return cls(
            name=str(data["name"]),
            university=str(data["university"]),
            semesters=[Semester.from_dict(s) for s in data.get("semesters", [])],
        )

    def find_semester(self, semester_id: str) -> Semester | None:
        for semester in self.semesters:
            if semester.id == semester_id:
                return semester
        return None


@dataclass(frozen=True)
class FlaggedSubject:
    """A subject below the attention threshold, tagged with its semester."""

    subject: Subject
    year: int
    semester_number: int
    grade_point: float

    @property
    def name(self) -> str:
        return self.subject.name

    @property
    def grade(self) -> str:
        return self.subject.grade

    @property
    def credits(self) -> float:
        return self.subject.credits
