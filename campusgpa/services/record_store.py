from __future__ import annotations

import logging
import math
import uuid
from enum import Enum

from campusgpa.domain.models.entities import Semester, Subject, UserRecord
from campusgpa.services.storage import Storage, StorageCorruptedError

logger = logging.getLogger(__name__)

USER_DATA_KEY = "userData"


class MutationResult(Enum):
    APPLIED = "applied"
    NOT_FOUND = "not_found"


def new_id() -> str:
    return uuid.uuid4().hex


def parse_credits(value: object) -> float:
    try:
        credits = float(str(value).strip())
    except ValueError as exc:
        raise ValueError(f"Credits must be a number, got {value!r}") from exc
    if not math.isfinite(credits):
        raise ValueError(f"Credits must be a finite number, got {value!r}")
    if credits < 0:
        raise ValueError("Credits must be non-negative")
    return int(credits) if credits.is_integer() else credits


class RecordStore:
    """CRUD over the single persisted UserRecord.

    Each mutation reads the stored record, changes it and writes it back.
    """

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    def get_record(self) -> UserRecord:
        data = self.storage.get_json(USER_DATA_KEY)
        if data is None:
            return UserRecord()
        try:
            return UserRecord.from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.error("Stored user record has an unexpected shape: %s", exc)
            raise StorageCorruptedError(USER_DATA_KEY, f"unexpected record shape ({exc})") from exc

    def save_record(self, record: UserRecord) -> None:
        self.storage.set_json(USER_DATA_KEY, record.to_dict())

    def get_semester(self, semester_id: str) -> Semester | None:
        return self.get_record().find_semester(semester_id)

    def add_semester(self, year: int, semester_number: int) -> Semester:
        record = self.get_record()
        semester = Semester(id=new_id(), year=int(year), semester=int(semester_number))
        record.semesters.append(semester)
        self.save_record(record)
        logger.info("Added semester %s (%s/%s)", semester.id, semester.year, semester.semester)
        return semester

    def delete_semester(self, semester_id: str) -> MutationResult:
        record = self.get_record()
        remaining = [s for s in record.semesters if s.id != semester_id]
        if len(remaining) == len(record.semesters):
            logger.warning("Semester %s not found; nothing deleted", semester_id)
            return MutationResult.NOT_FOUND
        record.semesters = remaining
        self.save_record(record)
        logger.info("Deleted semester %s", semester_id)
        return MutationResult.APPLIED

    def add_subject(self, semester_id: str, name: str, credits: float, grade: str) -> MutationResult:
        credits = parse_credits(credits)
        record = self.get_record()
        semester = record.find_semester(semester_id)
        if semester is None:
            logger.warning("Semester %s not found; subject %r not added", semester_id, name)
            return MutationResult.NOT_FOUND
        subject = Subject(id=new_id(), name=name, credits=credits, grade=grade)
        semester.subjects.append(subject)
        self.save_record(record)
        logger.info("Added subject %s to semester %s", subject.id, semester_id)
        return MutationResult.APPLIED

    def delete_subject(self, semester_id: str, subject_id: str) -> MutationResult:
        record = self.get_record()
        semester = record.find_semester(semester_id)
        if semester is None or not any(s.id == subject_id for s in semester.subjects):
            logger.warning("Subject %s not found in semester %s", subject_id, semester_id)
            return MutationResult.NOT_FOUND
        semester.subjects = [s for s in semester.subjects if s.id != subject_id]
        self.save_record(record)
        logger.info("Deleted subject %s from semester %s", subject_id, semester_id)
        return MutationResult.APPLIED

    def update_profile(self, name: str, university: str) -> None:
        record = self.get_record()
        record.name = name
        record.university = university
        self.save_record(record)
        logger.info("Profile updated")
