from functools import lru_cache
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, status
from pydantic import BaseModel, Field, FiniteFloat

from campusgpa.config.settings import settings
from campusgpa.domain.logic.gpa import low_performing_subjects
from campusgpa.domain.logic.grading import InvalidGradeScaleError
from campusgpa.services.grade_scale import GradeScaleStore
from campusgpa.services.record_store import MutationResult, RecordStore
from campusgpa.services.report import build_report
from campusgpa.services.storage import Storage, StorageError


app = FastAPI(title="Campus GPA Tracker API", version="1.0.0")


class ProfilePayload(BaseModel):
    name: str
    university: str


class SemesterPayload(BaseModel):
    year: int
    semester: int = Field(ge=1)


class SubjectPayload(BaseModel):
    name: str
    credits: float = Field(ge=0, allow_inf_nan=False)
    grade: str


@lru_cache(maxsize=1)
def get_storage() -> Storage:
    return Storage(settings.db_path)


def _ensure_found(result: MutationResult, detail: str) -> Dict[str, str]:
    if result is MutationResult.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return {"status": result.value}


def _storage_failure(exc: StorageError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/record")
def get_record(storage: Storage = Depends(get_storage)) -> Dict:
    try:
        return RecordStore(storage).get_record().to_dict()
    except StorageError as exc:
        raise _storage_failure(exc) from exc


@app.put("/profile")
def update_profile(payload: ProfilePayload, storage: Storage = Depends(get_storage)) -> Dict[str, str]:
    try:
        RecordStore(storage).update_profile(payload.name, payload.university)
    except StorageError as exc:
        raise _storage_failure(exc) from exc
    return {"status": "saved"}


@app.post("/semesters", status_code=status.HTTP_201_CREATED)
def add_semester(payload: SemesterPayload, storage: Storage = Depends(get_storage)) -> Dict:
    try:
        return RecordStore(storage).add_semester(payload.year, payload.semester).to_dict()
    except StorageError as exc:
        raise _storage_failure(exc) from exc


@app.delete("/semesters/{semester_id}")
def delete_semester(semester_id: str, storage: Storage = Depends(get_storage)) -> Dict[str, str]:
    try:
        result = RecordStore(storage).delete_semester(semester_id)
    except StorageError as exc:
        raise _storage_failure(exc) from exc
    return _ensure_found(result, "Semester not found")


@app.post("/semesters/{semester_id}/subjects", status_code=status.HTTP_201_CREATED)
def add_subject(semester_id: str, payload: SubjectPayload, storage: Storage = Depends(get_storage)) -> Dict[str, str]:
    try:
        result = RecordStore(storage).add_subject(semester_id, payload.name, payload.credits, payload.grade)
    except StorageError as exc:
        raise _storage_failure(exc) from exc
    return _ensure_found(result, "Semester not found")


@app.delete("/semesters/{semester_id}/subjects/{subject_id}")
def delete_subject(semester_id: str, subject_id: str, storage: Storage = Depends(get_storage)) -> Dict[str, str]:
    try:
        result = RecordStore(storage).delete_subject(semester_id, subject_id)
    except StorageError as exc:
        raise _storage_failure(exc) from exc
    return _ensure_found(result, "Subject not found")


@app.get("/scale")
def get_scale(storage: Storage = Depends(get_storage)) -> Dict[str, float]:
    try:
        return GradeScaleStore(storage).scale
    except StorageError as exc:
        raise _storage_failure(exc) from exc


@app.put("/scale")
def set_scale(payload: Dict[str, FiniteFloat], storage: Storage = Depends(get_storage)) -> Dict[str, float]:
    try:
        store = GradeScaleStore(storage)
        store.set_scale(payload)
        return store.scale
    except InvalidGradeScaleError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except StorageError as exc:
        raise _storage_failure(exc) from exc


@app.delete("/scale")
def reset_scale(storage: Storage = Depends(get_storage)) -> Dict[str, float]:
    try:
        store = GradeScaleStore(storage)
        store.reset()
        return store.scale
    except StorageError as exc:
        raise _storage_failure(exc) from exc


@app.get("/summary")
def get_summary(storage: Storage = Depends(get_storage)) -> Dict:
    try:
        scale = GradeScaleStore(storage).scale
        return build_report(RecordStore(storage).get_record(), scale)
    except StorageError as exc:
        raise _storage_failure(exc) from exc


@app.get("/analytics/low-performing")
def get_low_performing(
    threshold: Optional[float] = None,
    storage: Storage = Depends(get_storage),
) -> List[Dict]:
    try:
        scale = GradeScaleStore(storage).scale
        record = RecordStore(storage).get_record()
    except StorageError as exc:
        raise _storage_failure(exc) from exc
    limit = settings.low_grade_threshold if threshold is None else threshold
    return [
        {
            **f.subject.to_dict(),
            "year": f.year,
            "semester_number": f.semester_number,
            "grade_point": f.grade_point,
        }
        for f in low_performing_subjects(record, scale, limit)
    ]
