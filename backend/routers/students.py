import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict

from backend.routers.body import parsed_body
from backend.services.errors import ValidationFailed
from backend.services.students import list_students, register_student
from database.store import RemoteStoreError

logger = logging.getLogger(__name__)

router = APIRouter()


class StudentRegistration(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    cardId: str | None = None
    name: str | None = None
    studentClass: str | None = None
    rollNumber: str | None = None


@router.post("/students/register", status_code=201)
def create_student(payload: StudentRegistration = Depends(parsed_body(StudentRegistration))):
    try:
        student = register_student(
            payload.cardId,
            payload.name,
            student_class=payload.studentClass,
            roll_number=payload.rollNumber,
        )
    except ValidationFailed as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except RemoteStoreError as exc:
        logger.error("Error registering student: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to register student")
    return {"success": True, "message": "Student registered successfully", "data": student}


@router.get("/students")
def students():
    try:
        rows = list_students()
    except RemoteStoreError as exc:
        logger.error("Error fetching students: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to fetch students")
    return {"success": True, "count": len(rows), "data": rows}
