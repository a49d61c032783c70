import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict

from backend.routers.body import parsed_body
from backend.services.attendance import read_all, read_latest, read_today, record_attendance
from backend.services.errors import ValidationFailed
from backend.services.ledger import clear_records
from database.store import RemoteStoreError

logger = logging.getLogger(__name__)

router = APIRouter()


class AttendanceScan(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    cardId: str | None = None
    time: str | None = None


@router.post("/attendance", status_code=201)
def create_attendance(payload: AttendanceScan = Depends(parsed_body(AttendanceScan))):
    try:
        record = record_attendance(payload.cardId, payload.time)
    except ValidationFailed as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {
        "success": True,
        "message": "Attendance recorded successfully",
        "data": record,
    }


@router.get("/attendance")
def attendance():
    records, source = read_all()
    return {"success": True, "count": len(records), "data": records, "source": source}


@router.get("/attendance/latest")
def attendance_latest():
    records, source = read_latest()
    return {"success": True, "count": len(records), "data": records, "source": source}


@router.get("/attendance/today")
def attendance_today():
    try:
        records = read_today()
    except RemoteStoreError as exc:
        logger.error("Error fetching today's attendance: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to fetch today's attendance")
    return {"success": True, "count": len(records), "data": records}


@router.delete("/attendance/clear")
def clear_attendance():
    count = clear_records()
    logger.info("Cleared %d in-memory records", count)
    return {
        "success": True,
        "message": f"Cleared {count} local records (Firebase data unchanged)",
        "cleared": count,
    }
