import logging
from datetime import date, datetime, timezone
from typing import Any, Literal

from backend.config import (
    ATTENDANCE_ALL_LIMIT,
    ATTENDANCE_COLLECTION,
    ATTENDANCE_LATEST_LIMIT,
    NOT_AVAILABLE,
    UNKNOWN_STUDENT_NAME,
    UNKNOWN_STUDENT_REMOTE_NAME,
)
from backend.services import ledger
from backend.services.errors import ValidationFailed
from backend.services.students import resolve_student
from database.store import RemoteStoreError, add_document, find_documents

logger = logging.getLogger(__name__)

Source = Literal["firebase", "memory"]


def now_iso() -> str:
    """UTC now as 2024-01-16T10:30:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _start_of_today() -> datetime:
    # Local midnight with the offset in force at midnight, not the current one.
    return datetime.combine(date.today(), datetime.min.time()).astimezone()


def _remote_projection(card_id: str, timestamp: str, student: dict[str, Any] | None) -> dict[str, Any]:
    return {
        "cardId": card_id,
        "timestamp": timestamp,
        "studentId": student.get("id") if student else None,
        "studentName": student.get("name", UNKNOWN_STUDENT_REMOTE_NAME) if student else UNKNOWN_STUDENT_REMOTE_NAME,
        "class": student.get("class", NOT_AVAILABLE) if student else NOT_AVAILABLE,
    }


def record_attendance(card_id: str | None, time: str | None = None) -> dict[str, Any]:
    """
    Accept one card scan.

    The ledger append always happens; the Firestore write is best effort.
    `firebaseId` is present in the result only when that write succeeded.
    """
    card_id = (card_id or "").strip()
    if not card_id:
        raise ValidationFailed("cardId is required")

    timestamp = time or now_iso()
    logger.info("Attendance request received for card: %s", card_id)

    student = resolve_student(card_id)
    record = ledger.append_record(
        {
            "cardId": card_id,
            "timestamp": timestamp,
            "recordedAt": now_iso(),
            "student": student or {"name": UNKNOWN_STUDENT_NAME, "class": NOT_AVAILABLE},
        }
    )

    try:
        firebase_id = add_document(
            ATTENDANCE_COLLECTION,
            _remote_projection(card_id, timestamp, student),
            timestamp_field="createdAt",
        )
    except RemoteStoreError as exc:
        logger.error("Error saving attendance to Firebase (local id %s): %s", record["id"], exc)
        firebase_id = None

    logger.info(
        "Attendance recorded: card=%s student=%s local_id=%s firebase_id=%s",
        card_id,
        student.get("name") if student else "Unknown",
        record["id"],
        firebase_id,
    )
    if firebase_id:
        record["firebaseId"] = firebase_id
    return record


def _recent_remote(limit: int) -> list[dict[str, Any]]:
    return find_documents(ATTENDANCE_COLLECTION, order_by="createdAt", direction="desc", limit=limit)


def read_all() -> tuple[list[dict[str, Any]], Source]:
    try:
        return _recent_remote(ATTENDANCE_ALL_LIMIT), "firebase"
    except RemoteStoreError as exc:
        logger.error("Firebase fetch failed, using local data: %s", exc)
        return ledger.all_records(), "memory"


def read_latest() -> tuple[list[dict[str, Any]], Source]:
    try:
        return _recent_remote(ATTENDANCE_LATEST_LIMIT), "firebase"
    except RemoteStoreError as exc:
        logger.error("Firebase fetch failed, using latest local data: %s", exc)
        return ledger.latest_records(ATTENDANCE_LATEST_LIMIT), "memory"


def read_today() -> list[dict[str, Any]]:
    """Today's scans, newest first. Raises RemoteStoreError; there is no local fallback."""
    return find_documents(
        ATTENDANCE_COLLECTION,
        where=[("createdAt", ">=", _start_of_today())],
        order_by="createdAt",
        direction="desc",
    )
