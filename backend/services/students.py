import logging
from typing import Any

from backend.config import NOT_AVAILABLE, STUDENTS_COLLECTION
from backend.services.errors import ValidationFailed
from database.store import RemoteStoreError, add_document, find_documents

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str:
    return (value or "").strip()


def resolve_student(card_id: str) -> dict[str, Any] | None:
    """
    Look up the student registered to `card_id`.

    Returns None both when nobody holds the card and when Firestore cannot
    be reached. If several students share a card, the first one wins.
    """
    try:
        matches = find_documents(STUDENTS_COLLECTION, where=[("cardId", "==", card_id)], limit=1)
    except RemoteStoreError as exc:
        logger.error("Error fetching student details for card %s: %s", card_id, exc)
        return None

    if not matches:
        logger.info("No student found with cardId: %s", card_id)
        return None
    return matches[0]


def register_student(
    card_id: str | None,
    name: str | None,
    student_class: str | None = None,
    roll_number: str | None = None,
) -> dict[str, Any]:
    """Create a student document. Firestore faults propagate to the caller."""
    card_id = _clean(card_id)
    name = _clean(name)
    if not card_id or not name:
        raise ValidationFailed("cardId and name are required")

    new_id = add_document(
        STUDENTS_COLLECTION,
        {
            "cardId": card_id,
            "name": name,
            "class": _clean(student_class) or NOT_AVAILABLE,
            "rollNumber": _clean(roll_number) or NOT_AVAILABLE,
        },
        timestamp_field="registeredAt",
    )
    logger.info("Student registered: %s (card %s, id %s)", name, card_id, new_id)
    return {"id": new_id, "cardId": card_id, "name": name}


def list_students() -> list[dict[str, Any]]:
    return find_documents(STUDENTS_COLLECTION, order_by="name")
