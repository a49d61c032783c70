from fastapi import APIRouter

from backend.services.attendance import now_iso
from backend.services.ledger import count_records
from database.store import is_configured

router = APIRouter()


@router.get("/health")
def health():
    return {
        "status": "ok",
        "remote_store": "firebase" if is_configured() else "local-only",
        "local_records": count_records(),
    }


# Reachability probe for the card readers.
@router.get("/test")
def test_connection():
    return {"success": True, "message": "Server is running!", "timestamp": now_iso()}
