import logging
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]

FIREBASE_CREDENTIALS_PATH = Path(
    os.getenv("RFID_ATTENDANCE_FIREBASE_CREDENTIALS", BASE_DIR / "firebase-service-account.json")
)
FIREBASE_PROJECT_ID = os.getenv("RFID_ATTENDANCE_FIREBASE_PROJECT_ID", "").strip() or None
STATIC_DIR = Path(os.getenv("RFID_ATTENDANCE_STATIC_DIR", BASE_DIR / "public"))

STUDENTS_COLLECTION = os.getenv("RFID_ATTENDANCE_STUDENTS_COLLECTION", "students").strip() or "students"
ATTENDANCE_COLLECTION = os.getenv("RFID_ATTENDANCE_ATTENDANCE_COLLECTION", "attendance").strip() or "attendance"

HOST = os.getenv("RFID_ATTENDANCE_HOST", "0.0.0.0").strip() or "0.0.0.0"
PORT = int(os.getenv("RFID_ATTENDANCE_PORT", "8080"))


def _parse_bool(value: str | None, fallback: bool) -> bool:
    if value is None:
        return fallback
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return fallback


def _parse_csv(value: str | None, fallback: list[str]) -> list[str]:
    if not value:
        return fallback
    parsed = [item.strip() for item in value.split(",") if item.strip()]
    return parsed or fallback


def _parse_limit(value: str | None, fallback: int) -> int:
    try:
        parsed = int(value) if value else fallback
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


def _parse_log_level(value: str | None, fallback: str = "INFO") -> str:
    normalized = (value or "").strip().upper()
    if normalized and isinstance(logging.getLevelName(normalized), int):
        return normalized
    return fallback


LOG_LEVEL = _parse_log_level(os.getenv("RFID_ATTENDANCE_LOG_LEVEL"))

# Scanners post from arbitrary LAN addresses, so CORS is open by default.
CORS_ALLOW_ORIGINS = _parse_csv(os.getenv("RFID_ATTENDANCE_CORS_ALLOW_ORIGINS"), ["*"])
CORS_ALLOW_METHODS = _parse_csv(
    os.getenv("RFID_ATTENDANCE_CORS_ALLOW_METHODS"),
    ["GET", "POST", "DELETE", "OPTIONS"],
)
CORS_ALLOW_HEADERS = _parse_csv(
    os.getenv("RFID_ATTENDANCE_CORS_ALLOW_HEADERS"),
    ["Content-Type", "Accept"],
)
CORS_ALLOW_CREDENTIALS = _parse_bool(os.getenv("RFID_ATTENDANCE_CORS_ALLOW_CREDENTIALS"), False)

ATTENDANCE_ALL_LIMIT = _parse_limit(os.getenv("RFID_ATTENDANCE_ALL_LIMIT"), 100)
ATTENDANCE_LATEST_LIMIT = _parse_limit(os.getenv("RFID_ATTENDANCE_LATEST_LIMIT"), 10)

UNKNOWN_STUDENT_NAME = "Unknown Student"
UNKNOWN_STUDENT_REMOTE_NAME = "Unknown"
NOT_AVAILABLE = "N/A"
