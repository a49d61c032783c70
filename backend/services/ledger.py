import threading
from typing import Any

# -----------------------------
# Local ledger (in-memory)
# -----------------------------
# Fallback copy of every accepted scan. Lost on restart; never synced
# back to Firestore.
LEDGER_LOCK = threading.Lock()
LEDGER_RECORDS: list[dict[str, Any]] = []


def append_record(record: dict[str, Any]) -> dict[str, Any]:
    """
    Assign the next local id and append.

    The id is len + 1 computed under the lock, so concurrent scans never
    share an id. Ids restart at 1 after clear_records().
    """
    with LEDGER_LOCK:
        entry = {"id": len(LEDGER_RECORDS) + 1, **record}
        LEDGER_RECORDS.append(entry)
        return dict(entry)


def all_records() -> list[dict[str, Any]]:
    with LEDGER_LOCK:
        return [dict(r) for r in LEDGER_RECORDS]


def latest_records(limit: int) -> list[dict[str, Any]]:
    """Newest first."""
    if limit <= 0:
        return []
    with LEDGER_LOCK:
        return [dict(r) for r in reversed(LEDGER_RECORDS[-limit:])]


def count_records() -> int:
    with LEDGER_LOCK:
        return len(LEDGER_RECORDS)


def clear_records() -> int:
    with LEDGER_LOCK:
        count = len(LEDGER_RECORDS)
        LEDGER_RECORDS.clear()
        return count
