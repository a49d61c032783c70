import logging
from pathlib import Path
from typing import Any, Literal

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core.exceptions import GoogleAPIError
from google.cloud.firestore_v1.base_query import FieldFilter

from backend.config import FIREBASE_CREDENTIALS_PATH, FIREBASE_PROJECT_ID

logger = logging.getLogger(__name__)

SortDirection = Literal["asc", "desc"]

# Firestore client, or None while running in local-only mode.
_CLIENT: Any = None


class RemoteStoreError(Exception):
    """Raised when the remote document store rejects or cannot serve a call."""


class RemoteStoreUnavailable(RemoteStoreError):
    """Raised when no Firestore client is configured (local-only mode)."""


def _get_or_create_app(credentials_path: Path) -> firebase_admin.App:
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass
    options = {"projectId": FIREBASE_PROJECT_ID} if FIREBASE_PROJECT_ID else None
    cert = credentials.Certificate(str(credentials_path))
    return firebase_admin.initialize_app(cert, options)


def init_remote_store(credentials_path: Path | None = None) -> bool:
    """
    Load service-account credentials and build the Firestore client.

    Returns False (and leaves the process in local-only mode) when the
    credentials file is missing or unusable; startup never fails on this.
    """
    global _CLIENT
    path = Path(credentials_path or FIREBASE_CREDENTIALS_PATH)

    if not path.exists():
        logger.warning("Firebase credentials not found at %s; running without Firebase", path)
        _CLIENT = None
        return False

    try:
        app = _get_or_create_app(path)
        _CLIENT = firestore.client(app)
    except (ValueError, OSError) as exc:
        logger.error("Firebase initialization failed: %s", exc)
        _CLIENT = None
        return False

    logger.info("Firebase initialized successfully")
    return True


def set_client(client: Any) -> None:
    global _CLIENT
    _CLIENT = client


def is_configured() -> bool:
    return _CLIENT is not None


def _client() -> Any:
    if _CLIENT is None:
        raise RemoteStoreUnavailable("Firebase is not configured.")
    return _CLIENT


def _snapshot_to_dict(snapshot: Any) -> dict[str, Any]:
    return {"id": snapshot.id, **(snapshot.to_dict() or {})}


def add_document(collection: str, data: dict[str, Any], *, timestamp_field: str) -> str:
    """Add a document stamped with a server timestamp and return its id."""
    payload = {**data, timestamp_field: firestore.SERVER_TIMESTAMP}
    try:
        _update_time, doc_ref = _client().collection(collection).add(payload)
    except GoogleAPIError as exc:
        raise RemoteStoreError(f"add to {collection!r} failed: {exc}") from exc
    return doc_ref.id


def find_documents(
    collection: str,
    *,
    where: list[tuple[str, str, Any]] | None = None,
    order_by: str | None = None,
    direction: SortDirection = "asc",
    limit: int | None = None,
) -> list[dict[str, Any]]:
    """
    Run a filtered, ordered, limited query.

    `where` is a list of (field, operator, value) triples, e.g.
    [("cardId", "==", "ABC123")] or [("createdAt", ">=", midnight)].
    """
    try:
        query = _client().collection(collection)
        for field, op, value in where or []:
            query = query.where(filter=FieldFilter(field, op, value))
        if order_by:
            query = query.order_by(
                order_by,
                direction=firestore.Query.DESCENDING if direction == "desc" else firestore.Query.ASCENDING,
            )
        if limit is not None:
            query = query.limit(limit)
        return [_snapshot_to_dict(doc) for doc in query.stream()]
    except GoogleAPIError as exc:
        raise RemoteStoreError(f"query on {collection!r} failed: {exc}") from exc
