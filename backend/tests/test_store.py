import pytest

import database.store as store


def test_missing_credentials_leave_local_only_mode(tmp_path, monkeypatch):
    monkeypatch.setattr(store, "FIREBASE_CREDENTIALS_PATH", tmp_path / "absent.json")
    assert store.init_remote_store() is False
    assert store.is_configured() is False


def test_unusable_credentials_leave_local_only_mode(tmp_path):
    bad = tmp_path / "service-account.json"
    bad.write_text("{}")
    assert store.init_remote_store(bad) is False
    assert store.is_configured() is False


def test_calls_without_client_raise_unavailable():
    store.set_client(None)
    with pytest.raises(store.RemoteStoreUnavailable):
        store.add_document("attendance", {"cardId": "A"}, timestamp_field="createdAt")
    with pytest.raises(store.RemoteStoreError):
        store.find_documents("attendance", limit=1)


def test_find_documents_applies_filter_order_and_limit(fake_firestore):
    store.set_client(fake_firestore)
    try:
        for name in ("Cy", "Al", "Bo"):
            store.add_document("students", {"cardId": "X", "name": name}, timestamp_field="registeredAt")
        store.add_document("students", {"cardId": "Y", "name": "Di"}, timestamp_field="registeredAt")

        rows = store.find_documents("students", where=[("cardId", "==", "X")], order_by="name", limit=2)
        assert [r["name"] for r in rows] == ["Al", "Bo"]
        assert all(r["id"].startswith("students-") for r in rows)
    finally:
        store.set_client(None)


def test_google_errors_are_wrapped(fake_firestore):
    fake_firestore.failing = True
    store.set_client(fake_firestore)
    try:
        with pytest.raises(store.RemoteStoreError):
            store.find_documents("students")
        with pytest.raises(store.RemoteStoreError):
            store.add_document("students", {"name": "A"}, timestamp_field="registeredAt")
    finally:
        store.set_client(None)
