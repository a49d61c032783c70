import itertools
import operator
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from firebase_admin import firestore
from google.api_core.exceptions import ServiceUnavailable

import backend.main as main
import backend.services.ledger as ledger
import database.store as store

_OPS = {
    "==": operator.eq,
    ">=": operator.ge,
    ">": operator.gt,
    "<=": operator.le,
    "<": operator.lt,
}


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    def to_dict(self):
        return dict(self._data)


class FakeDocumentRef:
    def __init__(self, doc_id):
        self.id = doc_id


class FakeQuery:
    def __init__(self, db, name, filters=(), order=None, limit=None):
        self._db = db
        self._name = name
        self._filters = list(filters)
        self._order = order
        self._limit = limit

    def _copy(self, **changes):
        state = {"filters": self._filters, "order": self._order, "limit": self._limit, **changes}
        return FakeQuery(self._db, self._name, **state)

    def where(self, *, filter):
        return self._copy(filters=[*self._filters, (filter.field_path, filter.op_string, filter.value)])

    def order_by(self, field, direction=firestore.Query.ASCENDING):
        return self._copy(order=(field, direction))

    def limit(self, count):
        return self._copy(limit=count)

    def stream(self):
        self._db.check()
        rows = self._db.docs(self._name)
        for field, op, value in self._filters:
            rows = [r for r in rows if field in r[2] and _OPS[op](r[2][field], value)]
        if self._order:
            field, direction = self._order
            rows.sort(
                key=lambda r: (r[2].get(field), r[0]),
                reverse=direction == firestore.Query.DESCENDING,
            )
        if self._limit is not None:
            rows = rows[: self._limit]
        for _seq, doc_id, data in rows:
            yield FakeSnapshot(doc_id, data)


class FakeCollection(FakeQuery):
    def add(self, data):
        self._db.check()
        return self._db.insert(self._name, data)


class FakeFirestore:
    """In-memory stand-in for a Firestore client, with a switchable fault mode."""

    def __init__(self):
        self.failing = False
        self._collections: dict[str, list[tuple[int, str, dict]]] = {}
        self._seq = itertools.count(1)

    def check(self):
        if self.failing:
            raise ServiceUnavailable("firestore is down")

    def collection(self, name):
        return FakeCollection(self, name)

    def docs(self, name):
        return list(self._collections.get(name, []))

    def insert(self, name, data):
        seq = next(self._seq)
        now = datetime.now(timezone.utc)
        stored = {k: (now if v is firestore.SERVER_TIMESTAMP else v) for k, v in data.items()}
        doc_id = f"{name}-{seq}"
        self._collections.setdefault(name, []).append((seq, doc_id, stored))
        return now, FakeDocumentRef(doc_id)

    def seed(self, name, data):
        """Insert a document verbatim (no server timestamp substitution)."""
        seq = next(self._seq)
        doc_id = f"{name}-{seq}"
        self._collections.setdefault(name, []).append((seq, doc_id, dict(data)))
        return doc_id


@pytest.fixture()
def fake_firestore():
    return FakeFirestore()


@pytest.fixture()
def client(tmp_path, monkeypatch, fake_firestore):
    # Startup must not pick up real credentials.
    monkeypatch.setattr(store, "FIREBASE_CREDENTIALS_PATH", tmp_path / "missing-service-account.json")
    ledger.clear_records()

    with TestClient(main.app) as c:
        store.set_client(fake_firestore)
        yield c

    store.set_client(None)
    ledger.clear_records()


@pytest.fixture()
def local_only_client(tmp_path, monkeypatch):
    monkeypatch.setattr(store, "FIREBASE_CREDENTIALS_PATH", tmp_path / "missing-service-account.json")
    ledger.clear_records()

    with TestClient(main.app) as c:
        yield c

    ledger.clear_records()
