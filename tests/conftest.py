import pytest

from app.main import app
from app.services.firebase_service import firebase_service


class FakeFirestore:
    """In-memory stand-in for the FirebaseService document helpers"""

    def __init__(self):
        self.store = {}
        self.fail_writes = False

    async def get_document(self, path):
        data = self.store.get(path)
        return dict(data) if data is not None else None

    async def set_document(self, path, data, merge=False):
        if self.fail_writes:
            raise RuntimeError("firestore unavailable")
        if merge and path in self.store:
            self.store[path].update(data)
        else:
            self.store[path] = dict(data)

    async def update_document(self, path, data):
        if path not in self.store:
            raise KeyError(path)
        self.store[path].update(data)

    async def delete_document(self, path):
        self.store.pop(path, None)

    async def query_collection(self, collection_name, filters=None, order_by=None,
                               direction="ASCENDING", limit=None, offset=None):
        if isinstance(filters, dict):
            filters = [(k, "==", v) for k, v in filters.items()]
        ops = {
            "==": lambda a, b: a == b,
            ">=": lambda a, b: a is not None and a >= b,
            "<=": lambda a, b: a is not None and a <= b,
        }
        docs = []
        for path, data in self.store.items():
            collection, _, doc_id = path.partition("/")
            if collection != collection_name:
                continue
            if all(ops[op](data.get(field), value) for field, op, value in filters or []):
                docs.append((doc_id, dict(data)))
        if order_by:
            docs.sort(key=lambda d: d[1].get(order_by),
                      reverse=direction == "DESCENDING")
        if offset:
            docs = docs[offset:]
        if limit:
            docs = docs[:limit]
        return docs, len(docs)

    def in_collection(self, collection_name):
        return {p: d for p, d in self.store.items()
                if p.startswith(f"{collection_name}/")}


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeFirestore()
    for name in ("get_document", "set_document", "update_document",
                 "delete_document", "query_collection"):
        monkeypatch.setattr(firebase_service, name, getattr(db, name))
    return db


@pytest.fixture(autouse=True)
def clear_overrides():
    yield
    app.dependency_overrides = {}
