"""Pytest configuration and fixtures."""

import random
from datetime import datetime, timezone

import pytest
from google.cloud import firestore

from managers.branch_errors import StoreError
from managers.branch_manager import BranchManager


class FakeBranchStore:
    """
    In-memory stand-in for BranchStore. Every committed write is followed by a
    synchronous full snapshot to all subscribers, in commit order.
    """

    def __init__(self):
        self.collections = {}
        self.subscribers = {}
        self.writes = []
        self.fail_on = set()
        self.on_query = None
        self._next_id = 0

    def _docs(self, collection_name):
        return self.collections.setdefault(collection_name, {})

    def _check(self, operation):
        if operation in self.fail_on:
            raise StoreError(operation, RuntimeError("store unavailable"))

    def _snapshot(self, collection_name):
        return [{**fields, "id": doc_id} for doc_id, fields in self._docs(collection_name).items()]

    def _notify(self, collection_name):
        for callback in list(self.subscribers.get(collection_name, [])):
            callback(self._snapshot(collection_name))

    def seed(self, collection_name, doc_id, **fields):
        self._docs(collection_name)[doc_id] = dict(fields)
        self._notify(collection_name)
        return doc_id

    def subscribe(self, collection_name, on_snapshot):
        self._check("subscribe")
        callbacks = self.subscribers.setdefault(collection_name, [])
        callbacks.append(on_snapshot)
        on_snapshot(self._snapshot(collection_name))

        def unsubscribe():
            callbacks.remove(on_snapshot)

        return unsubscribe

    def query_by_field(self, collection_name, field, value):
        self._check("query")
        results = [r for r in self._snapshot(collection_name) if r.get(field) == value]
        if self.on_query is not None:
            self.on_query()
        return results

    def list_all(self, collection_name):
        self._check("list")
        return self._snapshot(collection_name)

    def get(self, collection_name, doc_id):
        self._check("get")
        fields = self._docs(collection_name).get(doc_id)
        if fields is None:
            return None
        return {**fields, "id": doc_id}

    def _stamp(self, fields):
        now = datetime.now(timezone.utc)
        return {k: (now if v is firestore.SERVER_TIMESTAMP else v) for k, v in fields.items()}

    def insert(self, collection_name, fields):
        self._check("insert")
        self._next_id += 1
        doc_id = f"doc-{self._next_id}"
        self._docs(collection_name)[doc_id] = self._stamp(fields)
        self.writes.append(("insert", doc_id, dict(fields)))
        self._notify(collection_name)
        return doc_id

    def update(self, collection_name, doc_id, partial_fields):
        self._check("update")
        docs = self._docs(collection_name)
        if doc_id not in docs:
            raise StoreError("update", KeyError(doc_id))
        docs[doc_id].update(self._stamp(partial_fields))
        self.writes.append(("update", doc_id, dict(partial_fields)))
        self._notify(collection_name)

    def delete(self, collection_name, doc_id):
        self._check("delete")
        self._docs(collection_name).pop(doc_id, None)
        self.writes.append(("delete", doc_id, None))
        self._notify(collection_name)


@pytest.fixture
def store():
    return FakeBranchStore()


@pytest.fixture
def branch_mgr(store):
    return BranchManager(store, rng=random.Random(42))


@pytest.fixture
def main_branch(store):
    """A collection that already holds one Active Main branch."""
    return store.seed(
        "branches", "main-1",
        branchName="Downtown Flagship", branchCode="NX-DO-4821-M",
        address="1 Central Plaza, Old Town", type="Main", status="Active",
    )


@pytest.fixture
def sub_branch(store):
    return store.seed(
        "branches", "sub-1",
        branchName="North Hub", branchCode="NX-NO-1377-S",
        address="77 Harbour Road, North Bay", type="Sub", status="Active",
    )


@pytest.fixture
def westside_data():
    return {
        "branchName": "Westside Hub",
        "address": "12 Long Avenue, District 4",
        "type": "Sub",
    }
