# managers/branch_store.py
import logging
from google.api_core.exceptions import GoogleAPIError
from google.cloud.firestore_v1.base_query import FieldFilter

from .branch_errors import StoreError


class BranchStore:
    """
    Thin adapter over a Firestore client. Every call is a single Firestore
    operation, so a failure never leaves a partial write behind; Google API
    failures are logged and re-raised as StoreError.
    """
    def __init__(self, db):
        self.db = db

    def _records(self, docs):
        """Turns document snapshots into dicts that carry the document ID."""
        results = []
        for doc in docs:
            data = doc.to_dict()
            if isinstance(data, dict):
                data['id'] = doc.id
                results.append(data)
        return results

    def _fail(self, operation, collection_name, e):
        logging.error(f"Store operation '{operation}' on '{collection_name}' failed: {e}")
        return StoreError(operation, e)

    def subscribe(self, collection_name, on_snapshot):
        """
        Listens to the whole collection. Each notification hands the complete,
        current list of records to `on_snapshot`. Returns a zero-argument
        callable that detaches the listener.
        """
        def _on_change(col_snapshot, changes, read_time):
            on_snapshot(self._records(col_snapshot))

        try:
            watch = self.db.collection(collection_name).on_snapshot(_on_change)
        except GoogleAPIError as e:
            raise self._fail('subscribe', collection_name, e) from e

        logging.info(f"Subscribed to collection '{collection_name}'.")

        def unsubscribe():
            watch.unsubscribe()
            logging.info(f"Unsubscribed from collection '{collection_name}'.")

        return unsubscribe

    def query_by_field(self, collection_name, field, value):
        """Returns all records whose `field` equals `value`."""
        try:
            query = self.db.collection(collection_name).where(filter=FieldFilter(field, "==", value))
            return self._records(query.stream())
        except GoogleAPIError as e:
            raise self._fail('query', collection_name, e) from e

    def list_all(self, collection_name):
        try:
            return self._records(self.db.collection(collection_name).stream())
        except GoogleAPIError as e:
            raise self._fail('list', collection_name, e) from e

    def get(self, collection_name, doc_id):
        """Fresh read of one record, or None when it does not exist."""
        try:
            doc = self.db.collection(collection_name).document(doc_id).get()
        except GoogleAPIError as e:
            raise self._fail('get', collection_name, e) from e
        if not doc.exists:
            return None
        data = doc.to_dict() or {}
        data['id'] = doc.id
        return data

    def insert(self, collection_name, fields):
        """Adds a document with a store-assigned ID and returns that ID."""
        try:
            _, doc_ref = self.db.collection(collection_name).add(fields)
        except GoogleAPIError as e:
            raise self._fail('insert', collection_name, e) from e
        return doc_ref.id

    def update(self, collection_name, doc_id, partial_fields):
        try:
            self.db.collection(collection_name).document(doc_id).update(partial_fields)
        except GoogleAPIError as e:
            raise self._fail('update', collection_name, e) from e

    def delete(self, collection_name, doc_id):
        try:
            self.db.collection(collection_name).document(doc_id).delete()
        except GoogleAPIError as e:
            raise self._fail('delete', collection_name, e) from e
