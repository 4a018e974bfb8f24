import logging
import threading

from .branch_projection import project_registry


class RegistryFeed:
    """
    Client-side cache of the branch collection, fed only by store snapshots.

    Each notification replaces the whole list; nothing is merged and nothing
    is written locally, so the cache can never drift from the last snapshot.
    Use as a context manager (or call close()) so the listener is released.
    """
    def __init__(self, store, collection_name):
        self.store = store
        self.collection_name = collection_name
        self._records = []
        self._lock = threading.Lock()
        self._unsubscribe = None
        self._listeners = []
        self.snapshot_version = 0

    def open(self):
        if self._unsubscribe is None:
            self._unsubscribe = self.store.subscribe(self.collection_name, self._on_snapshot)
        return self

    def close(self):
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()

    @property
    def is_open(self):
        return self._unsubscribe is not None

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def add_listener(self, callback):
        """`callback(records)` runs after every snapshot replacement."""
        self._listeners.append(callback)

    def _on_snapshot(self, records):
        with self._lock:
            self._records = list(records)
            self.snapshot_version += 1
            current = self._records
        for callback in list(self._listeners):
            try:
                callback(current)
            except Exception as e:
                logging.error(f"Registry feed listener failed: {e}")

    @property
    def records(self):
        with self._lock:
            return list(self._records)

    def view(self, search="", type_filter="All"):
        return project_registry(self.records, search, type_filter)
