import threading
import uuid
from typing import Any

from src.restaurants.domain.models import DocumentSnapshot
from src.restaurants.domain.ports import IRestaurantStore, SnapshotHandler, Subscription
from src.shared.telemetry import Telemetry


class _MemorySubscription(Subscription):
    def __init__(self, store: "InMemoryRestaurantStore", collection: str, handler: SnapshotHandler) -> None:
        self._store = store
        self._collection = collection
        self._handler = handler

    def unsubscribe(self) -> None:
        self._store._remove_listener(self._collection, self._handler)


class InMemoryRestaurantStore(IRestaurantStore):
    """
    Process-local live collection for development and tests.
    Listeners are called synchronously with the full collection after every
    write, the same contract Firestore's watch gives.
    """

    def __init__(self) -> None:
        self.telemetry = Telemetry("InMemoryRestaurantStore")
        self._lock = threading.RLock()
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._listeners: dict[str, list[SnapshotHandler]] = {}

    # --- IRestaurantStore ---
    def subscribe(self, collection: str, on_snapshot: SnapshotHandler) -> Subscription:
        with self._lock:
            self._listeners.setdefault(collection, []).append(on_snapshot)
            snapshot = self._snapshot(collection)
        on_snapshot(snapshot)
        return _MemorySubscription(self, collection, on_snapshot)

    def delete(self, collection: str, doc_id: str) -> None:
        # Deleting a missing document is not an error (Firestore semantics)
        with self._lock:
            self._collections.get(collection, {}).pop(doc_id, None)
        self._broadcast(collection)

    def add(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex[:20]
        self.put(collection, doc_id, data)
        return doc_id

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        with self._lock:
            docs = self._collections.setdefault(collection, {})
            docs[doc_id] = {**docs.get(doc_id, {}), **data}
        self._broadcast(collection)

    # --- Helpers ---
    def put(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        with self._lock:
            self._collections.setdefault(collection, {})[doc_id] = dict(data)
        self._broadcast(collection)

    def is_empty(self, collection: str) -> bool:
        with self._lock:
            return not self._collections.get(collection)

    def listener_count(self, collection: str) -> int:
        with self._lock:
            return len(self._listeners.get(collection, []))

    def _remove_listener(self, collection: str, handler: SnapshotHandler) -> None:
        with self._lock:
            handlers = self._listeners.get(collection, [])
            if handler in handlers:
                handlers.remove(handler)

    def _snapshot(self, collection: str) -> list[DocumentSnapshot]:
        docs = self._collections.get(collection, {})
        return [DocumentSnapshot(id=k, data=dict(v)) for k, v in docs.items()]

    def _broadcast(self, collection: str) -> None:
        with self._lock:
            handlers = list(self._listeners.get(collection, []))
            snapshot = self._snapshot(collection)
        for handler in handlers:
            handler(snapshot)
