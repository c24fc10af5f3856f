from typing import Any

import firebase_admin
from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions

from src.restaurants.domain.errors import RemoteStoreError
from src.restaurants.domain.models import DocumentSnapshot
from src.restaurants.domain.ports import IRestaurantStore, SnapshotHandler, Subscription
from src.shared.telemetry import Telemetry, measure_time

# Credential and token refresh failures are not GoogleAPIErrors
REMOTE_ERRORS = (google_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError)


class _WatchSubscription(Subscription):
    """Wraps the Firestore Watch returned by `on_snapshot`."""

    def __init__(self, watch: Any) -> None:
        self._watch = watch

    def unsubscribe(self) -> None:
        if self._watch is not None:
            self._watch.unsubscribe()
            self._watch = None


def get_firestore_client(project: str | None = None) -> Any:
    """Returns a client on the default Firebase app, initializing it once."""
    try:
        app = firebase_admin.get_app()
    except ValueError:
        options = {"projectId": project} if project else None
        app = firebase_admin.initialize_app(options=options)
    return firestore.client(app)


class FirestoreRestaurantStore(IRestaurantStore):
    def __init__(self, client: Any = None, project: str | None = None) -> None:
        self.telemetry = Telemetry("FirestoreRestaurantStore")
        try:
            self.client = client if client is not None else get_firestore_client(project)
        except Exception as e:
            self.telemetry.log_error("Failed to initialize Firestore client", e)
            raise

    def subscribe(self, collection: str, on_snapshot: SnapshotHandler) -> Subscription:
        def _callback(col_snapshot: Any, changes: Any, read_time: Any) -> None:
            documents = [
                DocumentSnapshot(id=doc.id, data=doc.to_dict() or {})
                for doc in col_snapshot
            ]
            on_snapshot(documents)

        try:
            watch = self.client.collection(collection).on_snapshot(_callback)
        except REMOTE_ERRORS as e:
            raise RemoteStoreError(f"subscribe to {collection} failed") from e
        return _WatchSubscription(watch)

    @measure_time("fs_delete")
    def delete(self, collection: str, doc_id: str) -> None:
        try:
            self.client.collection(collection).document(doc_id).delete()
        except REMOTE_ERRORS as e:
            raise RemoteStoreError(f"delete {collection}/{doc_id} failed") from e

    @measure_time("fs_add")
    def add(self, collection: str, data: dict[str, Any]) -> str:
        try:
            _, doc_ref = self.client.collection(collection).add(data)
        except REMOTE_ERRORS as e:
            raise RemoteStoreError(f"add to {collection} failed") from e
        return doc_ref.id

    @measure_time("fs_update")
    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        try:
            self.client.collection(collection).document(doc_id).set(data, merge=True)
        except REMOTE_ERRORS as e:
            raise RemoteStoreError(f"update {collection}/{doc_id} failed") from e
