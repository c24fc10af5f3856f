from unittest.mock import MagicMock

import pytest
from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions

from src.restaurants.adapters.firestore_store import FirestoreRestaurantStore
from src.restaurants.domain.errors import RemoteStoreError
from src.restaurants.domain.models import DocumentSnapshot


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def store(client):
    return FirestoreRestaurantStore(client=client)


def fake_doc(doc_id, data):
    doc = MagicMock()
    doc.id = doc_id
    doc.to_dict.return_value = data
    return doc


def test_subscribe_converts_watch_callback(store, client):
    handler = MagicMock()
    store.subscribe("restaurants", handler)

    client.collection.assert_called_with("restaurants")
    callback = client.collection.return_value.on_snapshot.call_args.args[0]

    callback([fake_doc("a", {"name": "Cafe"}), fake_doc("b", None)], [], None)

    handler.assert_called_once_with(
        [DocumentSnapshot("a", {"name": "Cafe"}), DocumentSnapshot("b", {})]
    )


def test_unsubscribe_releases_watch(store, client):
    watch = client.collection.return_value.on_snapshot.return_value

    subscription = store.subscribe("restaurants", MagicMock())
    subscription.unsubscribe()
    subscription.unsubscribe()

    watch.unsubscribe.assert_called_once()


def test_delete(store, client):
    store.delete("restaurants", "a")

    client.collection.return_value.document.assert_called_once_with("a")
    client.collection.return_value.document.return_value.delete.assert_called_once()


def test_delete_failure_raises_remote_store_error(store, client):
    client.collection.return_value.document.return_value.delete.side_effect = (
        google_exceptions.ServiceUnavailable("offline")
    )

    with pytest.raises(RemoteStoreError):
        store.delete("restaurants", "a")


def test_add_returns_new_id(store, client):
    doc_ref = MagicMock()
    doc_ref.id = "new-id"
    client.collection.return_value.add.return_value = (None, doc_ref)

    assert store.add("restaurants", {"name": "Cafe"}) == "new-id"


def test_update_merges(store, client):
    store.update("restaurants", "a", {"name": "Cafe"})

    client.collection.return_value.document.return_value.set.assert_called_once_with(
        {"name": "Cafe"}, merge=True
    )


@pytest.mark.parametrize(
    "error",
    [
        google_exceptions.ServiceUnavailable("offline"),
        auth_exceptions.RefreshError("token expired"),
        auth_exceptions.DefaultCredentialsError("no credentials"),
    ],
)
def test_every_remote_call_wraps_store_and_credential_errors(store, client, error):
    collection = client.collection.return_value
    collection.on_snapshot.side_effect = error
    collection.add.side_effect = error
    collection.document.return_value.delete.side_effect = error
    collection.document.return_value.set.side_effect = error

    with pytest.raises(RemoteStoreError):
        store.subscribe("restaurants", MagicMock())
    with pytest.raises(RemoteStoreError):
        store.delete("restaurants", "a")
    with pytest.raises(RemoteStoreError):
        store.add("restaurants", {"name": "Cafe"})
    with pytest.raises(RemoteStoreError):
        store.update("restaurants", "a", {"name": "Cafe"})


def test_expired_credentials_report_failed_delete(store, client, notifier):
    from src.restaurants.adapters.sqlite_preferences import SQLitePreferenceStore
    from src.restaurants.application.service import RestaurantService

    client.collection.return_value.document.return_value.delete.side_effect = (
        auth_exceptions.RefreshError("token expired")
    )
    local = MagicMock(spec=SQLitePreferenceStore)
    service = RestaurantService(store, local, notifier)

    assert service.delete_restaurant("a") is False
    local.remove.assert_not_called()
    notifier.notify.assert_called_once_with("Error", "Failed to delete restaurant.")
