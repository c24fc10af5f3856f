from unittest.mock import MagicMock

import pytest
import streamlit as st

from src.restaurants.adapters.db_manager import DatabaseManager
from src.restaurants.adapters.memory_store import InMemoryRestaurantStore
from src.restaurants.adapters.sqlite_preferences import SQLitePreferenceStore
from src.restaurants.application.service import RestaurantService
from src.restaurants.application.synchronizer import RestaurantSynchronizer
from src.restaurants.domain.models import DocumentSnapshot
from src.restaurants.domain.ports import INotifier


class MockSessionState(dict):
    """
    Mock for st.session_state that behaves like both a dict and an object.
    Allows both dict-style and attribute-style access.
    """

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError as err:
            raise AttributeError(
                f"'MockSessionState' object has no attribute '{name}'"
            ) from err

    def __setattr__(self, name, value):
        self[name] = value

    def __delattr__(self, name):
        try:
            del self[name]
        except KeyError as err:
            raise AttributeError(
                f"'MockSessionState' object has no attribute '{name}'"
            ) from err


@pytest.fixture(autouse=True)
def mock_streamlit_session():
    """
    Auto-use fixture that ensures st.session_state exists for all tests.
    """
    original_session_state = getattr(st, "session_state", None)

    st.session_state = MockSessionState()

    yield st.session_state

    st.session_state.clear()

    if original_session_state is not None:
        st.session_state = original_session_state


@pytest.fixture
def cafe_doc():
    return DocumentSnapshot(id="a", data={"name": "Cafe", "showReviews": True})


@pytest.fixture
def memory_store():
    return InMemoryRestaurantStore()


@pytest.fixture
def db_manager():
    manager = DatabaseManager(db_path=":memory:")
    yield manager
    manager.close()


@pytest.fixture
def local_store(db_manager):
    """A clean SQLite-backed key-value cache."""
    return SQLitePreferenceStore(db_manager)


@pytest.fixture
def notifier():
    return MagicMock(spec=INotifier)


@pytest.fixture
def synchronizer(memory_store, local_store):
    sync = RestaurantSynchronizer(memory_store, local_store)
    yield sync
    sync.stop()


@pytest.fixture
def service(memory_store, local_store, notifier):
    return RestaurantService(memory_store, local_store, notifier)
