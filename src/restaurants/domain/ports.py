from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from src.config import Screen
from src.restaurants.domain.models import DocumentSnapshot

SnapshotHandler = Callable[[list[DocumentSnapshot]], None]


class Subscription(ABC):
    """Handle for a standing collection subscription."""

    @abstractmethod
    def unsubscribe(self) -> None:
        pass


class IRestaurantStore(ABC):
    """
    Remote document store. All methods raise RemoteStoreError on failure.
    """

    @abstractmethod
    def subscribe(self, collection: str, on_snapshot: SnapshotHandler) -> Subscription:
        """
        Starts a live query. `on_snapshot` receives the full collection
        contents on first load and after every change.
        """
        pass

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        pass

    @abstractmethod
    def add(self, collection: str, data: dict[str, Any]) -> str:
        pass

    @abstractmethod
    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        pass


class ILocalStore(ABC):
    """
    On-device key-value cache. All methods raise LocalStoreError on failure.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass


class INavigator(ABC):
    @abstractmethod
    def navigate(self, screen: Screen, params: dict[str, Any] | None = None) -> None:
        pass


class INotifier(ABC):
    @abstractmethod
    def notify(self, title: str, message: str) -> None:
        pass
