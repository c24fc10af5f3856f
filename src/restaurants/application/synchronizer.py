import json
import threading
from collections.abc import Callable

from pydantic import ValidationError

from src.config import AppConfig
from src.restaurants.domain.errors import LocalStoreError
from src.restaurants.domain.models import DocumentSnapshot, PreferenceOverride, Restaurant
from src.restaurants.domain.ports import ILocalStore, IRestaurantStore, Subscription
from src.shared.telemetry import Telemetry, measure_time

RestaurantListener = Callable[[tuple[Restaurant, ...]], None]


class RestaurantSynchronizer:
    """
    Keeps an in-memory list of restaurants in step with the remote
    collection, resolving each record's showReviews against the local cache.

    Snapshots can arrive on the store's watch thread. Every snapshot takes a
    generation number; a refresh that finishes after a newer snapshot has
    started is dropped so the list always reflects the latest one.
    """

    def __init__(
        self,
        store: IRestaurantStore,
        local_store: ILocalStore,
        collection: str = AppConfig.COLLECTION,
    ) -> None:
        self.store = store
        self.local_store = local_store
        self.collection = collection
        self.telemetry = Telemetry("RestaurantSynchronizer")

        self._lock = threading.Lock()
        self._subscription: Subscription | None = None
        self._active = False
        self._generation = 0
        self._version = 0
        self._restaurants: tuple[Restaurant, ...] = ()
        self._listeners: list[RestaurantListener] = []

    # --- Properties ---
    @property
    def restaurants(self) -> tuple[Restaurant, ...]:
        return self._restaurants

    @property
    def version(self) -> int:
        return self._version

    @property
    def is_active(self) -> bool:
        return self._active

    def add_listener(self, listener: RestaurantListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    # --- Lifecycle ---
    def start(self) -> None:
        with self._lock:
            if self._active:
                return
            self._active = True

        self.telemetry.log_info("Subscribing", collection=self.collection)
        subscription = self.store.subscribe(self.collection, self._on_snapshot)

        with self._lock:
            if self._active:
                self._subscription = subscription
                return
        # stop() ran while subscribing
        subscription.unsubscribe()

    def stop(self) -> None:
        with self._lock:
            subscription = self._subscription
            self._subscription = None
            self._active = False
        if subscription is not None:
            subscription.unsubscribe()
            self.telemetry.log_info("Unsubscribed", collection=self.collection)

    # --- Snapshot Handling ---
    def _on_snapshot(self, documents: list[DocumentSnapshot]) -> None:
        with self._lock:
            if not self._active:
                return
            self._generation += 1
            generation = self._generation

        items = self.build_items(documents)

        with self._lock:
            if not self._active or generation != self._generation:
                Telemetry.count_snapshot("discarded")
                self.telemetry.log_info(
                    "Discarding superseded snapshot",
                    generation=generation,
                    latest=self._generation,
                )
                return
            self._restaurants = items
            self._version += 1
            listeners = list(self._listeners)

        Telemetry.count_snapshot("published")
        for listener in listeners:
            listener(items)

    @measure_time("sync_build_items")
    def build_items(self, documents: list[DocumentSnapshot]) -> tuple[Restaurant, ...]:
        """Enriches every document in snapshot order."""
        items = []
        for doc in documents:
            try:
                restaurant = Restaurant.from_document(doc.id, doc.data)
            except ValidationError as e:
                self.telemetry.log_error(f"Malformed document {doc.id}, showing placeholder", e)
                restaurant = Restaurant.placeholder(doc.id, doc.data)
            items.append(self._with_effective_preference(restaurant))
        return tuple(items)

    def _with_effective_preference(self, restaurant: Restaurant) -> Restaurant:
        key = AppConfig.show_reviews_key(restaurant.id)
        try:
            override = PreferenceOverride.parse(self.local_store.get(key))
        except (LocalStoreError, json.JSONDecodeError) as e:
            self.telemetry.log_error(
                f"Error fetching showReviews for {restaurant.name}", e, key=key
            )
            return restaurant

        effective = override.resolve(restaurant.show_reviews)
        if effective == restaurant.show_reviews:
            return restaurant
        return restaurant.model_copy(update={"show_reviews": effective})
