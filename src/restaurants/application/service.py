from typing import Any

from src.config import AppConfig
from src.restaurants.domain.errors import LocalStoreError, RemoteStoreError
from src.restaurants.domain.models import Restaurant, serialize_preference
from src.restaurants.domain.ports import ILocalStore, INotifier, IRestaurantStore
from src.shared.telemetry import Telemetry, measure_time


class RestaurantService:
    """
    Writes that touch the remote collection and the local cache together.
    Nothing here updates the displayed list; the next snapshot does that.
    """

    def __init__(
        self,
        store: IRestaurantStore,
        local_store: ILocalStore,
        notifier: INotifier,
        collection: str = AppConfig.COLLECTION,
    ) -> None:
        self.store = store
        self.local_store = local_store
        self.notifier = notifier
        self.collection = collection
        self.telemetry = Telemetry("RestaurantService")

    @measure_time("delete_restaurant")
    def delete_restaurant(self, restaurant_id: str) -> bool:
        """
        Deletes the remote record, then its showReviews override.
        A failed remote delete leaves the override untouched.
        """
        try:
            self.store.delete(self.collection, restaurant_id)
        except RemoteStoreError as e:
            self.telemetry.log_error("Remote delete failed", e, id=restaurant_id)
            Telemetry.count_delete("failure")
            self.notifier.notify(*AppConfig.DELETE_FAILURE)
            return False

        key = AppConfig.show_reviews_key(restaurant_id)
        try:
            self.local_store.remove(key)
        except LocalStoreError as e:
            # Orphaned override keys are harmless.
            self.telemetry.log_warning("Override cleanup failed", e, key=key)

        Telemetry.count_delete("success")
        self.telemetry.log_info("Restaurant deleted", id=restaurant_id)
        self.notifier.notify(*AppConfig.DELETE_SUCCESS)
        return True

    def set_show_reviews(self, restaurant_id: str, value: bool) -> None:
        """Stores the on-device override. Raises LocalStoreError."""
        self.local_store.set(
            AppConfig.show_reviews_key(restaurant_id), serialize_preference(value)
        )
        self.telemetry.log_info("showReviews override set", id=restaurant_id, value=value)

    def clear_show_reviews(self, restaurant_id: str) -> None:
        self.local_store.remove(AppConfig.show_reviews_key(restaurant_id))

    @measure_time("add_restaurant")
    def add_restaurant(self, name: str, notes: str = "", images: list[str] | None = None) -> str | None:
        payload: dict[str, Any] = {
            "name": name.strip(),
            "notes": notes,
            "images": images or [],
            "showReviews": False,
        }
        try:
            new_id = self.store.add(self.collection, payload)
        except RemoteStoreError as e:
            self.telemetry.log_error("Add failed", e, name=name)
            self.notifier.notify("Error", "Failed to add restaurant.")
            return None
        self.notifier.notify("Success", "Restaurant added!")
        return new_id

    @measure_time("update_restaurant")
    def update_restaurant(self, restaurant: Restaurant) -> bool:
        # showReviews on a listed record may be the local override; the
        # server value is left as it is.
        payload = restaurant.model_dump(include={"name", "notes", "images"})
        try:
            self.store.update(self.collection, restaurant.id, payload)
        except RemoteStoreError as e:
            self.telemetry.log_error("Update failed", e, id=restaurant.id)
            self.notifier.notify("Error", "Failed to update restaurant.")
            return False
        self.notifier.notify("Success", "Restaurant updated!")
        return True
