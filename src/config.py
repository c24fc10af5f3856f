import os
from enum import Enum
from typing import Final


class Screen(Enum):
    # Enum Member = ("Route Name", "Icon")
    HOME = ("Home", "🏠")
    RESTAURANT_LIST = ("RestaurantList", "🍽️")
    ADD_RESTAURANT = ("AddRestaurant", "➕")
    EDIT_RESTAURANT = ("EditRestaurant", "✏️")

    def __init__(self, route: str, icon: str):
        self.route = route
        self.icon = icon

    @classmethod
    def from_route(cls, route: str) -> "Screen":
        """Returns the screen for a route name, falling back to HOME."""
        for screen in cls:
            if screen.route == route:
                return screen
        return cls.HOME

    @classmethod
    def all_routes(cls) -> list[str]:
        return [s.route for s in cls]


class AppConfig:
    # --- Infrastructure Switch ---
    # "memory" keeps the collection in-process, "firestore" talks to Firestore.
    BACKEND: str = os.getenv("RESTAURANTS_BACKEND", "memory")
    GOOGLE_CLOUD_PROJECT: str | None = os.getenv("GOOGLE_CLOUD_PROJECT")

    # --- Local Cache ---
    LOCAL_DB_PATH: str = os.getenv("RESTAURANTS_DB_PATH", "data/preferences.db")
    SEED_FILE: str = os.getenv("RESTAURANTS_SEED_FILE", "data/seed_restaurants.json")

    # --- App Identity ---
    APP_TITLE = "My Restaurants"

    # --- Remote Collection ---
    COLLECTION: Final[str] = "restaurants"
    SHOW_REVIEWS_KEY_PREFIX: Final[str] = "restaurant-showReviews-"

    # --- Live List ---
    REFRESH_INTERVAL_SECONDS: Final[float] = 2.0
    NOTES_PREVIEW_CHARS: Final[int] = 120

    # --- User Notifications ---
    DELETE_SUCCESS: Final[tuple[str, str]] = ("Success", "Restaurant deleted!")
    DELETE_FAILURE: Final[tuple[str, str]] = ("Error", "Failed to delete restaurant.")
    PREFERENCE_SAVE_FAILURE: Final[tuple[str, str]] = (
        "Error",
        "Could not save this preference on the device.",
    )

    @staticmethod
    def show_reviews_key(restaurant_id: str) -> str:
        """Local cache key holding the on-device showReviews override."""
        return f"{AppConfig.SHOW_REVIEWS_KEY_PREFIX}{restaurant_id}"

    @staticmethod
    def use_firestore() -> bool:
        return AppConfig.BACKEND.lower() == "firestore"
