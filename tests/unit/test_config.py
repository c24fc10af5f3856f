from unittest.mock import patch

from src.config import AppConfig, Screen


class TestScreen:
    def test_navigation_targets(self):
        """The routes other screens are registered under."""
        routes = Screen.all_routes()

        assert "RestaurantList" in routes
        assert "AddRestaurant" in routes
        assert "EditRestaurant" in routes

    def test_each_screen_has_route_and_icon(self):
        for screen in Screen:
            assert isinstance(screen.route, str) and screen.route
            assert isinstance(screen.icon, str) and screen.icon

    def test_from_route(self):
        assert Screen.from_route("EditRestaurant") is Screen.EDIT_RESTAURANT

    def test_from_route_falls_back_to_home(self):
        assert Screen.from_route("Nowhere") is Screen.HOME


class TestAppConfig:
    def test_show_reviews_key(self):
        assert AppConfig.show_reviews_key("a") == "restaurant-showReviews-a"

    def test_collection_name(self):
        assert AppConfig.COLLECTION == "restaurants"

    def test_refresh_interval_is_positive(self):
        assert AppConfig.REFRESH_INTERVAL_SECONDS > 0

    def test_delete_notifications(self):
        assert AppConfig.DELETE_SUCCESS == ("Success", "Restaurant deleted!")
        assert AppConfig.DELETE_FAILURE == ("Error", "Failed to delete restaurant.")

    def test_use_firestore_switch(self):
        with patch.object(AppConfig, "BACKEND", "Firestore"):
            assert AppConfig.use_firestore() is True
        with patch.object(AppConfig, "BACKEND", "memory"):
            assert AppConfig.use_firestore() is False
