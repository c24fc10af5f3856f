import streamlit as st

from src.config import AppConfig, Screen
from src.restaurants.domain.errors import LocalStoreError
from src.restaurants.domain.models import Restaurant
from src.restaurants.presentation.viewmodel import HomeViewModel


def latest(vm: HomeViewModel, restaurant: Restaurant) -> Restaurant:
    """The synchronized copy of a record when it is still in the list."""
    for item in vm.restaurants:
        if item.id == restaurant.id:
            return item
    return restaurant


def render(vm: HomeViewModel, restaurant: Restaurant | None) -> None:
    if st.button("‹ Back", key="detail_back"):
        vm.navigator.navigate(Screen.HOME)
        st.rerun()

    if restaurant is None:
        st.warning("Restaurant not found.")
        return

    restaurant = latest(vm, restaurant)
    st.title(restaurant.name or "Untitled")

    if restaurant.images:
        st.image(restaurant.images, width=160)

    st.write(restaurant.notes or "_No notes._")

    key = f"show_reviews_{restaurant.id}"
    st.toggle(
        "Show reviews",
        value=restaurant.show_reviews,
        key=key,
        on_change=_save_show_reviews,
        args=(vm, restaurant.id, key),
    )


def _save_show_reviews(vm: HomeViewModel, restaurant_id: str, widget_key: str) -> None:
    value = bool(st.session_state[widget_key])
    try:
        vm.service.set_show_reviews(restaurant_id, value)
    except LocalStoreError as e:
        vm.telemetry.log_error("Saving showReviews failed", e, id=restaurant_id)
        vm.service.notifier.notify(*AppConfig.PREFERENCE_SAVE_FAILURE)
    else:
        st.toast("Saved on this device. The list picks it up on the next sync.")
