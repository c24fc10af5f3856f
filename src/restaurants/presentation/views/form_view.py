import streamlit as st

from src.config import Screen
from src.restaurants.domain.models import Restaurant
from src.restaurants.presentation.viewmodel import HomeViewModel


def parse_images(raw: str) -> list[str]:
    """One image URL per line; blank lines dropped."""
    return [line.strip() for line in raw.splitlines() if line.strip()]


def render(vm: HomeViewModel, restaurant: Restaurant | None = None) -> None:
    """Add form when `restaurant` is None, edit form otherwise."""
    is_edit = restaurant is not None
    st.title("Edit Restaurant" if is_edit else "Add Restaurant")

    with st.form("restaurant_form"):
        name = st.text_input("Name", value=restaurant.name if is_edit else "")
        notes = st.text_area("Notes", value=restaurant.notes if is_edit else "")
        images = st.text_area(
            "Image URLs (one per line)",
            value="\n".join(restaurant.images) if is_edit else "",
        )
        submitted = st.form_submit_button("Save", type="primary")

    if st.button("Cancel", key="form_cancel"):
        vm.navigator.navigate(Screen.HOME)
        st.rerun()

    if not submitted:
        return

    if not name.strip():
        st.error("Name is required.")
        return

    if is_edit:
        updated = restaurant.model_copy(
            update={"name": name.strip(), "notes": notes, "images": parse_images(images)}
        )
        ok = vm.service.update_restaurant(updated)
    else:
        ok = vm.service.add_restaurant(name, notes, parse_images(images)) is not None

    if ok:
        vm.navigator.navigate(Screen.HOME)
        st.rerun()
