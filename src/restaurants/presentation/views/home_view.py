import streamlit as st

from src.config import AppConfig
from src.restaurants.domain.models import Restaurant
from src.restaurants.presentation.viewmodel import HomeViewModel
from src.restaurants.presentation.views import components


def render(vm: HomeViewModel) -> None:
    """
    Home screen: header with the Edit/Done toggle, the live list, the add
    button and, while open, the edit/delete dialog.
    """
    components.apply_styles()

    col_title, col_edit = st.columns([3, 1], vertical_alignment="center")
    col_title.title(AppConfig.APP_TITLE)
    if col_edit.button(vm.edit_button_label, key="toggle_edit", type="primary"):
        vm.toggle_edit()
        st.rerun()

    _render_list(vm)

    if st.button("＋", key="add_restaurant", type="primary"):
        if vm.is_modal_open:
            vm.cancel_modal()
        vm.add_restaurant()
        st.rerun()

    if vm.is_modal_open and vm.selected_restaurant is not None:
        # Closing with X, Escape or a click outside counts as Cancel
        dialog = st.dialog("Edit restaurant", on_dismiss=vm.cancel_modal)
        dialog(_restaurant_dialog)(vm, vm.selected_restaurant)


@st.fragment(run_every=AppConfig.REFRESH_INTERVAL_SECONDS)
def _render_list(vm: HomeViewModel) -> None:
    # Re-run on a timer so snapshots pushed from the watch thread show up
    restaurants = vm.restaurants
    if not restaurants:
        st.caption("No restaurants yet. Tap ＋ to add one.")
        return

    for restaurant in restaurants:
        _render_row(vm, restaurant)


def _render_row(vm: HomeViewModel, restaurant: Restaurant) -> None:
    with st.container(border=True):
        col_img, col_text, col_action = st.columns([1, 4, 1], vertical_alignment="center")
        with col_img:
            components.render_thumbnail(restaurant)
        with col_text:
            components.render_restaurant_text(restaurant)
        with col_action:
            if vm.is_editing:
                if st.button("Edit", key=f"edit_{restaurant.id}"):
                    vm.select_for_edit(restaurant)
                    st.rerun()
            elif st.button("›", key=f"open_{restaurant.id}"):
                vm.open_restaurant(restaurant)
                st.rerun()


def _restaurant_dialog(vm: HomeViewModel, restaurant: Restaurant) -> None:
    st.subheader(f"Edit {restaurant.name}")

    if st.button("Edit Details", key="modal_edit", type="primary", use_container_width=True):
        vm.edit_selected()
        st.rerun()

    if st.button("Delete", key="modal_delete", use_container_width=True):
        vm.delete_selected()
        st.rerun()

    if st.button("Cancel", key="modal_cancel", type="tertiary", use_container_width=True):
        vm.cancel_modal()
        st.rerun()
