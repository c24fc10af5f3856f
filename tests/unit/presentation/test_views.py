from unittest.mock import MagicMock, patch

import pytest

from src.restaurants.domain.models import Restaurant
from src.restaurants.presentation.viewmodel import HomeViewModel
from src.restaurants.presentation.views import components, detail_view, form_view, home_view


@pytest.fixture
def vm():
    model = MagicMock(spec=HomeViewModel)
    model.edit_button_label = "Edit"
    model.is_modal_open = False
    model.selected_restaurant = None
    model.restaurants = ()
    return model


class TestHomeViewInteractions:
    @pytest.fixture
    def mock_st(self):
        with patch("src.restaurants.presentation.views.home_view.st") as mock_st, patch(
            "src.restaurants.presentation.views.home_view.components"
        ), patch("src.restaurants.presentation.views.home_view._render_list") as render_list:
            mock_st.columns.side_effect = lambda spec, **kw: [MagicMock() for _ in spec]
            mock_st.button.return_value = False
            mock_st.render_list = render_list
            yield mock_st

    def test_edit_toggle_click(self, vm, mock_st):
        col_title, col_edit = MagicMock(), MagicMock()
        col_edit.button.return_value = True
        mock_st.columns.side_effect = None
        mock_st.columns.return_value = [col_title, col_edit]

        home_view.render(vm)

        col_edit.button.assert_called_once()
        assert col_edit.button.call_args.args[0] == "Edit"
        vm.toggle_edit.assert_called_once()
        mock_st.rerun.assert_called()

    def test_add_button_click(self, vm, mock_st):
        mock_st.button.return_value = True

        home_view.render(vm)

        vm.add_restaurant.assert_called_once()

    def test_list_is_rendered(self, vm, mock_st):
        home_view.render(vm)
        mock_st.render_list.assert_called_once_with(vm)

    def test_dialog_opens_for_selected_record(self, vm, mock_st):
        cafe = Restaurant(id="a", name="Cafe")
        vm.is_modal_open = True
        vm.selected_restaurant = cafe

        home_view.render(vm)

        decorate = mock_st.dialog.return_value
        decorate.assert_called_once_with(home_view._restaurant_dialog)
        decorate.return_value.assert_called_once_with(vm, cafe)

    def test_dismissing_dialog_cancels_modal(self, vm, mock_st):
        vm.is_modal_open = True
        vm.selected_restaurant = Restaurant(id="a", name="Cafe")

        home_view.render(vm)

        assert mock_st.dialog.call_args.args[0] == "Edit restaurant"
        on_dismiss = mock_st.dialog.call_args.kwargs["on_dismiss"]
        on_dismiss()
        vm.cancel_modal.assert_called_once()

    def test_add_button_closes_open_modal(self, vm, mock_st):
        vm.is_modal_open = True
        mock_st.button.return_value = True

        home_view.render(vm)

        vm.cancel_modal.assert_called_once()
        vm.add_restaurant.assert_called_once()

    def test_no_dialog_when_closed(self, vm, mock_st):
        home_view.render(vm)

        mock_st.dialog.assert_not_called()


class TestHelpers:
    def test_preview_notes_short(self):
        assert components.preview_notes("Great  coffee\nnice") == "Great coffee nice"

    def test_preview_notes_truncates(self):
        text = "word " * 100
        preview = components.preview_notes(text, limit=20)

        assert preview.endswith("…")
        assert len(preview) <= 21

    def test_parse_images(self):
        assert form_view.parse_images(" a.png \n\n b.png\n") == ["a.png", "b.png"]

    def test_detail_prefers_synchronized_copy(self, vm):
        stale = Restaurant(id="a", name="Cafe", show_reviews=True)
        fresh = Restaurant(id="a", name="Cafe", show_reviews=False)
        vm.restaurants = (fresh,)

        assert detail_view.latest(vm, stale) is fresh

    def test_detail_keeps_param_when_record_gone(self, vm):
        stale = Restaurant(id="a", name="Cafe")
        assert detail_view.latest(vm, stale) is stale


class TestShowReviewsToggle:
    def test_toggle_change_saves_override(self):
        vm = MagicMock()
        with patch("src.restaurants.presentation.views.detail_view.st") as mock_st:
            mock_st.session_state = {"show_reviews_a": False}
            detail_view._save_show_reviews(vm, "a", "show_reviews_a")

        vm.service.set_show_reviews.assert_called_once_with("a", False)
        mock_st.toast.assert_called_once()

    def test_toggle_save_failure_is_notified(self):
        from src.restaurants.domain.errors import LocalStoreError

        vm = MagicMock()
        vm.service.set_show_reviews.side_effect = LocalStoreError("locked")
        with patch("src.restaurants.presentation.views.detail_view.st") as mock_st:
            mock_st.session_state = {"show_reviews_a": True}
            detail_view._save_show_reviews(vm, "a", "show_reviews_a")

        vm.service.notifier.notify.assert_called_once_with(
            "Error", "Could not save this preference on the device."
        )
        mock_st.error.assert_not_called()
        mock_st.toast.assert_not_called()
