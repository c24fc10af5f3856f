import weakref

from src.config import Screen
from src.fsm import HomeAction, HomeMode, HomeScreenMachine
from src.restaurants.application.service import RestaurantService
from src.restaurants.application.synchronizer import RestaurantSynchronizer
from src.restaurants.domain.models import Restaurant
from src.restaurants.domain.ports import INavigator
from src.shared.telemetry import Telemetry


class HomeViewModel:
    """
    Controller for one instance of the home screen.
    Owns the live list subscription for as long as the screen is open.
    """

    def __init__(
        self,
        synchronizer: RestaurantSynchronizer,
        service: RestaurantService,
        navigator: INavigator,
    ) -> None:
        self.synchronizer = synchronizer
        self.service = service
        self.navigator = navigator
        self.fsm = HomeScreenMachine()
        self.telemetry = Telemetry("HomeViewModel")
        self._selected: Restaurant | None = None
        # Streamlit drops the view-model with its session without calling close()
        weakref.finalize(self, synchronizer.stop)

    # --- Lifecycle ---
    def open(self) -> None:
        self.synchronizer.start()

    def close(self) -> None:
        self.synchronizer.stop()

    # --- Properties ---
    @property
    def restaurants(self) -> tuple[Restaurant, ...]:
        return self.synchronizer.restaurants

    @property
    def version(self) -> int:
        return self.synchronizer.version

    @property
    def is_editing(self) -> bool:
        return self.fsm.mode == HomeMode.EDITING

    @property
    def edit_button_label(self) -> str:
        return "Done" if self.is_editing else "Edit"

    @property
    def is_modal_open(self) -> bool:
        return self.fsm.is_modal_open

    @property
    def selected_restaurant(self) -> Restaurant | None:
        return self._selected if self.fsm.is_modal_open else None

    # --- Actions (Traced) ---
    def toggle_edit(self) -> None:
        Telemetry.start_trace()
        self.fsm.transition(HomeAction.TOGGLE_EDIT)
        if not self.fsm.is_modal_open:
            self._selected = None

    def select_for_edit(self, restaurant: Restaurant) -> None:
        Telemetry.start_trace()
        if self.fsm.transition(HomeAction.SELECT, record_id=restaurant.id):
            self._selected = restaurant

    def open_restaurant(self, restaurant: Restaurant) -> None:
        Telemetry.start_trace()
        self.navigator.navigate(Screen.RESTAURANT_LIST, {"restaurant": restaurant})

    def add_restaurant(self) -> None:
        Telemetry.start_trace()
        self.navigator.navigate(Screen.ADD_RESTAURANT)

    def edit_selected(self) -> None:
        Telemetry.start_trace()
        restaurant = self._selected
        if not self.fsm.transition(HomeAction.EDIT_DETAILS) or restaurant is None:
            return
        self._selected = None
        self.navigator.navigate(Screen.EDIT_RESTAURANT, {"restaurant": restaurant})

    def delete_selected(self) -> bool:
        Telemetry.start_trace()
        restaurant = self._selected
        if not self.fsm.transition(HomeAction.DELETE) or restaurant is None:
            return False
        self._selected = None
        self.telemetry.log_info("Action: Delete", id=restaurant.id)
        return self.service.delete_restaurant(restaurant.id)

    def cancel_modal(self) -> None:
        self.fsm.transition(HomeAction.CANCEL)
        self._selected = None
