from enum import Enum, auto
import logging

logger = logging.getLogger(__name__)


class HomeMode(Enum):
    VIEWING = auto()  # Default, tapping a row opens the restaurant
    EDITING = auto()  # Rows show an "Edit" button that opens the modal


class HomeAction(Enum):
    TOGGLE_EDIT = auto()
    SELECT = auto()
    EDIT_DETAILS = auto()
    DELETE = auto()
    CANCEL = auto()


MODAL_ACTIONS = (HomeAction.EDIT_DETAILS, HomeAction.DELETE, HomeAction.CANCEL)


class HomeScreenMachine:
    """
    Pure FSM Logic for the home screen.
    Mode (viewing/editing) and the modal (closed/open for one record) are
    orthogonal; the modal only remembers the id of the bound record.
    """

    def __init__(self, initial_mode=HomeMode.VIEWING, modal_record_id=None):
        self._mode = initial_mode
        self._modal_record_id: str | None = modal_record_id

    @property
    def mode(self) -> HomeMode:
        return self._mode

    @property
    def modal_record_id(self) -> str | None:
        return self._modal_record_id

    @property
    def is_modal_open(self) -> bool:
        return self._modal_record_id is not None

    def transition(self, action: HomeAction, record_id: str | None = None) -> bool:
        """
        The Transition Table.
        Returns False (state untouched) for transitions it does not allow.
        """
        previous = (self._mode.name, self._modal_record_id)

        match (self._mode, self.is_modal_open, action):
            case (HomeMode.VIEWING, _, HomeAction.TOGGLE_EDIT):
                self._mode = HomeMode.EDITING

            # Leaving edit mode also dismisses the modal
            case (HomeMode.EDITING, _, HomeAction.TOGGLE_EDIT):
                self._mode = HomeMode.VIEWING
                self._modal_record_id = None

            case (HomeMode.EDITING, _, HomeAction.SELECT) if record_id:
                self._modal_record_id = record_id

            # Every modal button closes the modal
            case (_, True, a) if a in MODAL_ACTIONS:
                self._modal_record_id = None

            case _:
                logger.error(
                    f"⛔ INVALID TRANSITION: {self._mode.name} "
                    f"(modal={self._modal_record_id}) + {action.name}"
                )
                return False

        logger.info(
            f"🔄 FSM: {previous} --[{action.name}]--> "
            f"{(self._mode.name, self._modal_record_id)}"
        )
        return True
