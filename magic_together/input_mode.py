import logging
from enum import Enum


class InputMode(Enum):
    IDLE = 1
    SEARCHING = 2


class ModeRecord:
    """Every input-related flag in one place.

    The two panel flags are independent of each other and of the search
    mode; any combination is legal.
    """

    def __init__(self):
        self.input_mode = InputMode.IDLE
        self.deck_import_open = False
        self.deck_browse_open = False

    def __repr__(self):
        return (
            f"ModeRecord({self.input_mode.name}, "
            f"deck_import_open={self.deck_import_open}, "
            f"deck_browse_open={self.deck_browse_open})"
        )

    def to_dict(self):
        return {
            "input_mode": self.input_mode.name,
            "deck_import_open": self.deck_import_open,
            "deck_browse_open": self.deck_browse_open,
        }


class InputModeGate:
    """Sole writer of the mode record and the search text buffer.

    The keyboard dispatcher reads ``searching`` directly from here, so the
    answer always reflects the most recent write.
    """

    def __init__(self):
        self.mode = ModeRecord()
        self.search_input = ""

    @property
    def searching(self):
        return self.mode.input_mode is InputMode.SEARCHING

    @property
    def deck_import_open(self):
        return self.mode.deck_import_open

    @property
    def deck_browse_open(self):
        return self.mode.deck_browse_open

    def allows_hotkeys(self):
        return not self.searching

    def enter_search(self):
        self.mode.input_mode = InputMode.SEARCHING
        logging.debug("Search opened")

    def exit_search(self):
        self.mode.input_mode = InputMode.IDLE
        self.search_input = ""
        logging.debug("Search closed")

    def set_search_input(self, text):
        self.search_input = text

    def append_search_text(self, text):
        self.search_input += text

    def backspace_search(self):
        self.search_input = self.search_input[:-1]

    def toggle_deck_import(self):
        self.mode.deck_import_open = not self.mode.deck_import_open
        return self.mode.deck_import_open

    def close_deck_import(self):
        self.mode.deck_import_open = False

    def toggle_deck_browse(self):
        self.mode.deck_browse_open = not self.mode.deck_browse_open
        return self.mode.deck_browse_open

    def close_deck_browse(self):
        self.mode.deck_browse_open = False
