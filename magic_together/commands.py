import logging

from .protocol import CARD_POSITION_CHANGE, CLEAR, NEW_CARD, PLAY_TOP_CARD, TAP

HOTKEYS = {
    "e": "open_search",
    "r": "clear_board",
    "d": "toggle_deck_import",
    "s": "browse_decks",
    "q": "draw_top_card",
}

HOTKEY_LEGEND = (
    "Hotkeys: [E] Add Card | [R] Reset | [D] Deck Import | [S] Saved Decks | [Q] Draw Card"
)


class CommandDispatcher:
    """Turns user intents into outbound messages.

    Nothing is awaited: every message is fire-and-forget and the board only
    changes when the next snapshot arrives, except for the optimistic
    position patch in ``move_card``.
    """

    def __init__(self, connection, board, decks, gate):
        self.connection = connection
        self.board = board
        self.decks = decks
        self.gate = gate

    def _require_connection(self, intent):
        if self.connection.connected:
            return True
        logging.warning(f"Not connected, dropping command '{intent}'")
        return False

    def handle_key(self, key):
        """Dispatch a single typed character. Returns True if a command ran."""
        if not self.gate.allows_hotkeys():
            # The keypress is search text
            return False

        action = HOTKEYS.get(key)
        if action is None:
            return False
        return getattr(self, action)() is not False

    def generate_random_card(self):
        if not self._require_connection("newCard"):
            return False
        return self.connection.send(NEW_CARD)

    def open_search(self):
        if not self.gate.searching:
            self.gate.enter_search()
            return True

        # Already searching: the user wants a random card instead
        if not self.generate_random_card():
            return False
        self.gate.exit_search()
        return True

    def submit_search(self, text=None):
        if text is None:
            text = self.gate.search_input
        if not text.strip():
            return False
        if not self._require_connection("newCard"):
            return False

        logging.info(f"Searching for: {text}")
        self.connection.send(NEW_CARD, {"name": text})
        self.gate.exit_search()
        return True

    def cancel_search(self):
        self.gate.exit_search()

    def clear_board(self):
        if not self._require_connection("clear"):
            return False
        return self.connection.send(CLEAR)

    def _board_index(self, card_id):
        index = self.board.index_of(card_id)
        if index is None:
            logging.warning(f"Card {card_id} not on board, command dropped")
        return index

    def move_card(self, card_id, x, y):
        if not self._require_connection("cardPositionChange"):
            return False
        index = self._board_index(card_id)
        if index is None:
            return False

        logging.debug(f"Card {card_id} (slot {index}) position changed to ({x}, {y})")
        self.board.apply_local_move(card_id, x, y)
        # The server addresses cards by their slot in the last snapshot
        return self.connection.send(
            CARD_POSITION_CHANGE, {"index": index, "x": x, "y": y}
        )

    def tap_card(self, card_id):
        if not self._require_connection("tap"):
            return False
        index = self._board_index(card_id)
        if index is None:
            return False
        return self.connection.send(TAP, {"index": index})

    def browse_decks(self):
        if not self._require_connection("getDecks"):
            return False
        self.decks.request_refresh()
        self.gate.toggle_deck_browse()
        return True

    def toggle_deck_import(self):
        self.gate.toggle_deck_import()
        return True

    def submit_deck(self, deck_name=None, deck_list=None):
        if not self._require_connection("newDeck"):
            return False
        return self.decks.submit_deck(deck_name, deck_list)

    def select_deck(self, deck_list_index):
        if not self._require_connection("selectDeck"):
            return False
        return self.decks.select_deck(deck_list_index)

    def draw_top_card(self):
        if not self._require_connection("playTopCardOfDeck"):
            return False
        return self.connection.send(PLAY_TOP_CARD)
