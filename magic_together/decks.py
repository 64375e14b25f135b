import logging

from .protocol import GET_DECKS, NEW_DECK, SELECT_DECK, DeckInfo


class DeckRegistryMirror:
    """Server-driven deck listing, remaining-card counter and import buffers."""

    def __init__(self, connection, gate):
        self.connection = connection
        self.gate = gate
        self.decks = []
        self.deck_count = 0

        # Deck import panel input
        self.deck_name = ""
        self.deck_list = ""

    def request_refresh(self):
        return self.connection.send(GET_DECKS)

    def set_list(self, decks):
        self.decks = [
            deck if isinstance(deck, DeckInfo) else DeckInfo(deck) for deck in decks
        ]
        logging.debug(f"Deck listing: {[deck.to_dict() for deck in self.decks]}")

    def set_counter(self, count):
        self.deck_count = count

    def submit_deck(self, deck_name=None, deck_list=None):
        if deck_name is None:
            deck_name = self.deck_name
        if deck_list is None:
            deck_list = self.deck_list

        if not self.connection.send(
            NEW_DECK, {"deckName": deck_name, "deckList": deck_list}
        ):
            return False

        logging.info(f"Submitted deck '{deck_name}'")
        self.deck_name = ""
        self.deck_list = ""
        self.gate.close_deck_import()
        return True

    def select_deck(self, deck_list_index):
        if not self.connection.send(SELECT_DECK, {"index": deck_list_index}):
            return False

        # Closed right away, the server never acknowledges a selection
        self.gate.close_deck_browse()
        return True
