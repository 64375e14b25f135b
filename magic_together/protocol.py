import logging
from datetime import datetime

# Outbound events (client -> server)
NEW_CARD = "newCard"
CLEAR = "clear"
CARD_POSITION_CHANGE = "cardPositionChange"
TAP = "tap"
NEW_DECK = "newDeck"
SELECT_DECK = "selectDeck"
GET_DECKS = "getDecks"
PLAY_TOP_CARD = "playTopCardOfDeck"

# Inbound events (server -> client)
CONNECT = "connect"
DISCONNECT = "disconnect"
CONNECT_ERROR = "connect_error"
CARDS = "cards"
ERROR = "error"
DECKS = "decks"
DECK_COUNT_CHANGE = "deckCountChange"

LIFECYCLE_EVENTS = (CONNECT, DISCONNECT, CONNECT_ERROR)

CARD_FIELDS = ["id", "url", "name", "x", "y", "locked", "tapped"]
DECK_FIELDS = ["deckName", "cardCount", "deckListIndex", "date"]


class BoardCard:
    def __init__(self, card_data):
        self.id = card_data["id"]
        self.url = card_data.get("url", "")
        self.name = card_data.get("name", "")
        self.x = card_data.get("x", 0)
        self.y = card_data.get("y", 0)
        self.locked = bool(card_data.get("locked", False))
        self.tapped = bool(card_data.get("tapped", False))

    def __repr__(self):
        return f"BoardCard(id={self.id}, name={self.name!r}, x={self.x}, y={self.y})"

    def to_dict(self):
        return {
            "id": self.id,
            "url": self.url,
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "locked": self.locked,
            "tapped": self.tapped,
        }


class DeckInfo:
    def __init__(self, deck_data):
        self.deck_name = deck_data["deckName"]
        self.card_count = deck_data.get("cardCount", 0)
        self.deck_list_index = deck_data["deckListIndex"]
        self.date = deck_data.get("date", "")

    def __repr__(self):
        return f"DeckInfo({self.deck_name!r}, index={self.deck_list_index})"

    @property
    def created_at(self):
        """Parsed ``date`` or None when the server sent something unreadable."""
        if not isinstance(self.date, str) or not self.date:
            return None
        try:
            return datetime.fromisoformat(self.date.replace("Z", "+00:00"))
        except ValueError:
            logging.debug(f"Unparseable deck date: {self.date!r}")
            return None

    def to_dict(self):
        return {
            "deckName": self.deck_name,
            "cardCount": self.card_count,
            "deckListIndex": self.deck_list_index,
            "date": self.date,
        }


def validate_cards(data):
    """Check a ``cards`` snapshot before it replaces the board."""
    if not isinstance(data, list):
        return False

    for card in data:
        if not isinstance(card, dict) or "id" not in card:
            return False
        if not isinstance(card.get("x", 0), (int, float)):
            return False
        if not isinstance(card.get("y", 0), (int, float)):
            return False
        if not isinstance(card.get("url", ""), str):
            return False
        if not isinstance(card.get("name", ""), str):
            return False

    return True


def validate_decks(data):
    if not isinstance(data, list):
        return False

    for deck in data:
        if (
            not isinstance(deck, dict)
            or "deckName" not in deck
            or "deckListIndex" not in deck
        ):
            return False

    return True


def validate_deck_count(data):
    return isinstance(data, int) and not isinstance(data, bool) and data >= 0
