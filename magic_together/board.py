import logging

from .protocol import BoardCard


class BoardStateStore:
    """Local mirror of the cards on the shared board.

    The server owns the board. Every ``cards`` push replaces the whole
    collection; the only local write is the position of a card that has just
    been dropped, and the next snapshot overwrites it either way.
    """

    def __init__(self):
        self.cards = []

    def __len__(self):
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)

    def replace_all(self, snapshot):
        cards = [
            card if isinstance(card, BoardCard) else BoardCard(card)
            for card in snapshot
        ]

        ids = [card.id for card in cards]
        if len(set(ids)) != len(ids):
            logging.warning(f"Snapshot contains duplicate card ids: {ids}")

        self.cards = cards
        logging.debug(f"Board replaced with {len(cards)} cards")

    def apply_local_move(self, card_id, x, y):
        card = self.find(card_id)
        if card is None:
            logging.warning(f"Card {card_id} not on board, local move skipped")
            return False

        card.x = x
        card.y = y
        return True

    def find(self, card_id):
        for card in self.cards:
            if card.id == card_id:
                return card
        return None

    def index_of(self, card_id):
        """Position of the card in the current snapshot, as the server counts it."""
        for index, card in enumerate(self.cards):
            if card.id == card_id:
                return index
        return None

    def card_at(self, x, y, width, height):
        """Top-most card whose rectangle contains (x, y)."""
        for card in reversed(self.cards):
            if card.x <= x < card.x + width and card.y <= y < card.y + height:
                return card
        return None
