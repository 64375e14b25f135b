import logging

import pygame

from . import config
from .board import BoardStateStore
from .card import ArtworkCache
from .commands import CommandDispatcher
from .connection import ConnectionManager
from .decks import DeckRegistryMirror
from .game import DeckImportPrompt, draw_board, init_pygame, load_fonts
from .input_mode import InputModeGate
from .notices import NoticeBoard
from .protocol import (
    CARDS,
    CONNECT,
    CONNECT_ERROR,
    DECK_COUNT_CHANGE,
    DECKS,
    DISCONNECT,
    ERROR,
    validate_cards,
    validate_deck_count,
    validate_decks,
)


class TabletopClient:
    def __init__(self, server_url=None, connection=None, notices=None):
        self.connection = connection or ConnectionManager(server_url)
        self.gate = InputModeGate()
        self.board = BoardStateStore()
        self.decks = DeckRegistryMirror(self.connection, self.gate)
        self.notices = notices or NoticeBoard()
        self.commands = CommandDispatcher(
            self.connection, self.board, self.decks, self.gate
        )

        # Must happen before open() so the first server push is not lost
        self.register_handlers()

    def register_handlers(self):
        self.connection.on(CONNECT, self.on_connect)
        self.connection.on(DISCONNECT, self.on_disconnect)
        self.connection.on(CONNECT_ERROR, self.on_connect_error)
        self.connection.on(CARDS, self.on_cards)
        self.connection.on(ERROR, self.on_error)
        self.connection.on(DECKS, self.on_decks)
        self.connection.on(DECK_COUNT_CHANGE, self.on_deck_count_change)

    def start(self):
        return self.connection.open()

    def poll(self):
        return self.connection.pump()

    def stop(self):
        self.connection.close()

    def on_connect(self):
        logging.debug("Board session ready")

    def on_disconnect(self, *args):
        logging.warning("Board frozen until the client is restarted")

    def on_connect_error(self, *args):
        logging.debug(f"connect_error payload: {args}")

    def on_cards(self, cards):
        if not validate_cards(cards):
            logging.warning(f"Ignoring malformed cards snapshot: {cards!r}")
            return
        self.board.replace_all(cards)

    def on_error(self, message):
        self.notices.show_message(str(message))

    def on_decks(self, decks):
        if not validate_decks(decks):
            logging.warning(f"Ignoring malformed deck listing: {decks!r}")
            return
        self.decks.set_list(decks)

    def on_deck_count_change(self, count):
        if not validate_deck_count(count):
            logging.warning(f"Ignoring malformed deck count: {count!r}")
            return
        self.decks.set_counter(count)

    def handle_keydown(self, event):
        """Route a pygame KEYDOWN to the search box or the hotkey table."""
        if self.gate.searching:
            if event.key == pygame.K_RETURN:
                self.commands.submit_search()
            elif event.key == pygame.K_ESCAPE:
                self.commands.cancel_search()
            elif event.key == pygame.K_BACKSPACE:
                self.gate.backspace_search()
            elif event.unicode and event.unicode.isprintable():
                self.gate.append_search_text(event.unicode)
            return False

        return self.commands.handle_key(event.unicode)


def main():
    config.configure_logging()

    client = TabletopClient()
    if not client.start():
        print("Failed to connect to server")

    screen, clock, WIDTH, HEIGHT, FPS = init_pygame()
    fonts = load_fonts()
    artwork = ArtworkCache()
    deck_import = DeckImportPrompt()

    drag = None
    last_click = {"card_id": None, "time": 0}
    card_rects, deck_rects = [], []

    running = True
    while running:
        client.poll()

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                client.handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if client.gate.deck_browse_open:
                    for rect, deck in deck_rects:
                        if rect.collidepoint(event.pos):
                            client.commands.select_deck(deck.deck_list_index)
                            break
                    continue

                for rect, card in card_rects:
                    if rect.collidepoint(event.pos):
                        now = pygame.time.get_ticks()
                        if (
                            last_click["card_id"] == card.id
                            and now - last_click["time"] <= config.DOUBLE_CLICK_MS
                        ):
                            client.commands.tap_card(card.id)
                            last_click = {"card_id": None, "time": 0}
                        else:
                            last_click = {"card_id": card.id, "time": now}
                            drag = {
                                "card_id": card.id,
                                "dx": event.pos[0] - rect.x,
                                "dy": event.pos[1] - rect.y,
                                "x": card.x,
                                "y": card.y,
                                "moved": False,
                            }
                        break

            elif event.type == pygame.MOUSEMOTION and drag is not None:
                drag["x"] = event.pos[0] - drag["dx"]
                drag["y"] = event.pos[1] - drag["dy"]
                drag["moved"] = True

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                if drag is not None and drag["moved"]:
                    client.commands.move_card(drag["card_id"], drag["x"], drag["y"])
                drag = None

        deck_import.poll(client)

        card_rects, deck_rects = draw_board(
            screen, client, WIDTH, HEIGHT, artwork, fonts, drag
        )
        pygame.display.flip()
        clock.tick(FPS)

    client.stop()
    artwork.close()
    pygame.quit()


if __name__ == "__main__":
    main()
