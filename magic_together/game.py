import logging
import queue
import threading

import pygame

from . import config
from .card import TabletopCardSprite
from .commands import HOTKEY_LEGEND

# Colors
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (255, 0, 0)
GREY = (128, 128, 128)
DARK_GREY = (45, 45, 45)
PANEL_COLOR = (30, 30, 30)
TABLE_COLOR = (24, 36, 48)
SELECTED_COLOR = (0, 255, 255)


def init_pygame():
    pygame.init()

    WIDTH, HEIGHT = config.WINDOW_WIDTH, config.WINDOW_HEIGHT
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("Magic Together")

    clock = pygame.time.Clock()
    FPS = config.FPS

    return screen, clock, WIDTH, HEIGHT, FPS


def get_deck_name(read=input):
    while True:
        deck_name = read("Deck name: ").strip()
        if deck_name:
            return deck_name
        else:
            print("Deck name cannot be empty.")


def get_deck_list(read=input):
    """Read a pasted deck list from the terminal, ending at an empty line."""
    print("Paste deck list, finish with an empty line:")
    lines = []
    while True:
        try:
            line = read("")
        except EOFError:
            break
        if not line.strip():
            break
        lines.append(line)
    return "\n".join(lines)


class DeckImportPrompt:
    """Terminal deck import that runs beside the pygame loop.

    The prompt thread only reads the terminal; its answer is handed back
    through a queue and submitted from ``poll()`` on the loop thread.
    """

    def __init__(self, read=input):
        self.read = read
        self.results = queue.Queue()
        self.thread = None

    @property
    def waiting(self):
        return self.thread is not None and self.thread.is_alive()

    def start(self):
        if self.waiting:
            return False

        self.thread = threading.Thread(target=self._ask, daemon=True)
        self.thread.start()
        return True

    def _ask(self):
        print("\n" + "=" * 50)
        print("DECK IMPORT")
        print("=" * 50)
        try:
            deck_name = get_deck_name(self.read)
            deck_list = get_deck_list(self.read)
        except EOFError:
            print("\nDeck import cancelled.")
            self.results.put(None)
            return
        self.results.put((deck_name, deck_list))

    def poll(self, client):
        """Submit a finished answer, if any. Never blocks."""
        try:
            answer = self.results.get_nowait()
        except queue.Empty:
            if (
                client.gate.deck_import_open
                and not self.waiting
                and self.results.empty()
            ):
                self.start()
            return False

        if answer is None:
            client.gate.close_deck_import()
            return False

        client.decks.deck_name, client.decks.deck_list = answer
        if not client.gate.deck_import_open:
            logging.info("Deck import panel closed, keeping the text unsent")
            return False

        if not client.commands.submit_deck():
            print("Deck import failed: not connected to the server.")
            client.gate.close_deck_import()
            return False
        return True


def load_fonts():
    return {
        "large": pygame.font.Font(None, 36),
        "medium": pygame.font.Font(None, 24),
        "small": pygame.font.Font(None, 20),
    }


def draw_board(screen, client, WIDTH, HEIGHT, artwork, fonts, drag=None):
    """Draw the board. Returns (card_rects, deck_rects), top-most card first."""
    screen.fill(TABLE_COLOR)

    font_large = fonts["large"]
    font_medium = fonts["medium"]
    font_small = fonts["small"]

    card_rects = []
    for card in client.board:
        sprite = TabletopCardSprite(card, artwork.get(card.url), font_small)
        if drag is not None and drag["card_id"] == card.id:
            rect = sprite.display(screen, drag["x"], drag["y"], dragging=True)
        else:
            rect = sprite.display(screen)
        card_rects.append((rect, card))
    card_rects = card_rects[::-1]

    if not client.connection.connected:
        status = font_small.render("DISCONNECTED", True, RED)
        screen.blit(status, (WIDTH - status.get_width() - 10, 10))

    # Search bar
    if client.gate.searching:
        search_rect = pygame.Rect(WIDTH // 2 - 200, 20, 400, 40)
        pygame.draw.rect(screen, WHITE, search_rect)
        pygame.draw.rect(screen, BLACK, search_rect, 2)
        text = client.gate.search_input or "Search for card..."
        color = BLACK if client.gate.search_input else GREY
        search_text = font_medium.render(text, True, color)
        screen.blit(search_text, (search_rect.x + 10, search_rect.y + 12))

    # Saved decks
    deck_rects = []
    if client.gate.deck_browse_open:
        panel = pygame.Rect(WIDTH // 10, HEIGHT // 6, 8 * WIDTH // 10, 2 * HEIGHT // 3)
        pygame.draw.rect(screen, PANEL_COLOR, panel, border_radius=12)
        title = font_large.render("Saved Decks", True, WHITE)
        screen.blit(title, (panel.x + 20, panel.y + 15))

        y_pos = panel.y + 60
        for deck in client.decks.decks:
            row = pygame.Rect(panel.x + 20, y_pos, panel.width - 40, 50)
            pygame.draw.rect(screen, DARK_GREY, row, border_radius=8)
            created = deck.created_at
            when = created.strftime("%Y-%m-%d %H:%M") if created else deck.date
            label = font_medium.render(deck.deck_name, True, WHITE)
            detail = font_small.render(f"{when} - {deck.card_count} cards", True, GREY)
            screen.blit(label, (row.x + 10, row.y + 6))
            screen.blit(detail, (row.x + 10, row.y + 28))
            deck_rects.append((row, deck))
            y_pos += 60
            if y_pos > panel.bottom - 50:
                break

    if client.gate.deck_import_open:
        hint = font_small.render("Deck import: continue in the terminal", True, SELECTED_COLOR)
        screen.blit(hint, (WIDTH - hint.get_width() - 20, HEIGHT - 60))

    # Transient notice
    message = client.notices.current()
    if message:
        msg_text = font_medium.render(message, True, WHITE)
        msg_rect = msg_text.get_rect(center=(WIDTH // 2, HEIGHT - 60))
        pygame.draw.rect(screen, BLACK, msg_rect.inflate(20, 10))
        pygame.draw.rect(screen, WHITE, msg_rect.inflate(20, 10), 2)
        screen.blit(msg_text, msg_rect)

    legend = font_small.render(HOTKEY_LEGEND, True, GREY)
    screen.blit(legend, (10, HEIGHT - 20))

    if client.decks.deck_count > 0:
        count_text = font_small.render(f"Cards in deck: {client.decks.deck_count}", True, WHITE)
        screen.blit(count_text, (WIDTH // 2 - count_text.get_width() // 2, HEIGHT - 20))

    return card_rects, deck_rects

