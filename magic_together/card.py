import io
import logging
import queue
from concurrent.futures import ThreadPoolExecutor

import pygame
import requests

CARD_WIDTH = 146
CARD_HEIGHT = 204

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
HIGHLIGHT_COLOR = (255, 255, 0)


class ArtworkCache:
    """Card artwork by url, downloaded off the UI loop.

    ``get`` never waits: a url seen for the first time is queued for download
    and drawn with the fallback face until its bytes come back. Failed
    downloads are remembered and not retried.
    """

    def __init__(self, session=None, executor=None):
        self.session = session or requests.Session()
        self.executor = executor or ThreadPoolExecutor(max_workers=4)
        self.images = {}
        self.pending = set()
        self.downloaded = queue.Queue()

    def get(self, url):
        if not isinstance(url, str) or not url:
            return None

        self.collect()
        if url in self.images:
            return self.images[url]

        if url not in self.pending:
            self.pending.add(url)
            self.executor.submit(self._download, url)
        return None

    def _download(self, url):
        try:
            response = self.session.get(url, timeout=(3, 5))
            response.raise_for_status()
            self.downloaded.put((url, response.content))
        except requests.RequestException as e:
            logging.warning(f"Artwork unavailable for {url}: {e}")
            self.downloaded.put((url, None))

    def collect(self):
        """Decode finished downloads on the calling (UI) thread."""
        while True:
            try:
                url, content = self.downloaded.get_nowait()
            except queue.Empty:
                break

            self.pending.discard(url)
            image = None
            if content is not None:
                try:
                    image = pygame.image.load(io.BytesIO(content))
                    image = pygame.transform.smoothscale(image, (CARD_WIDTH, CARD_HEIGHT))
                except pygame.error as e:
                    logging.warning(f"Artwork for {url} could not be decoded: {e}")
            self.images[url] = image

    def close(self):
        self.executor.shutdown(wait=False)
        self.session.close()


class TabletopCardSprite:
    def __init__(self, card, artwork=None, font=None):
        self.card = card
        self.artwork = artwork
        self.font = font
        self.rect = pygame.Rect(card.x, card.y, CARD_WIDTH, CARD_HEIGHT)

    def display(self, screen, left=None, top=None, dragging=False):
        left = self.card.x if left is None else left
        top = self.card.y if top is None else top

        if self.artwork is not None:
            surface = self.artwork
        else:
            # Fallback simple drawing
            surface = pygame.Surface((CARD_WIDTH, CARD_HEIGHT))
            surface.fill(WHITE)
            pygame.draw.rect(surface, BLACK, surface.get_rect(), 2)
            font = self.font or pygame.font.Font(None, 22)
            text = font.render(self.card.name or f"#{self.card.id}", True, BLACK)
            surface.blit(text, (6, 6))

        if self.card.tapped:
            surface = pygame.transform.rotate(surface, -90)

        self.rect = surface.get_rect(topleft=(left, top))
        screen.blit(surface, self.rect)

        if dragging:
            pygame.draw.rect(screen, HIGHLIGHT_COLOR, self.rect, 3)

        return self.rect
