"""
Magic Together Client
=====================

Client for a shared multiplayer tabletop board. The server owns every card
and pushes full snapshots; this package mirrors them locally and sends the
player's actions back.

Available modules:
- connection: Socket.IO channel, inbound event queue, fire-and-forget send
- board: Local mirror of the cards on the board
- decks: Saved deck listing, remaining-card counter, deck import
- input_mode: Search mode and panel flags that gate the hotkeys
- commands: User intents and hotkeys translated to server messages
- notices: Transient server error notice
- client: Wiring of the above and the pygame entry point
"""

from .board import BoardStateStore
from .commands import CommandDispatcher, HOTKEYS
from .connection import ConnectionManager, HandlerRegistrationError
from .decks import DeckRegistryMirror
from .input_mode import InputMode, InputModeGate, ModeRecord
from .notices import NoticeBoard
from .protocol import BoardCard, DeckInfo

__all__ = [
    'BoardStateStore',
    'CommandDispatcher',
    'HOTKEYS',
    'ConnectionManager',
    'HandlerRegistrationError',
    'DeckRegistryMirror',
    'InputMode',
    'InputModeGate',
    'ModeRecord',
    'NoticeBoard',
    'BoardCard',
    'DeckInfo',
]
