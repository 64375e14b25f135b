import pytest
import socketio

from magic_together.client import TabletopClient
from magic_together.connection import ConnectionManager
from magic_together.notices import NoticeBoard


class FakeSocketClient:
    """Stands in for socketio.Client; ``push`` plays the server side."""

    def __init__(self, refuse=False):
        self.refuse = refuse
        self.handlers = {}
        self.emitted = []
        self.connected = False
        self.connect_calls = []
        self.disconnect_calls = 0

    def on(self, event, handler=None):
        self.handlers[event] = handler

    def connect(self, url, transports=None):
        self.connect_calls.append((url, transports))
        if self.refuse:
            self.push("connect_error", "refused")
            raise socketio.exceptions.ConnectionError("Connection refused by the server")
        self.connected = True
        self.push("connect")

    def emit(self, event, data=None):
        self.emitted.append((event, data))

    def disconnect(self):
        self.disconnect_calls += 1
        if self.connected:
            self.connected = False
            self.push("disconnect")

    def push(self, event, *args):
        handler = self.handlers.get(event)
        if handler is not None:
            handler(*args)


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms / 1000


@pytest.fixture
def fake_sio():
    return FakeSocketClient()


@pytest.fixture
def connection(fake_sio):
    return ConnectionManager("https://board.test", sio=fake_sio)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client(connection, clock):
    """A started client with the channel open."""
    tabletop = TabletopClient(
        connection=connection, notices=NoticeBoard(duration_ms=5000, clock=clock)
    )
    assert tabletop.start()
    tabletop.poll()
    return tabletop


@pytest.fixture
def offline_client(clock):
    tabletop = TabletopClient(
        connection=ConnectionManager("https://board.test", sio=FakeSocketClient(refuse=True)),
        notices=NoticeBoard(duration_ms=5000, clock=clock),
    )
    assert not tabletop.start()
    tabletop.poll()
    return tabletop


def make_card(card_id, x=0, y=0, **overrides):
    card = {
        "id": card_id,
        "url": f"https://cards.test/{card_id}.jpg",
        "name": f"Card {card_id}",
        "x": x,
        "y": y,
        "locked": False,
        "tapped": False,
    }
    card.update(overrides)
    return card
