import logging

import pytest

from magic_together.connection import ConnectionManager, HandlerRegistrationError
from conftest import FakeSocketClient


def test_open_connects_once_over_websocket(connection, fake_sio):
    assert connection.open()
    assert connection.connected
    assert fake_sio.connect_calls == [("https://board.test", ["websocket"])]

    assert connection.open()
    assert len(fake_sio.connect_calls) == 1


def test_handlers_must_be_registered_before_open(connection):
    connection.on("cards", lambda cards: None)
    connection.open()

    with pytest.raises(HandlerRegistrationError):
        connection.on("decks", lambda decks: None)


def test_one_handler_per_event(connection):
    connection.on("cards", lambda cards: None)

    with pytest.raises(HandlerRegistrationError):
        connection.on("cards", lambda cards: None)


def test_inbound_events_run_in_arrival_order_on_pump(connection, fake_sio):
    seen = []
    connection.on("cards", lambda cards: seen.append(("cards", cards)))
    connection.on("deckCountChange", lambda count: seen.append(("count", count)))
    connection.open()

    fake_sio.push("cards", [])
    fake_sio.push("deckCountChange", 40)
    fake_sio.push("cards", [{"id": 1}])
    assert seen == []

    assert connection.pump() == 3
    assert seen == [("cards", []), ("count", 40), ("cards", [{"id": 1}])]
    assert connection.pump() == 0


def test_first_push_after_connect_is_not_lost(connection, fake_sio):
    seen = []
    connection.on("cards", seen.append)
    connection.open()

    fake_sio.push("cards", [{"id": 7}])
    connection.pump()

    assert seen == [[{"id": 7}]]


def test_send_is_fire_and_forget(connection, fake_sio):
    connection.open()

    assert connection.send("tap", {"index": 2})
    assert connection.send("clear")
    assert fake_sio.emitted == [("tap", {"index": 2}), ("clear", None)]


def test_send_before_open_is_dropped(connection, fake_sio, caplog):
    with caplog.at_level(logging.WARNING):
        assert not connection.send("clear")

    assert fake_sio.emitted == []
    assert "dropping 'clear'" in caplog.text


def test_connect_failure_is_logged_and_not_retried(caplog):
    fake = FakeSocketClient(refuse=True)
    connection = ConnectionManager("https://board.test", sio=fake)

    with caplog.at_level(logging.ERROR):
        assert not connection.open()

    assert not connection.connected
    assert len(fake.connect_calls) == 1
    assert "Failed to connect" in caplog.text
    assert "Connection error: refused" in caplog.text


def test_close_is_idempotent(connection, fake_sio):
    connection.open()

    connection.close()
    connection.close()

    assert fake_sio.disconnect_calls == 1
    assert not connection.connected
    assert not connection.send("clear")


def test_close_without_open(connection, fake_sio):
    connection.close()

    assert fake_sio.disconnect_calls == 0


def test_default_client_never_reconnects():
    connection = ConnectionManager("https://board.test")
    try:
        assert connection.sio.reconnection is False
        assert connection.session.headers["User-Agent"].startswith("MagicTogetherClient")
    finally:
        connection.close()
