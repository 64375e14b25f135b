import logging
import queue
from functools import partial

import requests
import socketio
from requests.adapters import HTTPAdapter

from . import config
from .protocol import CONNECT, CONNECT_ERROR, DISCONNECT, LIFECYCLE_EVENTS


class HandlerRegistrationError(Exception):
    """Raised when an inbound handler is registered twice or after open()."""


class ConnectionManager:
    """Owns the single Socket.IO channel to the board server.

    Inbound events arrive on the Socket.IO background thread and are only
    queued there. ``pump()`` runs the registered handlers serially, in arrival
    order, on whichever thread drives the UI loop.
    """

    def __init__(self, server_url=None, sio=None, transports=None):
        self.server_url = server_url or config.SERVER_URL
        self.transports = transports or list(config.SOCKET_TRANSPORTS)
        self.handlers = {}
        self.inbox = queue.Queue()
        self.opened = False
        self.closed = False
        self.session = None

        if sio is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(pool_connections=1, pool_maxsize=2)
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)
            self.session.headers.update({"User-Agent": config.USER_AGENT})

            # No automatic reconnection: a lost channel stays lost
            sio = socketio.Client(
                http_session=self.session, reconnection=False, logger=False
            )
        self.sio = sio

    @property
    def connected(self):
        return self.opened and not self.closed and bool(self.sio.connected)

    def on(self, event, handler):
        if self.opened:
            raise HandlerRegistrationError(
                f"Handler for '{event}' registered after the channel was opened"
            )
        if event in self.handlers:
            raise HandlerRegistrationError(f"Handler for '{event}' already registered")
        self.handlers[event] = handler

    def open(self):
        if self.opened:
            logging.warning("Connection already opened, ignoring second open()")
            return self.connected

        self.opened = True

        for event in LIFECYCLE_EVENTS:
            self.sio.on(event, partial(self._on_lifecycle, event))
        for event in self.handlers:
            if event not in LIFECYCLE_EVENTS:
                self.sio.on(event, partial(self._enqueue, event))

        try:
            logging.info(f"Connecting to {self.server_url}")
            self.sio.connect(self.server_url, transports=self.transports)
            return True
        except socketio.exceptions.ConnectionError as e:
            logging.error(f"Failed to connect to {self.server_url}: {e}")
            return False

    def _on_lifecycle(self, event, *args):
        if event == CONNECT:
            logging.info("Connected to board server")
        elif event == DISCONNECT:
            logging.info("Disconnected from board server")
        elif event == CONNECT_ERROR:
            logging.error(f"Connection error: {args[0] if args else 'unknown'}")

        if event in self.handlers:
            self._enqueue(event, *args)

    def _enqueue(self, event, *args):
        self.inbox.put((event, args))

    def pump(self):
        """Run queued inbound handlers. Returns the number of events handled."""
        handled = 0
        while True:
            try:
                event, args = self.inbox.get_nowait()
            except queue.Empty:
                break

            handler = self.handlers.get(event)
            if handler is not None:
                handler(*args)
            handled += 1
        return handled

    def send(self, event, payload=None):
        if not self.connected:
            logging.warning(f"Not connected, dropping '{event}'")
            return False

        try:
            if payload is None:
                self.sio.emit(event)
            else:
                self.sio.emit(event, payload)
        except socketio.exceptions.BadNamespaceError as e:
            logging.warning(f"Send error on '{event}': {e}")
            return False

        logging.debug(f"Sent '{event}' {payload if payload is not None else ''}")
        return True

    def close(self):
        if self.closed:
            return
        self.closed = True

        if self.opened:
            self.sio.disconnect()
        if self.session is not None:
            self.session.close()
        logging.info("Connection closed")
