import time
import logging

from . import config


class NoticeBoard:
    """One transient notice at a time; a new message replaces the old one."""

    def __init__(self, duration_ms=None, clock=time.monotonic):
        self.duration_ms = config.NOTICE_DURATION_MS if duration_ms is None else duration_ms
        self.clock = clock
        self.message = ""
        self.shown_at = None

    def show_message(self, message):
        logging.info(f"Notice: {message}")
        self.message = message
        self.shown_at = self.clock()

    def dismiss(self):
        self.message = ""
        self.shown_at = None

    def current(self):
        if not self.message:
            return None

        elapsed_ms = (self.clock() - self.shown_at) * 1000
        if elapsed_ms >= self.duration_ms:
            self.dismiss()
            return None
        return self.message
