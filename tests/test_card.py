import requests

from magic_together.card import ArtworkCache


class StubSession:
    def __init__(self):
        self.requested = []
        self.closed = False

    def get(self, url, timeout=None):
        self.requested.append(url)
        raise requests.ConnectionError("artwork host unreachable")

    def close(self):
        self.closed = True


class HeldExecutor:
    """Keeps submitted downloads until ``run_all`` is called."""

    def __init__(self):
        self.jobs = []
        self.shut_down = False

    def submit(self, fn, *args):
        self.jobs.append((fn, args))

    def run_all(self):
        jobs, self.jobs = self.jobs, []
        for fn, args in jobs:
            fn(*args)

    def shutdown(self, wait=True):
        self.shut_down = True


def test_get_never_downloads_on_the_calling_thread():
    session = StubSession()
    executor = HeldExecutor()
    cache = ArtworkCache(session, executor)

    assert cache.get("https://cards.test/1.jpg") is None
    assert cache.get("https://cards.test/1.jpg") is None

    assert session.requested == []
    assert len(executor.jobs) == 1


def test_failed_artwork_is_remembered(caplog):
    session = StubSession()
    executor = HeldExecutor()
    cache = ArtworkCache(session, executor)

    cache.get("https://cards.test/1.jpg")
    executor.run_all()

    assert cache.get("https://cards.test/1.jpg") is None
    assert "https://cards.test/1.jpg" in cache.images
    assert executor.jobs == []
    assert session.requested == ["https://cards.test/1.jpg"]
    assert "Artwork unavailable" in caplog.text


def test_cards_without_string_url_are_not_fetched():
    session = StubSession()
    executor = HeldExecutor()
    cache = ArtworkCache(session, executor)

    assert cache.get("") is None
    assert cache.get(["https://cards.test/1.jpg"]) is None
    assert executor.jobs == []

    cache.close()
    assert session.closed
    assert executor.shut_down
