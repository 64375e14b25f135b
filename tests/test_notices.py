from magic_together.notices import NoticeBoard
from conftest import FakeClock


def test_notice_auto_dismisses():
    clock = FakeClock()
    notices = NoticeBoard(duration_ms=5000, clock=clock)

    notices.show_message("Deck not found")
    clock.advance(4999)
    assert notices.current() == "Deck not found"

    clock.advance(1)
    assert notices.current() is None


def test_new_notice_replaces_current_and_restarts_timer():
    clock = FakeClock()
    notices = NoticeBoard(duration_ms=5000, clock=clock)

    notices.show_message("Deck not found")
    clock.advance(3000)
    notices.show_message("Server busy")
    clock.advance(3000)

    assert notices.current() == "Server busy"


def test_dismiss_early():
    notices = NoticeBoard(duration_ms=5000, clock=FakeClock())
    notices.show_message("Server busy")

    notices.dismiss()

    assert notices.current() is None


def test_nothing_shown_initially():
    assert NoticeBoard(clock=FakeClock()).current() is None
