import pytest

from inkcore.session import EditorSession
from inkcore.spans import Span
from inkcore.tracker import ActiveLineTracker


@pytest.fixture
def session():
    return EditorSession("# Title\n**bold**\nlast line")


def test_tracker_only_reports_line_changes():
    tracker = ActiveLineTracker()
    text = "one\ntwo"

    assert tracker.update(text, 0) is True
    assert tracker.update(text, 2) is False
    assert tracker.update(text, 5) is True
    assert tracker.update(text, 99) is False


def test_cursor_moves_within_a_line_do_not_render(session):
    session.on_selection_changed(9)
    count = session.render_count

    session.on_selection_changed(12)
    session.on_selection_changed(10)
    assert session.render_count == count

    session.on_selection_changed(20)
    assert session.render_count == count + 1
    assert session.result.active_line == Span(17, 26)


def test_text_change_always_renders(session):
    count = session.render_count
    session.on_text_changed("# Title\n**bold**\nlast line!", 26)
    assert session.render_count == count + 1
    assert session.get_text().endswith("!")


def test_same_text_only_moves_the_cursor(session):
    count = session.render_count
    session.on_text_changed(session.get_text(), 1)
    assert session.render_count == count
    assert session.cursor == 1


def test_selection_start_picks_the_active_line(session):
    session.on_selection_changed(20, Span(9, 20))
    assert session.get_cursor_offset() == 9
    assert session.result.active_line == Span(8, 17)


def test_copy_without_selection_returns_raw_document(session):
    assert session.on_copy() == "# Title\n**bold**\nlast line"


def test_copy_with_selection_returns_raw_slice(session):
    session.on_selection_changed(16, Span(8, 16))
    assert session.on_copy() == "**bold**"


def test_render_is_not_reentrant(session):
    seen = []

    def listener(result):
        seen.append(result)
        session.render()

    session.listeners.append(listener)
    session.render()
    assert len(seen) == 1
    assert session.is_rendering is False


def test_set_text_is_refused_while_editing(session):
    session.begin_editing()
    assert session.set_text("other") is False
    assert session.get_text().startswith("# Title")

    session.end_editing()
    assert session.set_text("other") is True
    assert session.get_text() == "other"


def test_set_text_clamps_the_cursor(session):
    session.on_selection_changed(20)
    session.set_text("short")
    assert session.cursor == 5
    assert session.result.active_line == Span(0, 5)


def test_end_editing_renders(session):
    session.begin_editing()
    count = session.render_count
    session.end_editing()
    assert session.render_count == count + 1
    assert session.is_editing is False
