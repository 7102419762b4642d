# session.py

import logging

from inkcore.engine import MarkdownRenderer, RenderResult
from inkcore.spans import Span, clamp_offset, line_range_at
from inkcore.tracker import ActiveLineTracker

logger = logging.getLogger(__name__)


class EditorSession:
    """Owns one document while it is being edited.

    The host feeds text and selection changes in; the session decides when a
    render is needed and hands the latest ``RenderResult`` to its listeners.
    The engine only ever reads the text.
    """

    def __init__(self, text="", renderer=None):
        self.renderer = renderer or MarkdownRenderer()
        self.tracker = ActiveLineTracker()
        self.listeners = []
        self.is_editing = False
        self.is_rendering = False
        self.render_count = 0

        self._text = text
        self.cursor = 0
        self.selection = None
        self.result = RenderResult("", Span(0, 0))
        self.render()

    # --- Document access ---
    def get_text(self):
        return self._text

    def get_cursor_offset(self):
        """The offset that decides the active line: selection start wins."""
        if self.selection is not None:
            return self.selection.start
        return self.cursor

    def set_text(self, text):
        """Replace the document from outside; refused while the user types."""
        if self.is_editing or text == self._text:
            return False
        self._text = text
        self.cursor = clamp_offset(self.cursor, text)
        self.selection = None
        self.render()
        return True

    # --- Change notifications from the host ---
    def on_text_changed(self, text, cursor=None):
        if cursor is None:
            cursor = self.cursor
        if text == self._text:
            # Nothing to re-scan; only the cursor may have moved.
            return self.on_selection_changed(cursor)
        self._text = text
        self.cursor = clamp_offset(cursor, text)
        self.selection = None
        return self.render()

    def on_selection_changed(self, cursor, selection=None):
        self.cursor = clamp_offset(cursor, self._text)
        if selection is not None and selection.length > 0:
            self.selection = Span(clamp_offset(selection.start, self._text),
                                  clamp_offset(selection.end, self._text))
        else:
            self.selection = None
        if self.tracker.update(self._text, self.get_cursor_offset()):
            return self.render()
        return None

    def begin_editing(self):
        self.is_editing = True

    def end_editing(self):
        self.is_editing = False
        self.render()

    # --- Rendering ---
    def render(self):
        if self.is_rendering:
            logger.debug("render requested while rendering; ignored")
            return None
        self.is_rendering = True
        try:
            offset = self.get_cursor_offset()
            self.result = self.renderer.render(self._text, offset)
            self.tracker.previous_line_range = line_range_at(self._text, offset)
            self.render_count += 1
            for listener in list(self.listeners):
                listener(self.result)
        finally:
            self.is_rendering = False
        return self.result

    # --- Clipboard ---
    def selected_text(self):
        if self.selection is None:
            return ""
        return self._text[self.selection.start:self.selection.end]

    def on_copy(self):
        """Raw markdown for the clipboard: the selection, or everything."""
        if self.selection is not None and self.selection.length > 0:
            return self.selected_text()
        return self._text
