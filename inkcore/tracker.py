# tracker.py

from inkcore.spans import line_range_at


class ActiveLineTracker:
    """Remembers the last active line so moves within a line stay cheap."""

    def __init__(self):
        self.previous_line_range = None

    def update(self, text, cursor_offset):
        """Return True when the cursor landed on a different line."""
        current = line_range_at(text, cursor_offset)
        if current == self.previous_line_range:
            return False
        self.previous_line_range = current
        return True
