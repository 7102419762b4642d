# spans.py

from typing import NamedTuple


class Span(NamedTuple):
    """Half-open character range ``[start, end)`` into the document."""
    start: int
    end: int

    @property
    def length(self):
        return self.end - self.start

    def is_valid_for(self, text):
        return 0 <= self.start <= self.end <= len(text)

    def overlaps(self, other):
        # Same rule as a non-empty intersection: touching ranges do not overlap.
        return intersection(self, other).length > 0

    def contains(self, offset):
        return self.start <= offset < self.end


def intersection(a, b):
    start = max(a.start, b.start)
    end = min(a.end, b.end)
    if end < start:
        return Span(start, start)
    return Span(start, end)


def clamp_offset(offset, text):
    return max(0, min(offset, len(text)))


def line_range_at(text, offset):
    """Return the full line containing ``offset``, terminator included.

    An offset at the very end of a document that ends with a newline sits on
    the empty last line, so the result is an empty span at ``len(text)``.
    """
    offset = clamp_offset(offset, text)
    start = text.rfind('\n', 0, offset) + 1
    newline = text.find('\n', offset)
    end = len(text) if newline == -1 else newline + 1
    return Span(start, end)
