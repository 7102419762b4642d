# engine.py

import logging
from dataclasses import dataclass, field

from inkcore import matchers
from inkcore.decorations import resolve
from inkcore.matchers import MatchKind
from inkcore.spans import Span, line_range_at
from inkcore.styles import StyleMap, Theme

logger = logging.getLogger(__name__)

# Block constructs first, inline refinements next, cosmetic markers last.
PASS_ORDER = (
    ('headers', matchers.match_headers),
    ('code_blocks', matchers.match_code_blocks),
    ('inline_code', matchers.match_inline_code),
    ('bold', matchers.match_bold),
    ('italic', matchers.match_italic),
    ('links', matchers.match_links),
    ('blockquotes', matchers.match_blockquotes),
    ('lists', matchers.match_list_items),
    ('horizontal_rules', matchers.match_horizontal_rules),
)


@dataclass
class RenderResult:
    text: str
    active_line: Span
    runs: list = field(default_factory=list)
    code_block_spans: list = field(default_factory=list)
    horizontal_rule_spans: list = field(default_factory=list)

    def attributes_at(self, offset):
        for span, attrs in self.runs:
            if span.contains(offset):
                return attrs
        return {}

    def runs_in(self, window):
        """Runs clipped to ``window``, in order."""
        if window.length == 0:
            return
        for span, attrs in self.runs:
            if span.end <= window.start:
                continue
            if span.start >= window.end:
                break
            yield Span(max(span.start, window.start), min(span.end, window.end)), attrs


class MarkdownRenderer:
    def __init__(self, theme=None):
        self.theme = theme or Theme()

    def render(self, text, cursor_offset):
        """Scan, resolve and style ``text`` for a cursor at ``cursor_offset``.

        Pure: the same text and offset always produce an equal result.
        """
        if not text:
            return RenderResult(text, Span(0, 0))

        active_line = line_range_at(text, cursor_offset)
        style_map = StyleMap(text)
        style_map.set_attributes(Span(0, len(text)), self.theme.default_attributes())

        code_blocks, rules = [], []
        total = 0
        for name, matcher in PASS_ORDER:
            found = matcher(text)
            total += len(found)
            for match in found:
                if not match.is_valid_for(text):
                    logger.debug("skipping %s match %s outside text", name, tuple(match.span))
                    continue
                result = resolve(match, active_line, self.theme)
                for span, attrs in result.decorations:
                    if span.is_valid_for(text):
                        style_map.add_attributes(span, attrs)
                    else:
                        logger.debug("skipping %s decoration %s outside text", name, tuple(span))
                if match.kind is MatchKind.CODE_BLOCK:
                    code_blocks.extend(result.block_spans)
                elif match.kind is MatchKind.HORIZONTAL_RULE:
                    rules.extend(result.block_spans)

        logger.debug("rendered %d chars, %d matches, active line %s", len(text), total, tuple(active_line))
        return RenderResult(text, active_line, style_map.runs(), code_blocks, rules)
