# matchers.py

import re
from dataclasses import dataclass, field
from enum import Enum

from inkcore.spans import Span


class MatchKind(Enum):
    HEADER = 'header'
    CODE_BLOCK = 'code_block'
    INLINE_CODE = 'inline_code'
    BOLD = 'bold'
    ITALIC = 'italic'
    LINK = 'link'
    BLOCKQUOTE = 'blockquote'
    BULLET_ITEM = 'bullet_item'
    NUMBERED_ITEM = 'numbered_item'
    HORIZONTAL_RULE = 'horizontal_rule'


def ensure_exhaustive(table, what):
    missing = [kind.name for kind in MatchKind if kind not in table]
    if missing:
        raise TypeError(f"{what} has no entry for: {', '.join(missing)}")
    return table


@dataclass(frozen=True)
class Match:
    kind: MatchKind
    span: Span
    captures: dict = field(default_factory=dict)
    level: int = 0

    def __getitem__(self, name):
        return self.captures[name]

    def is_valid_for(self, text):
        return self.span.is_valid_for(text) and all(c.is_valid_for(text) for c in self.captures.values())


# --- Patterns (line-anchored ones use re.M) ---
# Line-anchored content stops before a CRLF terminator.
_PATTERNS = ensure_exhaustive({
    MatchKind.HEADER: (re.compile(r'^(#{1,6}) (.+?)\r?$', re.M), ('marker', 'content')),
    MatchKind.CODE_BLOCK: (re.compile(r'(```)(\w*\r?\n)([\s\S]*?)(```)'),
                           ('open_fence', 'language_line', 'body', 'close_fence')),
    MatchKind.INLINE_CODE: (re.compile(r'(?<!`)`([^`\n]+)`(?!`)'), ('content',)),
    # Emphasis and links may run across lines.
    MatchKind.BOLD: (re.compile(r'\*\*([^*]+)\*\*'), ('content',)),
    MatchKind.ITALIC: (re.compile(r'(?<!\*)\*([^*]+)\*(?!\*)'), ('content',)),
    MatchKind.LINK: (re.compile(r'\[([^\]]+)\]\(([^)]+)\)'), ('text', 'url')),
    MatchKind.BLOCKQUOTE: (re.compile(r'^(>) (.+?)\r?$', re.M), ('marker', 'content')),
    MatchKind.BULLET_ITEM: (re.compile(r'^([ \t]*)([-*]) (.+?)\r?$', re.M), ('indent', 'marker', 'content')),
    MatchKind.NUMBERED_ITEM: (re.compile(r'^([ \t]*)(\d+\.) (.+?)\r?$', re.M), ('indent', 'marker', 'content')),
    MatchKind.HORIZONTAL_RULE: (re.compile(r'^(-{3,}|\*{3,}|_{3,})\r?$', re.M), ('rule',)),
}, 'pattern table')

_DELIMITED = {MatchKind.INLINE_CODE, MatchKind.BOLD, MatchKind.ITALIC}


def _build(kind, m):
    span = Span(*m.span())
    names = _PATTERNS[kind][1]
    captures = {name: Span(*m.span(i + 1)) for i, name in enumerate(names)}
    level = 0

    if kind is MatchKind.HEADER:
        level = captures['marker'].length
    elif kind is MatchKind.CODE_BLOCK:
        line = captures['language_line']
        captures['language'] = Span(line.start, line.start + len(m.group(2).rstrip('\r\n')))
    elif kind is MatchKind.LINK:
        text_span = captures['text']
        captures['open'] = Span(span.start, span.start + 1)
        captures['separator'] = Span(text_span.end, text_span.end + 2)
        captures['close'] = Span(span.end - 1, span.end)
    elif kind in _DELIMITED:
        content = captures['content']
        captures['open'] = Span(span.start, content.start)
        captures['close'] = Span(content.end, span.end)

    return Match(kind, span, captures, level)


def scan(kind, text, full_range=None):
    """All matches of one construct, ordered by start offset."""
    pattern = _PATTERNS[kind][0]
    if full_range is None:
        full_range = Span(0, len(text))
    return [_build(kind, m) for m in pattern.finditer(text, full_range.start, full_range.end)]


def match_headers(text, full_range=None):
    return scan(MatchKind.HEADER, text, full_range)


def match_code_blocks(text, full_range=None):
    return scan(MatchKind.CODE_BLOCK, text, full_range)


def match_inline_code(text, full_range=None):
    return scan(MatchKind.INLINE_CODE, text, full_range)


def match_bold(text, full_range=None):
    return scan(MatchKind.BOLD, text, full_range)


def match_italic(text, full_range=None):
    return scan(MatchKind.ITALIC, text, full_range)


def match_links(text, full_range=None):
    return scan(MatchKind.LINK, text, full_range)


def match_blockquotes(text, full_range=None):
    return scan(MatchKind.BLOCKQUOTE, text, full_range)


def match_list_items(text, full_range=None):
    items = scan(MatchKind.BULLET_ITEM, text, full_range) + scan(MatchKind.NUMBERED_ITEM, text, full_range)
    return sorted(items, key=lambda m: m.span.start)


def match_horizontal_rules(text, full_range=None):
    return scan(MatchKind.HORIZONTAL_RULE, text, full_range)
