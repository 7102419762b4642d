# decorations.py

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

from inkcore.matchers import MatchKind, ensure_exhaustive
from inkcore.spans import Span
from inkcore.styles import (
    BACKGROUND, FONT, FOREGROUND, PARAGRAPH, UNDERLINE, Color, Font,
)

# Display substitute for a single marker character (e.g. a bullet dot).
GLYPH = 'glyph'

SECONDARY = Color('secondary-label')
TERTIARY = Color('tertiary-label')
TEXT = Color('text')
BLUE = Color('blue')
GRAY = Color('gray')
PINK = Color('pink')
PURPLE = Color('purple')
ORANGE = Color('orange')


class Mode(Enum):
    EDITING = 'editing'
    RENDERED = 'rendered'


class Decoration(NamedTuple):
    span: Span
    attrs: dict


@dataclass
class DecorationResult:
    mode: Mode
    decorations: list = field(default_factory=list)
    block_spans: list = field(default_factory=list)

    def add(self, span, attrs):
        self.decorations.append(Decoration(span, attrs))


def mode_for(match, active_line):
    return Mode.EDITING if match.span.overlaps(active_line) else Mode.RENDERED


# --- Per-construct resolvers ---

def _header(match, mode, theme, out):
    marker, content = match['marker'], match['content']
    heading = {FONT: Font(theme.header_size(match.level), 'bold')}
    if mode is Mode.EDITING:
        out.add(marker, {FOREGROUND: ORANGE.with_alpha(0.6), **heading})
        out.add(content, heading)
    else:
        # The space after the hashes goes with them.
        out.add(Span(marker.start, content.start), theme.hidden_attributes())
        out.add(content, heading)


def _code_block(match, mode, theme, out):
    out.block_spans.append(match.span)
    out.add(match.span, {FONT: theme.code_font(), PARAGRAPH: theme.code_paragraph()})
    if mode is Mode.EDITING:
        out.add(match['open_fence'], {FOREGROUND: SECONDARY})
        if match['language'].length > 0:
            out.add(match['language'], {FOREGROUND: PURPLE})
        out.add(match['close_fence'], {FOREGROUND: SECONDARY})
    else:
        first_line = Span(match['open_fence'].start, match['language_line'].end)
        out.add(first_line, theme.hidden_attributes())
        out.add(match['close_fence'], theme.hidden_attributes())
        out.add(match['body'], {FONT: theme.code_font(), FOREGROUND: TEXT})


def _inline_code(match, mode, theme, out):
    code = {FOREGROUND: PINK, BACKGROUND: GRAY.with_alpha(0.15)}
    if mode is Mode.EDITING:
        out.add(match.span, {FONT: Font(theme.inline_code_font_size, family='monospace'), **code})
    else:
        out.add(match['open'], theme.hidden_attributes())
        out.add(match['close'], theme.hidden_attributes())
        out.add(match['content'], {FONT: Font(theme.inline_code_font_size, 'medium', 'monospace'), **code})


def _emphasis(font):
    def resolve(match, mode, theme, out):
        styled = {FONT: font(theme)}
        if mode is Mode.EDITING:
            out.add(match.span, styled)
            out.add(match['open'], {FOREGROUND: TERTIARY})
            out.add(match['close'], {FOREGROUND: TERTIARY})
        else:
            out.add(match['open'], theme.hidden_attributes())
            out.add(match['close'], theme.hidden_attributes())
            out.add(match['content'], styled)
    return resolve


def _link(match, mode, theme, out):
    if mode is Mode.EDITING:
        out.add(match.span, {FOREGROUND: BLUE})
        out.add(match['open'], {FOREGROUND: TERTIARY})
        out.add(match['separator'], {FOREGROUND: TERTIARY})
        out.add(match['url'], {FOREGROUND: GRAY})
        out.add(match['close'], {FOREGROUND: TERTIARY})
    else:
        for name in ('open', 'separator', 'url', 'close'):
            out.add(match[name], theme.hidden_attributes())
        out.add(match['text'], {FOREGROUND: BLUE, UNDERLINE: True})


def _blockquote(match, mode, theme, out):
    content = {FOREGROUND: SECONDARY, PARAGRAPH: theme.quote_paragraph()}
    if mode is Mode.EDITING:
        out.add(match['marker'], {FOREGROUND: BLUE})
        out.add(match['content'], content)
    else:
        # The marker stays, drawn as a heavy bar.
        out.add(match['marker'], {FOREGROUND: BLUE, FONT: Font(theme.quote_marker_size, 'heavy'), GLYPH: '┃'})
        out.add(match['content'], {**content, BACKGROUND: BLUE.with_alpha(0.05)})


def _bullet_item(match, mode, theme, out):
    if mode is Mode.RENDERED:
        out.add(match['marker'], {FOREGROUND: BLUE, GLYPH: '•'})


def _numbered_item(match, mode, theme, out):
    out.add(match['marker'], {FOREGROUND: BLUE, FONT: Font(theme.base_font_size, 'medium', 'monospaced-digit')})


def _horizontal_rule(match, mode, theme, out):
    out.block_spans.append(match.span)
    if mode is Mode.EDITING:
        out.add(match.span, {FOREGROUND: TERTIARY, PARAGRAPH: theme.rule_paragraph()})
    else:
        out.add(match.span, {**theme.hidden_attributes(), PARAGRAPH: theme.rule_paragraph()})


_RESOLVERS = ensure_exhaustive({
    MatchKind.HEADER: _header,
    MatchKind.CODE_BLOCK: _code_block,
    MatchKind.INLINE_CODE: _inline_code,
    MatchKind.BOLD: _emphasis(lambda theme: Font(theme.base_font_size, 'bold')),
    MatchKind.ITALIC: _emphasis(lambda theme: Font(theme.base_font_size, italic=True)),
    MatchKind.LINK: _link,
    MatchKind.BLOCKQUOTE: _blockquote,
    MatchKind.BULLET_ITEM: _bullet_item,
    MatchKind.NUMBERED_ITEM: _numbered_item,
    MatchKind.HORIZONTAL_RULE: _horizontal_rule,
}, 'resolver table')


def resolve(match, active_line, theme):
    """Decide editing vs rendered mode for one match and emit its styles."""
    mode = mode_for(match, active_line)
    out = DecorationResult(mode)
    _RESOLVERS[match.kind](match, mode, theme, out)
    return out
