# terminal.py
# prompt_toolkit side of the live markdown view.

import logging
import re

from prompt_toolkit.formatted_text.utils import fragment_list_width
from prompt_toolkit.layout.utils import explode_text_fragments
from prompt_toolkit.layout.processors import Processor, Transformation
from prompt_toolkit.lexers import Lexer

from inkcore.blocks import BlockMetrics, BlockPainter, Rect, RoundedRect, Stroke
from inkcore.decorations import GLYPH
from inkcore.spans import Span
from inkcore.styles import BACKGROUND, FONT, FOREGROUND, UNDERLINE, is_hidden

logger = logging.getLogger(__name__)

HIDDEN_CLASS = 'class:md.hidden'

# Cells have no sub-line padding or rounded corners.
TERMINAL_METRICS = BlockMetrics(code_inset_x=0, code_padding_y=0, corner_radius=0, rule_width=1)


def to_style_string(attrs, base_font_size=16):
    """Map engine attributes onto prompt_toolkit style classes."""
    if is_hidden(attrs):
        return HIDDEN_CLASS

    parts = []
    font = attrs.get(FONT)
    if font is not None:
        if font.size > base_font_size:
            parts.append('class:md.heading')
        if font.family == 'monospace':
            parts.append('class:md.code')
        if font.is_bold:
            parts.append('bold')
        if font.italic:
            parts.append('italic')

    color = attrs.get(FOREGROUND)
    if color is not None and color.role != 'text':
        parts.append(f'class:md.fg.{color.role}')
    background = attrs.get(BACKGROUND)
    if background is not None:
        parts.append(f'class:md.bg.{background.role}')
    if attrs.get(UNDERLINE):
        parts.append('underline')
    return ' '.join(parts)


class LiveMarkdownLexer(Lexer):
    """Feeds the latest render of an ``EditorSession`` to a BufferControl."""

    def __init__(self, session, misspelled=None):
        self.session = session
        self.misspelled = misspelled
        self.revision = 0

    def refresh(self):
        """Drop cached lines, e.g. after the spelling overlay is toggled."""
        self.revision += 1

    def invalidation_hash(self):
        # The fragment cache is keyed on text plus this; a cursor moving to
        # another line re-renders without a text change.
        return (id(self), self.session.render_count, self.revision)

    def lex_document(self, document):
        if self.session.get_text() != document.text:
            self.session.on_text_changed(document.text, document.cursor_position)
        result = self.session.result
        base = self.session.renderer.theme.base_font_size
        cursor = document.cursor_position

        def get_line(lineno):
            try:
                line = document.lines[lineno]
            except IndexError:
                return []
            start = document.translate_row_col_to_index(lineno, 0)
            fragments = []
            for span, attrs in result.runs_in(Span(start, start + len(line))):
                style = to_style_string(attrs, base)
                text = result.text[span.start:span.end]
                glyph = attrs.get(GLYPH)
                if glyph and style != HIDDEN_CLASS:
                    text = glyph * len(text)
                elif self.misspelled is not None and style != HIDDEN_CLASS and 'class:md.code' not in style:
                    self._add_spellchecked_text(fragments, style, text, span.start, cursor)
                    continue
                fragments.append((style, text))
            return fragments

        return get_line

    def _add_spellchecked_text(self, fragments, style, text, start_index, cursor_pos):
        last_pos = 0
        for match in re.finditer(r'\w+', text):
            word_start = start_index + match.start()
            word_end = start_index + match.end()
            if match.start() > last_pos:
                fragments.append((style, text[last_pos:match.start()]))

            is_being_typed = word_start <= cursor_pos <= word_end
            if not is_being_typed and self.misspelled(match.group()):
                fragments.append((f'{style} class:spell-error'.strip(), match.group()))
            else:
                fragments.append((style, match.group()))
            last_pos = match.end()

        if last_pos < len(text):
            fragments.append((style, text[last_pos:]))


class HiddenMarkupProcessor(Processor):
    """Drops hidden markup characters from the displayed line."""

    def apply_transformation(self, transformation_input):
        fragments = explode_text_fragments(transformation_input.fragments)

        position_mappings = {}
        result_fragments = []
        for i, fragment in enumerate(fragments):
            position_mappings[i] = len(result_fragments)
            if HIDDEN_CLASS in fragment[0]:
                continue
            result_fragments.append(fragment)
        pos = len(result_fragments)
        position_mappings[len(fragments)] = pos
        position_mappings[len(fragments) + 1] = pos + 1

        def source_to_display(from_position):
            return position_mappings.get(from_position, from_position - len(fragments) + pos)

        def display_to_source(display_pos):
            reversed_mappings = {v: k for k, v in position_mappings.items()}
            while display_pos >= 0:
                try:
                    return reversed_mappings[display_pos]
                except KeyError:
                    display_pos -= 1
            return 0

        return Transformation(result_fragments, source_to_display=source_to_display,
                              display_to_source=display_to_source)


class TerminalGeometry:
    """Cell-based layout answers: one row per line, one column per char."""

    def __init__(self, document, width):
        self.document = document
        self.content_left = 0
        self.content_right = width

    def bounding_rect(self, span):
        if span.length == 0 or not span.is_valid_for(self.document.text):
            return None
        row0, col0 = self.document.translate_index_to_position(span.start)
        row1, col1 = self.document.translate_index_to_position(span.end - 1)
        if row0 == row1:
            return Rect(col0, row0, col1 + 1 - col0, 1)
        return Rect(self.content_left, row0, self.content_right - self.content_left, row1 - row0 + 1)


class BlockPaintProcessor(Processor):
    """Paints code-block backgrounds and rule strokes for the current line."""

    def __init__(self, session, painter=None):
        self.session = session
        self.painter = painter or BlockPainter(session.renderer.theme, TERMINAL_METRICS)

    def apply_transformation(self, transformation_input):
        ti = transformation_input
        result = self.session.result
        fragments = list(ti.fragments)
        if not (result.code_block_spans or result.horizontal_rule_spans) or result.text != ti.document.text:
            return Transformation(fragments)

        geometry = TerminalGeometry(ti.document, ti.width)
        viewport = Rect(0, ti.lineno, ti.width, 1)
        for op in self.painter.paint(result.code_block_spans, result.horizontal_rule_spans, geometry, viewport):
            if isinstance(op, RoundedRect):
                fill = f'class:md.{op.fill.role}'
                fragments = [(f'{style} {fill}', text, *rest) for style, text, *rest in fragments]
                padding = int(op.rect.max_x) - fragment_list_width(fragments)
                if padding > 0:
                    fragments.append((fill, ' ' * padding))
            elif isinstance(op, Stroke) and fragment_list_width(fragments) == 0:
                # Only a hidden rule leaves the line empty; a raw one stays visible.
                fragments.append(('class:md.rule', '─' * int(op.end.x - op.start.x)))
        return Transformation(fragments)
