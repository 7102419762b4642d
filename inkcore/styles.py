# styles.py

from dataclasses import dataclass, field
from typing import NamedTuple

from inkcore.spans import Span

# --- Attribute keys ---
FONT = 'font'
FOREGROUND = 'foreground'
BACKGROUND = 'background'
UNDERLINE = 'underline'
PARAGRAPH = 'paragraph'


class Color(NamedTuple):
    """A palette role plus alpha; the host maps roles to concrete colours."""
    role: str
    alpha: float = 1.0

    def with_alpha(self, alpha):
        return Color(self.role, alpha)


CLEAR = Color('clear', 0.0)


class Font(NamedTuple):
    size: float
    weight: str = 'regular'     # regular | medium | bold | heavy
    family: str = 'system'      # system | monospace | monospaced-digit
    italic: bool = False

    @property
    def is_bold(self):
        return self.weight in ('bold', 'heavy')


class ParagraphStyle(NamedTuple):
    line_spacing: float = 0
    spacing_before: float = 0
    spacing_after: float = 0
    head_indent: float = 0
    first_line_head_indent: float = 0
    tail_indent: float = 0
    alignment: str = 'natural'


@dataclass(frozen=True)
class Theme:
    appearance: str = 'dark'
    base_font_size: float = 16
    header_sizes: tuple = (32, 26, 22, 18, 16, 15)
    code_font_size: float = 13
    inline_code_font_size: float = 14
    quote_marker_size: float = 20
    hidden_font_size: float = 0.1
    code_block_background: Color = field(default_factory=lambda: Color('code-block-dark'))

    @classmethod
    def for_appearance(cls, appearance):
        if appearance == 'light':
            return cls(appearance='light', code_block_background=Color('code-block-light'))
        return cls(appearance='dark')

    def header_size(self, level):
        # Levels past the table reuse the smallest size.
        index = max(0, min(level - 1, len(self.header_sizes) - 1))
        return self.header_sizes[index]

    # --- Profiles ---
    def default_attributes(self):
        return {
            FONT: Font(self.base_font_size),
            FOREGROUND: Color('text'),
            PARAGRAPH: ParagraphStyle(line_spacing=6, spacing_after=12),
        }

    def hidden_attributes(self):
        return {FONT: Font(self.hidden_font_size), FOREGROUND: CLEAR}

    def code_font(self):
        return Font(self.code_font_size, family='monospace')

    def code_paragraph(self):
        return ParagraphStyle(line_spacing=4, spacing_before=12, spacing_after=12,
                              head_indent=16, first_line_head_indent=16, tail_indent=-16)

    def quote_paragraph(self):
        return ParagraphStyle(head_indent=16, spacing_before=8, spacing_after=8)

    def rule_paragraph(self):
        return ParagraphStyle(spacing_before=20, spacing_after=20, alignment='center')


def is_hidden(attrs):
    color = attrs.get(FOREGROUND)
    return color is not None and color.alpha == 0


class StyleMap:
    """Character-level attribute store over one snapshot of the document.

    ``set_attributes`` replaces whatever a range carried; ``add_attributes``
    merges key by key, so a later write wins only for the keys it names and
    only inside its own range.
    """

    def __init__(self, text):
        self.text = text
        self._attrs = [{} for _ in range(len(text))]

    def __len__(self):
        return len(self._attrs)

    def _check(self, span):
        if not span.is_valid_for(self.text):
            raise ValueError(f"span {tuple(span)} outside text of length {len(self.text)}")

    def set_attributes(self, span, attrs):
        self._check(span)
        shared = dict(attrs)
        for i in range(span.start, span.end):
            self._attrs[i] = shared

    def add_attributes(self, span, attrs):
        self._check(span)
        merged = {}
        for i in range(span.start, span.end):
            current = self._attrs[i]
            key = id(current)
            if key not in merged:
                merged[key] = (current, {**current, **attrs})
            self._attrs[i] = merged[key][1]

    def attributes_at(self, offset):
        return dict(self._attrs[offset])

    def runs(self):
        """Coalesce equal neighbours into ordered ``(Span, attrs)`` pairs."""
        result = []
        start = 0
        for i in range(1, len(self._attrs) + 1):
            if i == len(self._attrs) or self._attrs[i] != self._attrs[start]:
                if i > start:
                    result.append((Span(start, i), dict(self._attrs[start])))
                start = i
        return result
