# blocks.py

import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional, Protocol

from inkcore.styles import Color, Theme

logger = logging.getLogger(__name__)

SEPARATOR = Color('separator')


class Point(NamedTuple):
    x: float
    y: float


class Rect(NamedTuple):
    x: float
    y: float
    width: float
    height: float

    @property
    def max_x(self):
        return self.x + self.width

    @property
    def max_y(self):
        return self.y + self.height

    @property
    def mid_y(self):
        return self.y + self.height / 2

    def intersects(self, other):
        return (self.x < other.max_x and other.x < self.max_x
                and self.y < other.max_y and other.y < self.max_y)


class RoundedRect(NamedTuple):
    rect: Rect
    radius: float
    fill: Color


class Stroke(NamedTuple):
    start: Point
    end: Point
    width: float
    color: Color


class LayoutGeometry(Protocol):
    """What the host's text layout must answer for the painter."""

    content_left: float
    content_right: float

    def bounding_rect(self, span) -> Optional[Rect]:
        """Surface rect covering ``span``, or None when it has no layout."""


@dataclass(frozen=True)
class BlockMetrics:
    code_inset_x: float = 8
    code_padding_y: float = 8
    corner_radius: float = 8
    rule_width: float = 1.5


class BlockPainter:
    """Turns code-block and rule spans into paint operations.

    Reads geometry only; it never touches the document or its styles.
    """

    def __init__(self, theme=None, metrics=None):
        self.theme = theme or Theme()
        self.metrics = metrics or BlockMetrics()

    def paint(self, code_block_spans, horizontal_rule_spans, geometry, viewport):
        ops = []
        m = self.metrics

        for span in code_block_spans:
            rect = geometry.bounding_rect(span)
            if rect is None:
                logger.debug("no layout for code block %s", tuple(span))
                continue
            if not rect.intersects(viewport):
                continue
            width = geometry.content_right - geometry.content_left - 2 * m.code_inset_x
            background = Rect(geometry.content_left + m.code_inset_x, rect.y - m.code_padding_y,
                              width, rect.height + 2 * m.code_padding_y)
            ops.append(RoundedRect(background, m.corner_radius, self.theme.code_block_background))

        for span in horizontal_rule_spans:
            rect = geometry.bounding_rect(span)
            if rect is None:
                logger.debug("no layout for rule %s", tuple(span))
                continue
            if not rect.intersects(viewport):
                continue
            y = rect.mid_y
            ops.append(Stroke(Point(geometry.content_left, y), Point(geometry.content_right, y),
                              m.rule_width, SEPARATOR))
        return ops
