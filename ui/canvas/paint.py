# ui/canvas/paint.py
from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QColor, QPainter, QPen

from clipping.coordinates import CoordinateConverter
from clipping.primitives import Color, Point


@dataclass(frozen=True)
class DrawCall:
    """One recorded draw_segment call, in centered pixel space."""
    p0: Point
    p1: Point
    color: Color


class SegmentBuffer:
    """
    Renderer that records segments instead of drawing them.

    Qt only allows painting from inside paintEvent, while the frame loop runs from a timer.
    The frame loop therefore draws into this buffer, and the window replays the buffer on
    the next paint.
    """

    def __init__(self) -> None:
        self._calls: list[DrawCall] = []

    def draw_segment(self, p0: Point, p1: Point, color: Color) -> None:
        self._calls.append(DrawCall(p0=p0, p1=p1, color=color))

    def clear(self) -> None:
        self._calls.clear()

    @property
    def calls(self) -> tuple[DrawCall, ...]:
        return tuple(self._calls)

    def __len__(self) -> int:
        return len(self._calls)


def to_qcolor(color: Color, fallback: str = "#000000") -> QColor:
    """Parse a "#RRGGBB" string, falling back when Qt cannot parse it."""
    c = QColor(str(color))
    if not c.isValid():
        c = QColor(fallback)
    return c


@dataclass(frozen=True)
class PaintConfig:
    """
    Rendering configuration for the clipping canvas.

    - line_width_px: pen width for every segment (segments and selection outline).
    - background: fill color painted before any segment.
    """
    line_width_px: int
    background: QColor


class CanvasPainter:
    """
    Replays a `SegmentBuffer` onto a QPainter.

    Recorded points are in centered pixel space (y up); each one is projected into the
    widget's top-left pixel space without clamping, and QPainter clips whatever falls
    outside the widget (segments generated before a shrink, for example).
    Antialiasing stays off so outlines land on whole pixels.
    """

    def __init__(self, *, cfg: PaintConfig) -> None:
        self._cfg = cfg
        # Parsed pens keyed by color string; the palette is small and fixed per run.
        self._pens: dict[str, QPen] = {}

    def _pen(self, color: Color) -> QPen:
        pen = self._pens.get(color)
        if pen is None:
            pen = QPen(to_qcolor(color))
            pen.setWidth(int(self._cfg.line_width_px))
            pen.setCapStyle(Qt.PenCapStyle.FlatCap)
            self._pens[color] = pen
        return pen

    def paint(self, p: QPainter, *, width: int, height: int, buffer: SegmentBuffer) -> None:
        p.setRenderHint(QPainter.RenderHint.Antialiasing, False)
        p.fillRect(0, 0, int(width), int(height), self._cfg.background)

        cc = CoordinateConverter(int(width), int(height))
        for call in buffer.calls:
            a = cc.project_centered_to_top_left_p(call.p0)
            b = cc.project_centered_to_top_left_p(call.p1)
            p.setPen(self._pen(call.color))
            p.drawLine(QPointF(a.x, a.y), QPointF(b.x, b.y))
