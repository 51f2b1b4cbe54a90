"""One iteration of the interactive loop, independent of any UI toolkit.

Per frame:
1) apply every queued input event to the selection builder, in arrival order,
2) build the selection (if the gesture has produced one),
3) classify and draw every managed segment, then draw the selection outline on top.

The window layer only has to collect events and supply a renderer; everything that
decides *what* gets drawn lives here so it can be exercised without a display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Optional, Tuple, Union

from clipping.coordinates import CoordinateConverter
from clipping.engine import ClippingEngine
from clipping.lines_manager import ClipStats, LinesManager
from clipping.primitives import Point, Renderer
from clipping.selection import ButtonAction, RectangleSelection, RectangleSelectionBuilder
from clipping.style import StyleConfig


MouseButton = Literal["left", "right", "middle"]


@dataclass(frozen=True)
class CursorMoved:
    """Cursor position in top-left pixel space (origin top-left, y down)."""
    x: float
    y: float


@dataclass(frozen=True)
class MouseButtonEvent:
    button: MouseButton
    action: ButtonAction


InputEvent = Union[CursorMoved, MouseButtonEvent]


@dataclass(frozen=True)
class FrameResult:
    selection: Optional[RectangleSelection]
    stats: ClipStats


class FrameLoop:
    """
    Owns the per-frame interaction state and turns event batches into draw calls.

    State carried between frames:
    - the selection builder (start/end/pressed),
    - the last cursor position in centered space (button events carry no position, so
      they are applied at the most recent cursor),
    - the previous frame's stats, used to print diagnostics only when they change.
    """

    def __init__(
        self,
        *,
        builder: RectangleSelectionBuilder,
        lines: LinesManager,
        engine: ClippingEngine,
        style: StyleConfig,
        log_events: bool = False,
    ) -> None:
        self._builder = builder
        self._lines = lines
        self._engine = engine
        self._style = style
        self._log_events = bool(log_events)

        self._cursor = Point(0.0, 0.0)
        self._last_stats: Optional[ClipStats] = None

    @property
    def cursor(self) -> Point:
        return self._cursor

    @property
    def builder(self) -> RectangleSelectionBuilder:
        return self._builder

    @property
    def lines(self) -> LinesManager:
        return self._lines

    def apply_events(self, events: Iterable[InputEvent], cc: CoordinateConverter) -> None:
        """Feed events to the builder in order; only the left button drives selection."""
        for ev in events:
            if isinstance(ev, CursorMoved):
                self._cursor = cc.top_left_to_centered_p(Point(ev.x, ev.y))
                self._builder.update(self._cursor, None)
            elif isinstance(ev, MouseButtonEvent):
                if ev.button != "left":
                    continue
                self._builder.update(self._cursor, ev.action)

    def run_frame(
        self,
        events: Iterable[InputEvent],
        renderer: Renderer,
        viewport: Tuple[int, int],
    ) -> FrameResult:
        width, height = viewport
        cc = CoordinateConverter(int(width), int(height))

        self.apply_events(events, cc)
        selection = self._builder.build()

        stats = self._lines.draw(renderer, selection, self._engine)
        if selection is not None:
            selection.draw(renderer, self._style.selection_color)

        self._log_stats_if_changed(stats)
        return FrameResult(selection=selection, stats=stats)

    def _log_stats_if_changed(self, stats: ClipStats) -> None:
        if not self._log_events or stats == self._last_stats:
            return
        self._last_stats = stats
        print(
            "[clip]",
            "inside=",
            stats.inside,
            "outside=",
            stats.outside,
            "partial=",
            stats.partial,
            "unclassified=",
            stats.unclassified,
            flush=True,
        )
