"""Rectangle selection built from a mouse drag.

`RectangleSelectionBuilder` is the small state machine fed by press/move/release events;
`RectangleSelection` is the immutable rectangle it produces once both corners are known.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple

from clipping.primitives import Color, Point, Renderer


# Mouse button transition reported by the event source.
# None (no transition) is passed for plain cursor moves.
ButtonAction = Literal["press", "release"]


@dataclass(frozen=True)
class RectangleSelection:
    """
    Axis-aligned rectangle spanned by two opposite corners.

    Borders use the y-up convention of the centered space:
    - left <= right
    - bottom <= top

    Corners are assigned to named slots directly from the min/max of both coordinates,
    so the clockwise order (top-left, top-right, bottom-right, bottom-left) does not depend
    on which corner the drag started from.
    """
    first: Point
    second: Point

    left: float = field(init=False)
    right: float = field(init=False)
    bottom: float = field(init=False)
    top: float = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "left", min(self.first.x, self.second.x))
        object.__setattr__(self, "right", max(self.first.x, self.second.x))
        object.__setattr__(self, "bottom", min(self.first.y, self.second.y))
        object.__setattr__(self, "top", max(self.first.y, self.second.y))

    @property
    def top_left(self) -> Point:
        return Point(self.left, self.top)

    @property
    def top_right(self) -> Point:
        return Point(self.right, self.top)

    @property
    def bottom_right(self) -> Point:
        return Point(self.right, self.bottom)

    @property
    def bottom_left(self) -> Point:
        return Point(self.left, self.bottom)

    @property
    def corners(self) -> Tuple[Point, Point, Point, Point]:
        """Corners clockwise from top-left."""
        return (self.top_left, self.top_right, self.bottom_right, self.bottom_left)

    @property
    def borders(self) -> Tuple[float, float, float, float]:
        """(left, right, top, bottom)"""
        return (self.left, self.right, self.top, self.bottom)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom

    @property
    def is_degenerate(self) -> bool:
        return self.width == 0.0 or self.height == 0.0

    def contains(self, p: Point) -> bool:
        return self.left <= p.x <= self.right and self.bottom <= p.y <= self.top

    def draw(self, renderer: Renderer, color: Color) -> None:
        """Draw the outline as four segments joining consecutive corners."""
        corners = self.corners
        for i, start in enumerate(corners):
            end = corners[(i + 1) % len(corners)]
            renderer.draw_segment(start, end, color)


class RectangleSelectionBuilder:
    """
    Accumulates a drag gesture into a `RectangleSelection`.

    States:
    - Idle: no press seen yet (start is None).
    - Dragging: button held; every cursor update moves the end corner.
    - Built: button released; start/end are kept until the next press.

    A press restarts the gesture even if a selection was already built. Because the cursor
    is recorded as the end corner whenever the button is held (including on the press
    itself), a click without movement yields start == end, i.e. a zero-area selection.

    min_diagonal:
        When > 0, build() returns None while the drag diagonal is shorter than this.
        Lets a bare click clear the selection instead of producing a point-sized one.
    """

    def __init__(self, *, min_diagonal: float = 0.0, log_events: bool = False) -> None:
        self._min_diagonal = float(min_diagonal)
        self._log_events = bool(log_events)

        self._start: Optional[Point] = None
        self._end: Optional[Point] = None
        self._pressed = False

    @property
    def start(self) -> Optional[Point]:
        return self._start

    @property
    def end(self) -> Optional[Point]:
        return self._end

    @property
    def pressed(self) -> bool:
        return self._pressed

    def update(self, cursor: Point, action: Optional[ButtonAction] = None) -> None:
        """
        Apply one cursor update, optionally carrying a button transition.

        Order matters: the transition is applied first, then (if still pressed) the
        cursor becomes the current end corner.
        """
        if action == "press":
            self._mouse_pressed(cursor)
        elif action == "release":
            self._mouse_released(cursor)

        if self._pressed:
            self._end = cursor

    def _mouse_pressed(self, cursor: Point) -> None:
        if self._log_events:
            print("[selection]", "pressed=", cursor.to_tuple(), flush=True)
        self._start = cursor
        self._end = None
        self._pressed = True

    def _mouse_released(self, cursor: Point) -> None:
        if self._log_events:
            print("[selection]", "released=", cursor.to_tuple(), flush=True)
        self._pressed = False

    def _is_selection(self, start: Point, end: Point) -> bool:
        if self._min_diagonal <= 0.0:
            return True
        return start.distance_to(end) >= self._min_diagonal

    def build(self) -> Optional[RectangleSelection]:
        """Return the selection for the current state, or None if it is incomplete."""
        if self._start is None or self._end is None:
            return None
        if not self._is_selection(self._start, self._end):
            return None
        return RectangleSelection(self._start, self._end)
