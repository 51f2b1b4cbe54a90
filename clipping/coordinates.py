# clipping/coordinates.py
from __future__ import annotations

from dataclasses import dataclass

from clipping.primitives import Point, clamp_float, f32


@dataclass(frozen=True)
class Bounds:
    """
    Inclusive axis-aligned bounds of one coordinate space.

    Used only to saturate converter inputs; a value outside the bounds is clamped to the
    nearest edge before it is transformed.
    """
    x_left: float
    x_right: float
    y_bottom: float
    y_top: float

    @staticmethod
    def top_left_p(width: float, height: float) -> "Bounds":
        # y grows downward in this space; the "bottom" field is simply the low end.
        return Bounds(x_left=0.0, x_right=float(width), y_bottom=0.0, y_top=float(height))

    @staticmethod
    def centered_p(width: float, height: float) -> "Bounds":
        hw = float(width) / 2.0
        hh = float(height) / 2.0
        return Bounds(x_left=-hw, x_right=hw, y_bottom=-hh, y_top=hh)

    @staticmethod
    def centered_n() -> "Bounds":
        return Bounds(x_left=-1.0, x_right=1.0, y_bottom=-1.0, y_top=1.0)

    def clamp_x(self, x: float) -> float:
        return clamp_float(x, self.x_left, self.x_right)

    def clamp_y(self, y: float) -> float:
        return clamp_float(y, self.y_bottom, self.y_top)

    def contains(self, p: Point) -> bool:
        return self.x_left <= p.x <= self.x_right and self.y_bottom <= p.y <= self.y_top


class CoordinateConverter:
    """
    Clamped conversions between the three coordinate spaces used by the viewport.

    Spaces:
    - top-left pixel ("_top_left_p"): origin at the viewport's top-left corner, y down,
      bounds [0, width] x [0, height]. Raw cursor events arrive in this space.
    - centered pixel ("_centered_p"): origin at the viewport center, y up,
      bounds [-w/2, w/2] x [-h/2, h/2]. Selection and clipping work in this space.
    - centered normalized ("_centered_n"): centered pixel scaled by the half-extent,
      bounds [-1, 1] x [-1, 1].

    Every conversion clamps its input to the bounds of the source space first, so
    out-of-range values saturate instead of producing coordinates outside the viewport.
    Only the top-left <-> centered pair flips the sign of y.

    Instances are cheap and immutable; the frame loop builds a new one each frame from
    the current viewport size.
    """

    def __init__(self, width: int, height: int) -> None:
        self._width = float(width)
        self._height = float(height)
        self._half_w = self._width / 2.0
        self._half_h = self._height / 2.0

        self._top_left_p = Bounds.top_left_p(self._width, self._height)
        self._centered_p = Bounds.centered_p(self._width, self._height)
        self._centered_n = Bounds.centered_n()

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    # -----------------------------
    # top-left pixel <-> centered pixel
    # -----------------------------
    def x_top_left_to_centered_p(self, x_pixels: float) -> float:
        return f32(self._top_left_p.clamp_x(x_pixels) - self._half_w)

    def y_top_left_to_centered_p(self, y_pixels: float) -> float:
        return f32(-(self._top_left_p.clamp_y(y_pixels) - self._half_h))

    def x_centered_to_top_left_p(self, x_pixels: float) -> float:
        return f32(self._centered_p.clamp_x(x_pixels) + self._half_w)

    def y_centered_to_top_left_p(self, y_pixels: float) -> float:
        return f32(self._half_h - self._centered_p.clamp_y(y_pixels))

    # -----------------------------
    # centered pixel <-> centered normalized
    # -----------------------------
    def x_centered_p_to_n(self, x_pixels: float) -> float:
        if self._half_w == 0.0:
            return 0.0
        return f32(self._centered_p.clamp_x(x_pixels) / self._half_w)

    def y_centered_p_to_n(self, y_pixels: float) -> float:
        if self._half_h == 0.0:
            return 0.0
        return f32(self._centered_p.clamp_y(y_pixels) / self._half_h)

    def x_centered_n_to_p(self, x_normalized: float) -> float:
        return f32(self._centered_n.clamp_x(x_normalized) * self._half_w)

    def y_centered_n_to_p(self, y_normalized: float) -> float:
        return f32(self._centered_n.clamp_y(y_normalized) * self._half_h)

    # -----------------------------
    # Normalized spans -> pixel lengths
    # -----------------------------
    def width_n_to_p(self, width_normalized: float) -> float:
        """
        Convert a horizontal span in normalized units to pixels.

        The full viewport is 2.0 normalized units wide, so the span is clamped to [0, 2].
        """
        return f32(clamp_float(width_normalized, 0.0, 2.0) * self._half_w)

    def height_n_to_p(self, height_normalized: float) -> float:
        return f32(clamp_float(height_normalized, 0.0, 2.0) * self._half_h)

    # -----------------------------
    # Point-level wrappers
    # -----------------------------
    def top_left_to_centered_p(self, p: Point) -> Point:
        return Point(self.x_top_left_to_centered_p(p.x), self.y_top_left_to_centered_p(p.y))

    def centered_to_top_left_p(self, p: Point) -> Point:
        return Point(self.x_centered_to_top_left_p(p.x), self.y_centered_to_top_left_p(p.y))

    def centered_p_to_n(self, p: Point) -> Point:
        return Point(self.x_centered_p_to_n(p.x), self.y_centered_p_to_n(p.y))

    def centered_n_to_p(self, p: Point) -> Point:
        return Point(self.x_centered_n_to_p(p.x), self.y_centered_n_to_p(p.y))

    # -----------------------------
    # Drawing (no clamping)
    # -----------------------------
    def project_centered_to_top_left_p(self, p: Point) -> Point:
        """
        Map a centered pixel point to top-left pixels without saturating it.

        Off-viewport points stay off-viewport, so segment slopes are preserved; the
        painter clips.
        """
        return Point(p.x + self._half_w, self._half_h - p.y)

    # -----------------------------
    # Membership (no clamping)
    # -----------------------------
    def contains_top_left_p(self, p: Point) -> bool:
        return self._top_left_p.contains(p)

    def contains_centered_p(self, p: Point) -> bool:
        return self._centered_p.contains(p)

    def contains_centered_n(self, p: Point) -> bool:
        return self._centered_n.contains(p)
