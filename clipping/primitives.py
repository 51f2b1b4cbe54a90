"""Value types shared by the clipping core.

Everything the selection and clipping code passes around is built from `Point` and
`Line`. Both are immutable and store single-precision coordinates, so results are
reproducible regardless of whether callers hand in Python floats, ints or numpy scalars.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Tuple

import numpy as np


# Draw color as a "#RRGGBB" hex string.
# Kept as `str` so the core stays free of any toolkit color type; the Qt layer converts
# it to QColor at the paint boundary.
Color = str


class Renderer(Protocol):
    """Anything that can draw a straight segment between two points in a given color."""

    def draw_segment(self, p0: "Point", p1: "Point", color: Color) -> None: ...


def f32(v: float) -> float:
    """
    Round a scalar to single precision and return it as a Python float.

    All coordinates in the clipping core are float32 values; storing them as plain
    floats keeps equality, hashing and repr simple.
    """
    return float(np.float32(v))


def clamp_float(v: float, lo: float, hi: float) -> float:
    """Clamp v to the inclusive range [lo, hi]."""
    return lo if v < lo else hi if v > hi else v


@dataclass(frozen=True)
class Point:
    """
    2-D coordinate in whatever space the caller is working in.

    Equality is exact and component-wise; no epsilon is applied here. Tolerance-based
    comparisons belong to the clipping engine where the scale of the space is known.
    """
    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", f32(self.x))
        object.__setattr__(self, "y", f32(self.y))

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def distance_to(self, other: Point) -> float:
        return f32(np.hypot(np.float32(self.x - other.x), np.float32(self.y - other.y)))


@dataclass(frozen=True)
class Line:
    """
    Ordered segment from `start` to `end`.

    Direction only matters for parametrization (start + t * (end - start)); whether a
    segment is inside or outside a rectangle does not depend on it.
    """
    start: Point
    end: Point

    @property
    def is_degenerate(self) -> bool:
        return self.start == self.end

    def length(self) -> float:
        return self.start.distance_to(self.end)
