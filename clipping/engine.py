"""Segment vs. rectangle classification.

`ClippingEngine.classify` decides whether a segment is inside, outside or partly inside a
`RectangleSelection` and, in the partial case, returns the visible sub-segment.

The algorithm is outcode based (Cohen-Sutherland style) with an explicit boundary pass:

1) Trivial test on the endpoint outcodes:
   - both codes zero            -> Inside
   - codes share a violated bit -> Outside
2) Otherwise solve start + t * (end - start) against each border line (left, right, top,
   bottom, in that order), keep solutions with t in [0, 1] whose point lies on the closed
   rectangle boundary (corners included, each kept once), and derive the outcome from how
   many boundary points were found.

All arithmetic is done in float32 to match the precision of `Point`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

import numpy as np

from clipping.primitives import Line, Point
from clipping.selection import RectangleSelection


# Outcode bits.
OUT_LEFT = 0b1000
OUT_RIGHT = 0b0100
OUT_BOTTOM = 0b0010
OUT_TOP = 0b0001

DEFAULT_BOUNDARY_EPS = 2.0


@dataclass(frozen=True)
class Inside:
    """Both endpoints are within all four borders."""


@dataclass(frozen=True)
class Outside:
    """No part of the segment is visible inside the rectangle."""


@dataclass(frozen=True)
class PartlyInside:
    """Only `visible` (a sub-segment of the input) lies inside the rectangle."""
    visible: Line


ClippingOutcome = Union[Inside, Outside, PartlyInside]


def outcode(p: Point, selection: RectangleSelection) -> int:
    """
    Classify a point against the rectangle's four half-planes.

    Points exactly on a border are inside (comparisons are strict).
    """
    code = 0
    if p.x < selection.left:
        code |= OUT_LEFT
    elif p.x > selection.right:
        code |= OUT_RIGHT
    if p.y < selection.bottom:
        code |= OUT_BOTTOM
    elif p.y > selection.top:
        code |= OUT_TOP
    return code


class ClippingEngine:
    """
    Stateless classifier parametrized by the boundary tolerance.

    eps:
        Absolute tolerance (in units of the selection space, e.g. centered pixels) used to
        decide whether a computed intersection lies on a border line. Must be tuned to the
        scale of the space being clipped.
    """

    def __init__(self, *, eps: float = DEFAULT_BOUNDARY_EPS) -> None:
        if not eps > 0.0:
            raise ValueError("eps must be > 0")
        self._eps = np.float32(eps)

    @property
    def eps(self) -> float:
        return float(self._eps)

    def classify(self, selection: RectangleSelection, line: Line) -> ClippingOutcome:
        code_start = outcode(line.start, selection)
        code_end = outcode(line.end, selection)

        if (code_start | code_end) == 0:
            return Inside()
        if (code_start & code_end) != 0:
            return Outside()

        points = self._boundary_points(selection, line)

        if not points:
            return Outside()

        if len(points) == 1:
            hit = points[0]
            # Keep the input direction: start -> hit when start is interior, hit -> end otherwise.
            if code_start == 0:
                return PartlyInside(Line(line.start, hit))
            if code_end == 0:
                return PartlyInside(Line(hit, line.end))
            # Touches the boundary in a single point with both endpoints outside.
            return Outside()

        return PartlyInside(Line(points[0], points[1]))

    def _boundary_points(self, selection: RectangleSelection, line: Line) -> List[Point]:
        """
        Distinct intersections of the segment with the closed rectangle boundary.

        Hits are collected in border order. A corner is found on two borders and kept once.
        When rounding leaves more than two hits, only the first and last along the segment
        (smallest and largest t) are returned, still in border order.
        """
        sx = np.float32(line.start.x)
        sy = np.float32(line.start.y)
        dx = np.float32(line.end.x) - sx
        dy = np.float32(line.end.y) - sy

        left = np.float32(selection.left)
        right = np.float32(selection.right)
        top = np.float32(selection.top)
        bottom = np.float32(selection.bottom)
        eps = self._eps

        hits: List[Tuple[np.float32, Point]] = []

        def keep(t: np.float32, p: Point) -> None:
            if all(p != q for _, q in hits):
                hits.append((t, p))

        # Left / right: solve along x, require y within [bottom, top].
        for border in (left, right):
            hit = self._solve(sx, sy, dx, dy, border, along_x=True)
            if hit is not None:
                t, p = hit
                if abs(np.float32(p.x) - border) < eps and bottom <= p.y <= top:
                    keep(t, p)

        # Top / bottom: solve along y, require x within [left, right].
        for border in (top, bottom):
            hit = self._solve(sx, sy, dx, dy, border, along_x=False)
            if hit is not None:
                t, p = hit
                if abs(np.float32(p.y) - border) < eps and left <= p.x <= right:
                    keep(t, p)

        if len(hits) < 2:
            return [p for _, p in hits]

        ts = [t for t, _ in hits]
        first = ts.index(min(ts))
        last = ts.index(max(ts))
        return [hits[i][1] for i in sorted((first, last))]

    @staticmethod
    def _solve(
        sx: np.float32,
        sy: np.float32,
        dx: np.float32,
        dy: np.float32,
        border: np.float32,
        *,
        along_x: bool,
    ) -> Optional[Tuple[np.float32, Point]]:
        # Zero delta: the segment is parallel to this border, no single crossing.
        delta = dx if along_x else dy
        if delta == 0:
            return None

        origin = sx if along_x else sy
        t = np.float32((border - origin) / delta)
        if not (0.0 <= t <= 1.0):
            return None
        return t, Point(sx + t * dx, sy + t * dy)


_default_engine = ClippingEngine()


def classify(selection: RectangleSelection, line: Line) -> ClippingOutcome:
    """Classify with the default boundary tolerance."""
    return _default_engine.classify(selection, line)
