"""Candidate segment population and per-outcome drawing.

The population is only ever changed through `LinesManager.set_lines_count`, which is what
the UI line counter calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from clipping.engine import ClippingEngine, Inside, Outside, PartlyInside
from clipping.primitives import Line, Point, Renderer
from clipping.selection import RectangleSelection
from clipping.style import StyleConfig


DEFAULT_MAX_COUNT = 100


@dataclass(frozen=True)
class ClipStats:
    """How many segments ended up in each class during one draw pass."""
    inside: int = 0
    outside: int = 0
    partial: int = 0
    unclassified: int = 0

    @property
    def total(self) -> int:
        return self.inside + self.outside + self.partial + self.unclassified


class LinesManager:
    """
    Owns the candidate segments and draws them against the current selection.

    Segments are generated at random inside the centered extent [-half_w, half_w] x
    [-half_h, half_h]. Growing the count appends new segments; shrinking drops the newest
    ones, so segments that are already on screen stay put while the user adjusts the count.

    seed:
        Optional RNG seed. With a fixed seed the sequence of generated segments is
        deterministic, which is what tests and reproducible demos rely on.
    """

    def __init__(
        self,
        *,
        style: StyleConfig,
        extent: Tuple[float, float],
        max_count: int = DEFAULT_MAX_COUNT,
        seed: Optional[int] = None,
    ) -> None:
        if int(max_count) <= 0:
            raise ValueError("max_count must be > 0")

        self._style = style
        self._max_count = int(max_count)
        self._rng = np.random.default_rng(seed)
        self._half_w, self._half_h = self._validate_extent(*extent)
        self._lines: list[Line] = []

    @property
    def lines(self) -> Tuple[Line, ...]:
        return tuple(self._lines)

    @property
    def count(self) -> int:
        return len(self._lines)

    @property
    def max_count(self) -> int:
        return self._max_count

    @staticmethod
    def _validate_extent(half_w: float, half_h: float) -> Tuple[float, float]:
        hw = float(half_w)
        hh = float(half_h)
        if hw < 0.0 or hh < 0.0:
            raise ValueError("extent must be >= 0 on both axes")
        return hw, hh

    def set_extent(self, half_w: float, half_h: float) -> None:
        """Change where new segments are generated; existing segments are kept."""
        self._half_w, self._half_h = self._validate_extent(half_w, half_h)

    def set_lines_count(self, count: int) -> None:
        """
        Resize the segment population to exactly `count` segments.

        Raises:
            ValueError: count is not an integer, is negative, or exceeds max_count.
        """
        if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
            raise ValueError(f"lines count must be an integer, got {count!r}")
        n = int(count)
        if n < 0:
            raise ValueError("lines count must be >= 0")
        if n > self._max_count:
            raise ValueError(f"lines count must be <= {self._max_count}")

        if n == len(self._lines):
            return
        if n < len(self._lines):
            del self._lines[n:]
        else:
            self._lines.extend(self._generate(n - len(self._lines)))

    def _generate(self, n: int) -> list[Line]:
        # Shape (n, 4): x0, y0, x1, y1 per row.
        lo = np.array([-self._half_w, -self._half_h, -self._half_w, -self._half_h], dtype=np.float32)
        hi = np.array([self._half_w, self._half_h, self._half_w, self._half_h], dtype=np.float32)
        raw = self._rng.uniform(lo, hi, size=(n, 4)).astype(np.float32)
        return [Line(Point(r[0], r[1]), Point(r[2], r[3])) for r in raw]

    def draw(
        self,
        renderer: Renderer,
        selection: Optional[RectangleSelection],
        engine: ClippingEngine,
    ) -> ClipStats:
        """
        Draw every segment in the color matching its outcome against `selection`.

        Without a selection nothing is classified and all segments use line_color.
        """
        style = self._style

        if selection is None:
            for line in self._lines:
                renderer.draw_segment(line.start, line.end, style.line_color)
            return ClipStats(unclassified=len(self._lines))

        inside = outside = partial = 0
        for line in self._lines:
            outcome = engine.classify(selection, line)
            if isinstance(outcome, Inside):
                inside += 1
                renderer.draw_segment(line.start, line.end, style.inside_color)
            elif isinstance(outcome, Outside):
                outside += 1
                renderer.draw_segment(line.start, line.end, style.outside_color)
            elif isinstance(outcome, PartlyInside):
                partial += 1
                renderer.draw_segment(line.start, line.end, style.outside_color)
                renderer.draw_segment(outcome.visible.start, outcome.visible.end, style.partial_color)

        return ClipStats(inside=inside, outside=outside, partial=partial)
