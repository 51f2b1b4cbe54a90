import os
import sys
from pathlib import Path

import pytest

# Headless Qt for widget tests; must be set before a QApplication is created.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Make the flat-layout packages importable without an editable install.
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from clipping.engine import ClippingEngine  # noqa: E402
from clipping.primitives import Point  # noqa: E402
from clipping.selection import RectangleSelection  # noqa: E402
from clipping.style import StyleConfig  # noqa: E402


class RecordingRenderer:
    """Renderer double that keeps every draw_segment call."""

    def __init__(self):
        self.calls = []

    def draw_segment(self, p0, p1, color):
        self.calls.append((p0, p1, color))

    def colors(self):
        return [c for _, _, c in self.calls]


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def rect10():
    """Selection with borders left=-10, right=10, top=10, bottom=-10."""
    return RectangleSelection(Point(-10, 10), Point(10, -10))


@pytest.fixture
def engine():
    return ClippingEngine(eps=2.0)


@pytest.fixture
def style():
    return StyleConfig()


@pytest.fixture
def raw_config():
    """A complete, valid config mapping; tests mutate a fresh copy each time."""
    return {
        "window": {"title": "rectclip", "width": 800, "height": 600, "fps": 60, "background": "#ffffff"},
        "selection": {"boundary_eps_px": 2.0, "min_diagonal_px": 0.0},
        "lines": {"count": 10, "max_count": 100, "seed": 1337},
        "style": {
            "selection_color": "#000000",
            "line_color": "#3C3C3C",
            "inside_color": "#2E9E44",
            "outside_color": "#B4B4B4",
            "partial_color": "#D7263D",
            "line_width_px": 2,
        },
        "diagnostics": {"log_events": False},
    }
