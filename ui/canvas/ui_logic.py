# ui/canvas/ui_logic.py
from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtWidgets import QApplication

from clipping.frame_loop import FrameLoop
from ui.canvas.paint import PaintConfig, to_qcolor
from ui.canvas.window import ClipCanvasWindow


def run_canvas_ui(
    *,
    frame_loop: FrameLoop,
    title: str,
    width: int,
    height: int,
    fps: float,
    background: str = "#FFFFFF",
    line_width_px: int = 2,
    on_close: Optional[Callable[[], None]] = None,
    on_lines_count_changed: Optional[Callable[[int], None]] = None,
    log_events: bool = False,
) -> int:
    """
    Start (or attach to) the Qt application and show the clipping canvas.

    Threading model:
    - Must be called from the main thread; everything (events, frames, painting) runs on
      the Qt event loop.

    Returns:
        The exit code of QApplication.exec().
    """
    # If a QApplication already exists (common in embedded/hosted contexts), reuse it.
    app = QApplication.instance() or QApplication([])

    w = ClipCanvasWindow(
        frame_loop=frame_loop,
        paint_cfg=PaintConfig(
            line_width_px=int(line_width_px),
            background=to_qcolor(background, fallback="#FFFFFF"),
        ),
        title=str(title),
        width=int(width),
        height=int(height),
        fps=float(fps),
        on_close=on_close,
        on_lines_count_changed=on_lines_count_changed,
        log_events=bool(log_events),
    )
    w.show()

    # Blocks until the window closes / app quits.
    return int(app.exec())
