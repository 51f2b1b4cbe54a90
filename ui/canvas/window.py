"""Top-level Qt window hosting the clipping canvas.

`ClipCanvasWindow` is the event source and render surface for `FrameLoop`: Qt mouse
events are queued as they arrive, a frame timer drains the queue once per tick and runs
one frame, and paintEvent replays the recorded segments.
"""

from __future__ import annotations

import traceback
from typing import Callable, Optional

from PySide6.QtCore import QTimer, Qt
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import QWidget

from clipping.frame_loop import CursorMoved, FrameLoop, FrameResult, InputEvent, MouseButton, MouseButtonEvent
from ui.canvas.controls import LinesCounterPanel
from ui.canvas.paint import CanvasPainter, PaintConfig, SegmentBuffer


_BUTTONS: dict[Qt.MouseButton, MouseButton] = {
    Qt.MouseButton.LeftButton: "left",
    Qt.MouseButton.RightButton: "right",
    Qt.MouseButton.MiddleButton: "middle",
}


class ClipCanvasWindow(QWidget):
    """
    Canvas window: segments, the rectangle selection, and the line counter.

    Composition:
    - FrameLoop: selection state, segment population, classification (toolkit independent).
    - SegmentBuffer: renderer the frame loop draws into during a tick.
    - CanvasPainter: replays the buffer with QPainter in paintEvent.
    - LinesCounterPanel: "Lines" spin box; its value goes through LinesManager.set_lines_count.

    Lifecycle:
    - On init: sizes the window, seeds the generation extent, runs a first frame.
    - Every tick: pending events -> FrameLoop.run_frame -> repaint.
    - On close: stops the frame timer and calls on_close.
    """

    def __init__(
        self,
        *,
        frame_loop: FrameLoop,
        paint_cfg: PaintConfig,
        title: str,
        width: int,
        height: int,
        fps: float,
        on_close: Optional[Callable[[], None]] = None,
        on_lines_count_changed: Optional[Callable[[int], None]] = None,
        log_events: bool = False,
    ) -> None:
        super().__init__()

        self._loop = frame_loop
        self._painter = CanvasPainter(cfg=paint_cfg)
        self._buffer = SegmentBuffer()
        self._on_close = on_close
        self._on_lines_count_changed = on_lines_count_changed
        self._log_events = bool(log_events)

        # Events received since the last tick, in arrival order.
        self._pending: list[InputEvent] = []
        self._last_result: Optional[FrameResult] = None

        self.setWindowTitle(str(title))
        self.resize(int(width), int(height))

        # Required to receive mouse move events without pressing buttons.
        self.setMouseTracking(True)

        lines = self._loop.lines
        lines.set_extent(self.width() / 2.0, self.height() / 2.0)

        self._controls = LinesCounterPanel(value=lines.count, max_count=lines.max_count, parent=self)
        self._controls.countChanged.connect(self.set_lines_count)  # type: ignore[arg-type]

        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(max(1, int(round(1000.0 / max(1.0, float(fps))))))
        self._frame_timer.timeout.connect(self.tick_frame)  # type: ignore[arg-type]
        self._frame_timer.start()
        self.tick_frame()

    @property
    def controls(self) -> LinesCounterPanel:
        return self._controls

    @property
    def buffer(self) -> SegmentBuffer:
        return self._buffer

    @property
    def last_result(self) -> Optional[FrameResult]:
        return self._last_result

    @property
    def pending_events(self) -> tuple[InputEvent, ...]:
        return tuple(self._pending)

    def queue_event(self, ev: InputEvent) -> None:
        self._pending.append(ev)

    def tick_frame(self) -> None:
        """
        Run one frame with every event queued since the previous tick.

        A failing frame is reported and skipped; the timer keeps running so one bad frame
        does not take the window down.
        """
        events = self._pending
        self._pending = []
        self._buffer.clear()
        try:
            self._last_result = self._loop.run_frame(events, self._buffer, (self.width(), self.height()))
        except Exception:
            traceback.print_exc()
        self.update()

    def set_lines_count(self, count: int) -> None:
        """Route a line-count change through the manager's validating setter."""
        lines = self._loop.lines
        try:
            lines.set_lines_count(count)
        except ValueError as e:
            print("[lines]", "rejected=", count, "error=", str(e), flush=True)
            self._controls.set_value(lines.count)
            return

        self._controls.set_value(lines.count)
        if self._log_events:
            print("[lines]", "count=", lines.count, flush=True)
        if self._on_lines_count_changed is not None:
            self._on_lines_count_changed(lines.count)

    def _queue_cursor(self, event) -> None:
        pos = event.position()
        self.queue_event(CursorMoved(x=float(pos.x()), y=float(pos.y())))

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        # Position first, so the press lands where the button went down even without a prior move.
        self._queue_cursor(event)
        button = _BUTTONS.get(event.button())
        if button is not None:
            self.queue_event(MouseButtonEvent(button=button, action="press"))

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        self._queue_cursor(event)

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        self._queue_cursor(event)
        button = _BUTTONS.get(event.button())
        if button is not None:
            self.queue_event(MouseButtonEvent(button=button, action="release"))

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        self._loop.lines.set_extent(self.width() / 2.0, self.height() / 2.0)
        super().resizeEvent(event)

    def paintEvent(self, event) -> None:  # type: ignore[override]
        _ = event
        p = QPainter(self)
        try:
            self._painter.paint(p, width=self.width(), height=self.height(), buffer=self._buffer)
        finally:
            p.end()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._frame_timer.stop()
        if self._on_close is not None:
            self._on_close()
        event.accept()
