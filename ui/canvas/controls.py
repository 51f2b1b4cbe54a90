# ui/canvas/controls.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QHBoxLayout, QLabel, QSpinBox, QWidget


@dataclass(frozen=True)
class ControlsConfig:
    """
    Layout of the line-counter panel in the canvas' top-left corner.

    - margin_px: distance from the canvas' top/left edges.
    - spin_w_px/spin_h_px: size of the number box.
    """
    margin_px: int = 20
    spin_w_px: int = 120
    spin_h_px: int = 30


class LinesCounterPanel(QWidget):
    """
    "Lines" number box that lets the user change how many segments are managed.

    The spin box range is [0, max_count], so every value it emits is valid for
    `LinesManager.set_lines_count`. Programmatic updates via set_value() do not re-emit
    countChanged, which keeps config/CLI-driven updates from echoing back.
    """

    countChanged = Signal(int)

    def __init__(
        self,
        *,
        value: int,
        max_count: int,
        cfg: ControlsConfig = ControlsConfig(),
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._cfg = cfg

        self._label = QLabel("Lines", self)
        self._spin = QSpinBox(self)
        self._spin.setRange(0, int(max_count))
        self._spin.setValue(int(value))
        self._spin.setFixedSize(int(cfg.spin_w_px), int(cfg.spin_h_px))
        self._spin.valueChanged.connect(self.countChanged.emit)  # type: ignore[arg-type]

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._label)
        layout.addWidget(self._spin)

        self.move(int(cfg.margin_px), int(cfg.margin_px))
        self.adjustSize()

    @property
    def spin_box(self) -> QSpinBox:
        return self._spin

    def value(self) -> int:
        return int(self._spin.value())

    def set_value(self, value: int) -> None:
        blocked = self._spin.blockSignals(True)
        try:
            self._spin.setValue(int(value))
        finally:
            self._spin.blockSignals(blocked)
