# clipping/style.py
from __future__ import annotations

from dataclasses import dataclass

from clipping.primitives import Color
from config.config import AppConfig


@dataclass(frozen=True)
class StyleConfig:
    """
    Draw colors used by the frame loop.

    - selection_color: outline of the rectangle selection.
    - line_color: every segment while no selection exists.
    - inside_color / outside_color: segments classified Inside / Outside.
    - partial_color: the visible sub-segment of a PartlyInside segment (the rest of the
      segment is drawn in outside_color underneath).
    """
    selection_color: Color = "#000000"
    line_color: Color = "#3C3C3C"
    inside_color: Color = "#2E9E44"
    outside_color: Color = "#B4B4B4"
    partial_color: Color = "#D7263D"

    @staticmethod
    def from_config(cfg: AppConfig) -> "StyleConfig":
        return StyleConfig(
            selection_color=str(cfg.selection_color),
            line_color=str(cfg.line_color),
            inside_color=str(cfg.inside_color),
            outside_color=str(cfg.outside_color),
            partial_color=str(cfg.partial_color),
        )
