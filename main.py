"""Application composition root for the rectangle-selection clipping demo.

This module wires together:
- Config loading (and optional CLI overrides)
- The segment population (LinesManager)
- Selection builder + clipping engine + frame loop
- The Qt canvas window

Keeping construction in one place lets the clipping core stay free of configuration
and toolkit concerns.
"""

from __future__ import annotations

import argparse
import json
import sys
import traceback
from typing import Optional, Sequence

from clipping.engine import ClippingEngine
from clipping.frame_loop import FrameLoop
from clipping.lines_manager import LinesManager
from clipping.selection import RectangleSelectionBuilder
from clipping.style import StyleConfig
from config.config import AppConfig, load_config, patch_runtime_lines_config
from ui.canvas.ui_logic import run_canvas_ui


DEFAULT_CONFIG_PATH = "./config/config.json"


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="rectclip")
    p.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to config.json.")
    p.add_argument("--lines", type=int, default=None, help="Initial number of segments (overrides lines.count).")
    p.add_argument("--seed", type=int, default=None, help="Seed for segment generation (overrides lines.seed).")
    p.add_argument("--quiet", action="store_true", help="Disable [selection]/[clip]/[lines] diagnostics.")
    p.add_argument("--persist", action="store_true", help="Write line-count changes back to the config file.")
    return p.parse_args(argv)


def build_frame_loop(cfg: AppConfig, *, lines_count: int, seed: Optional[int], log_events: bool) -> FrameLoop:
    """
    Construct the toolkit-independent part of the app from validated config.

    Raises:
        ValueError: lines_count is outside [0, lines_max_count].
    """
    style = StyleConfig.from_config(cfg)

    lines = LinesManager(
        style=style,
        extent=(cfg.window_width / 2.0, cfg.window_height / 2.0),
        max_count=int(cfg.lines_max_count),
        seed=seed,
    )
    lines.set_lines_count(int(lines_count))

    return FrameLoop(
        builder=RectangleSelectionBuilder(min_diagonal=float(cfg.min_diagonal_px), log_events=log_events),
        lines=lines,
        engine=ClippingEngine(eps=float(cfg.boundary_eps_px)),
        style=style,
        log_events=log_events,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Application entry point.

    Returns:
        0 on normal exit, 2 when configuration or CLI overrides are invalid.
    """
    args = _parse_args(argv)

    try:
        cfg = load_config(args.config)
    except (OSError, ValueError, json.JSONDecodeError) as e:
        print(f"ERROR: unable to load config '{args.config}': {e}", file=sys.stderr)
        return 2

    log_events = bool(cfg.log_events) and not bool(args.quiet)
    lines_count = int(args.lines) if args.lines is not None else int(cfg.lines_count)
    seed = int(args.seed) if args.seed is not None else cfg.lines_seed

    try:
        frame_loop = build_frame_loop(cfg, lines_count=lines_count, seed=seed, log_events=log_events)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    def on_lines_count_changed(count: int) -> None:
        """Persist counter changes when --persist is set; never let a write error reach Qt."""
        if not args.persist:
            return
        try:
            patch_runtime_lines_config(args.config, lines_count=count)
        except Exception:
            traceback.print_exc()

    return run_canvas_ui(
        frame_loop=frame_loop,
        title=cfg.window_title,
        width=int(cfg.window_width),
        height=int(cfg.window_height),
        fps=float(cfg.fps),
        background=cfg.background_color,
        line_width_px=int(cfg.line_width_px),
        on_lines_count_changed=on_lines_count_changed,
        log_events=log_events,
    )


if __name__ == "__main__":
    raise SystemExit(main())
