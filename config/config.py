"""Configuration schema and JSON validation helpers.

`load_config` turns `config/config.json` into an immutable `AppConfig` for the canvas,
the clipping engine and the segment population. `patch_runtime_lines_config` writes the
line counter back when the app runs with --persist.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
import re
from typing import Any, Dict, Optional


_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


@dataclass(frozen=True)
class AppConfig:
    """
    Validated rectclip settings. Built once at startup by `load_config`.

    JSON layout:

    {
      "window": { "title": "rectclip", "width": 800, "height": 600, "fps": 60, "background": "#FFFFFF" },
      "selection": { "boundary_eps_px": 2.0, "min_diagonal_px": 0.0 },
      "lines": { "count": 10, "max_count": 100, "seed": 1337 },
      "style": {
        "selection_color": "#000000",
        "line_color": "#3C3C3C",
        "inside_color": "#2E9E44",
        "outside_color": "#B4B4B4",
        "partial_color": "#D7263D",
        "line_width_px": 2
      },
      "diagnostics": { "log_events": true }
    }

    "window" and "lines" are required; the other sections fall back to defaults.
    """

    # -----------------------------
    # Window / frame clock
    # -----------------------------
    window_title: str
    window_width: int
    window_height: int
    fps: float
    background_color: str

    # -----------------------------
    # Selection + clipping
    # -----------------------------
    # Tolerance (centered pixels) used to accept an intersection as lying on a border.
    boundary_eps_px: float
    # Drags shorter than this do not produce a selection (0 disables the check).
    min_diagonal_px: float

    # -----------------------------
    # Segment population
    # -----------------------------
    lines_count: int
    lines_max_count: int
    lines_seed: Optional[int]

    # -----------------------------
    # Style
    # -----------------------------
    selection_color: str
    line_color: str
    inside_color: str
    outside_color: str
    partial_color: str
    line_width_px: int

    # -----------------------------
    # Diagnostics
    # -----------------------------
    log_events: bool


def _require_obj(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    """
    Required top-level section ("window", "lines").
    """
    v = raw.get(key)
    if not isinstance(v, dict):
        raise ValueError(f"Missing or invalid '{key}' object in config")
    return v


def _opt_obj(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Optional section: missing/None => empty dict, anything but an object => error."""
    v = raw.get(key)
    if v is None:
        return {}
    if isinstance(v, dict):
        return v
    raise ValueError(f"Missing or invalid '{key}' object in config (expected object)")


def _require_num(v: Any, key: str) -> float:
    """JSON number as float. bool is rejected even though it is an int subclass."""
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise ValueError(f"Missing or invalid '{key}' (expected number)")
    return float(v)


def _opt_bool(v: Any, key: str, default: bool) -> bool:
    """Optional bool; the strings "true"/"false" are rejected."""
    if v is None:
        return default
    if isinstance(v, bool):
        return v
    raise ValueError(f"Missing or invalid '{key}' (expected boolean)")


def _opt_int(v: Any, key: str, default: int) -> int:
    """Optional JSON number truncated to int."""
    if v is None:
        return default
    if isinstance(v, bool):
        raise ValueError(f"Missing or invalid '{key}' (expected number)")
    if isinstance(v, (int, float)):
        return int(v)
    raise ValueError(f"Missing or invalid '{key}' (expected number)")


def _opt_str(v: Any, key: str, default: str) -> str:
    if v is None:
        return default
    if isinstance(v, str) and v.strip():
        return v
    raise ValueError(f"Missing or invalid '{key}' (expected non-empty string)")


def _opt_color(v: Any, key: str, default: str) -> str:
    """
    Optional "#RRGGBB" color with default.

    Normalized to uppercase so colors compare equal regardless of how they were typed.
    """
    s = _opt_str(v, key, default).strip()
    if not _HEX_COLOR.match(s):
        raise ValueError(f"Invalid '{key}' (expected color like '#RRGGBB')")
    return s.upper()


def load_config(path: str) -> AppConfig:
    """
    Read `path` and validate it into an `AppConfig`.

    Raises:
        ValueError: a section or value is missing, mistyped or out of range.
        OSError: file cannot be opened/read.
        json.JSONDecodeError: invalid JSON.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw: Dict[str, Any] = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError("Config root must be a JSON object")
    return parse_config(raw)


def parse_config(raw: Dict[str, Any]) -> AppConfig:
    """Validate an already-decoded config mapping (see `load_config`)."""
    # Required sections.
    window = _require_obj(raw, "window")
    lines = _require_obj(raw, "lines")

    # Optional sections.
    selection = _opt_obj(raw, "selection")
    style = _opt_obj(raw, "style")
    diagnostics = _opt_obj(raw, "diagnostics")

    # ---- Window ----
    window_title = _opt_str(window.get("title"), "window.title", "rectclip").strip()
    window_width = int(_require_num(window.get("width"), "window.width"))
    window_height = int(_require_num(window.get("height"), "window.height"))
    fps = _require_num(window.get("fps", 60), "window.fps")
    background_color = _opt_color(window.get("background"), "window.background", "#FFFFFF")

    if window_width <= 0 or window_height <= 0:
        raise ValueError("window.width and window.height must be > 0")
    if fps <= 0.0:
        raise ValueError("window.fps must be > 0")

    # ---- Selection ----
    boundary_eps_px = _require_num(selection.get("boundary_eps_px", 2.0), "selection.boundary_eps_px")
    min_diagonal_px = _require_num(selection.get("min_diagonal_px", 0.0), "selection.min_diagonal_px")

    if boundary_eps_px <= 0.0:
        raise ValueError("selection.boundary_eps_px must be > 0")
    if min_diagonal_px < 0.0:
        raise ValueError("selection.min_diagonal_px must be >= 0")

    # ---- Lines ----
    lines_count = int(_require_num(lines.get("count"), "lines.count"))
    lines_max_count = _opt_int(lines.get("max_count"), "lines.max_count", 100)

    seed_raw = lines.get("seed")
    lines_seed: Optional[int]
    if seed_raw is None:
        lines_seed = None
    else:
        lines_seed = int(_require_num(seed_raw, "lines.seed"))
        if lines_seed < 0:
            raise ValueError("lines.seed must be >= 0")

    if lines_max_count <= 0:
        raise ValueError("lines.max_count must be > 0")
    if not (0 <= lines_count <= lines_max_count):
        raise ValueError("lines.count must be in [0, lines.max_count]")

    # ---- Style ----
    selection_color = _opt_color(style.get("selection_color"), "style.selection_color", "#000000")
    line_color = _opt_color(style.get("line_color"), "style.line_color", "#3C3C3C")
    inside_color = _opt_color(style.get("inside_color"), "style.inside_color", "#2E9E44")
    outside_color = _opt_color(style.get("outside_color"), "style.outside_color", "#B4B4B4")
    partial_color = _opt_color(style.get("partial_color"), "style.partial_color", "#D7263D")
    line_width_px = _opt_int(style.get("line_width_px"), "style.line_width_px", 2)

    if line_width_px < 1:
        raise ValueError("style.line_width_px must be >= 1")

    # ---- Diagnostics ----
    log_events = _opt_bool(diagnostics.get("log_events"), "diagnostics.log_events", True)

    return AppConfig(
        window_title=window_title,
        window_width=window_width,
        window_height=window_height,
        fps=fps,
        background_color=background_color,
        boundary_eps_px=boundary_eps_px,
        min_diagonal_px=min_diagonal_px,
        lines_count=lines_count,
        lines_max_count=lines_max_count,
        lines_seed=lines_seed,
        selection_color=selection_color,
        line_color=line_color,
        inside_color=inside_color,
        outside_color=outside_color,
        partial_color=partial_color,
        line_width_px=line_width_px,
        log_events=log_events,
    )


def patch_runtime_lines_config(path: str, *, lines_count: Optional[int] = None) -> None:
    """Persist the runtime-updated line count into config.json."""
    p = Path(path)
    raw: Dict[str, Any]
    with p.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    lines = raw.get("lines")
    if not isinstance(lines, dict):
        lines = {}
        raw["lines"] = lines

    if lines_count is not None:
        lines["count"] = max(0, int(lines_count))

    with p.open("w", encoding="utf-8") as f:
        json.dump(raw, f, indent=2)
        f.write("\n")
