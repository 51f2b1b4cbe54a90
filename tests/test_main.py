"""Tests for the composition root (no window is opened)."""

import json

import pytest

import main
from config.config import parse_config


@pytest.fixture
def config_file(tmp_path, raw_config):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(raw_config), encoding="utf-8")
    return path


@pytest.fixture
def fake_ui(monkeypatch):
    """Replace the Qt entry point and capture what main() passes to it."""
    captured = {}

    def run_canvas_ui(**kwargs):
        captured.update(kwargs)
        return 0

    monkeypatch.setattr(main, "run_canvas_ui", run_canvas_ui)
    return captured


class TestBuildFrameLoop:
    """build_frame_loop from a validated config."""

    def test_wires_config_values(self, raw_config):
        cfg = parse_config(raw_config)
        loop = main.build_frame_loop(cfg, lines_count=6, seed=5, log_events=False)
        assert loop.lines.count == 6
        assert loop.lines.max_count == 100

    def test_count_above_max_is_rejected(self, raw_config):
        cfg = parse_config(raw_config)
        with pytest.raises(ValueError):
            main.build_frame_loop(cfg, lines_count=1000, seed=None, log_events=False)


class TestMain:
    """main() argument handling and exit codes."""

    def test_missing_config_exits_2(self, tmp_path, capsys):
        code = main.main(["--config", str(tmp_path / "missing.json")])
        assert code == 2
        assert "ERROR: unable to load config" in capsys.readouterr().err

    def test_invalid_config_exits_2(self, tmp_path, raw_config):
        raw_config["lines"]["count"] = -3
        path = tmp_path / "config.json"
        path.write_text(json.dumps(raw_config), encoding="utf-8")
        assert main.main(["--config", str(path)]) == 2

    def test_lines_override_out_of_range_exits_2(self, config_file, fake_ui):
        assert main.main(["--config", str(config_file), "--lines", "500"]) == 2
        assert fake_ui == {}

    def test_runs_ui_with_config_values(self, config_file, fake_ui):
        assert main.main(["--config", str(config_file), "--lines", "3"]) == 0
        assert fake_ui["title"] == "rectclip"
        assert (fake_ui["width"], fake_ui["height"]) == (800, 600)
        assert fake_ui["frame_loop"].lines.count == 3

    def test_quiet_disables_diagnostics(self, config_file, fake_ui, raw_config):
        raw_config["diagnostics"]["log_events"] = True
        config_file.write_text(json.dumps(raw_config), encoding="utf-8")
        main.main(["--config", str(config_file), "--quiet"])
        assert fake_ui["log_events"] is False

    def test_seed_override_is_deterministic(self, config_file, fake_ui):
        main.main(["--config", str(config_file), "--seed", "9"])
        first = fake_ui["frame_loop"].lines.lines
        main.main(["--config", str(config_file), "--seed", "9"])
        assert fake_ui["frame_loop"].lines.lines == first

    def test_persist_writes_count_back(self, config_file, fake_ui):
        main.main(["--config", str(config_file), "--persist"])
        fake_ui["on_lines_count_changed"](42)
        assert json.loads(config_file.read_text(encoding="utf-8"))["lines"]["count"] == 42

    def test_without_persist_config_is_untouched(self, config_file, fake_ui):
        before = config_file.read_text(encoding="utf-8")
        main.main(["--config", str(config_file)])
        fake_ui["on_lines_count_changed"](42)
        assert config_file.read_text(encoding="utf-8") == before
