import json
import logging

import pytest

from rainbox.core.config import ConfigManager, RenderConfig, SimulationConfig, hex_to_bgr


def test_missing_file_gives_defaults(tmp_path):
    manager = ConfigManager(str(tmp_path / "nope.json"))
    assert manager.render_config() == RenderConfig()
    assert manager.simulation_config() == SimulationConfig()
    assert manager.default_rain_hours == 3.0


def test_file_values_override_defaults(tmp_path):
    path = tmp_path / "rainbox.json"
    path.write_text(json.dumps({
        "block_pixels": 10,
        "colors": {"water": "#0000ff", "magenta": "#ff00ff"},
        "clamp_final_step": True,
        "unknown": 1,
    }))
    manager = ConfigManager(str(path))

    render = manager.render_config()
    assert render.block_pixels == 10.0
    assert render.water_color == "#0000ff"
    assert render.land_color == "#eed994"
    assert manager.simulation_config().clamp_final_step is True
    assert "unknown" not in manager.data


def test_malformed_file_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "rainbox.json"
    path.write_text("{not json")
    with caplog.at_level(logging.WARNING, logger="rainbox"):
        manager = ConfigManager(str(path))
    assert manager.render_config() == RenderConfig()
    assert "using defaults" in caplog.text


def test_save_and_reload(tmp_path):
    path = tmp_path / "sub" / "rainbox.json"
    manager = ConfigManager(str(path))
    manager.data["frame_interval_ms"] = 40
    manager.save()

    assert ConfigManager(str(path)).simulation_config().frame_interval_ms == 40


def test_hex_to_bgr():
    assert hex_to_bgr("#0c60ae") == (0xae, 0x60, 0x0c)
    with pytest.raises(ValueError):
        hex_to_bgr("0c60ae")
    with pytest.raises(ValueError):
        hex_to_bgr("#zzzzzz")


def test_render_config_rejects_bad_values():
    with pytest.raises(ValueError):
        RenderConfig(block_pixels=0)
    with pytest.raises(ValueError):
        RenderConfig(sky_color="blue")
