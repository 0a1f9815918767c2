import cv2
import pytest

from rainbox.core.config import ConfigManager
from rainbox.core.world import WorldState
from rainbox.main import build_parser, main, run_headless


def test_headless_run_writes_final_frame(tmp_path):
    output = tmp_path / "final.png"
    config = ConfigManager(str(tmp_path / "missing.json"))
    world = run_headless(config, "2,0 3", "0.5", output=str(output), frame_ms=100)

    assert world.state is WorldState.FINISHED
    assert world.remaining_rain_hours <= 0
    image = cv2.imread(str(output))
    assert image.shape == (120, 90, 3)


def test_main_headless_exit_codes(tmp_path):
    config = str(tmp_path / "missing.json")
    assert main(["--headless", "--config", config, "--landscape", "1 1", "--rain", "0.2"]) == 0
    assert main(["--headless", "--config", config, "--landscape", "a,b", "--rain", "1"]) == 2


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert not args.headless
    assert args.log_level == "INFO"
    assert args.landscape is None


def test_frame_ms_must_be_positive(tmp_path, capsys):
    config = str(tmp_path / "missing.json")
    for bad in ("0", "-16", "fast"):
        with pytest.raises(SystemExit) as exc_info:
            main(["--headless", "--config", config, "--frame-ms", bad])
        assert exc_info.value.code == 2
    assert "--frame-ms" in capsys.readouterr().err


def test_run_headless_rejects_non_positive_interval(tmp_path):
    config = ConfigManager(str(tmp_path / "missing.json"))
    with pytest.raises(ValueError):
        run_headless(config, "1 1", "1", frame_ms=0)


def test_parse_error_is_logged_to_stderr(tmp_path, capsys):
    config = str(tmp_path / "missing.json")
    assert main(["--headless", "--config", config, "--landscape", "a,b"]) == 2
    captured = capsys.readouterr()
    assert "Cannot parse 'a' as number" in captured.err
    assert "Cannot parse" not in captured.out
