import argparse
import logging
import sys

from rainbox.core.canvas import Canvas
from rainbox.core.config import CONFIG_FILE, ConfigManager
from rainbox.core.errors import LandscapeParseError
from rainbox.core.landscape import parse_landscape, parse_rain_hours
from rainbox.core.scheduler import ManualScheduler
from rainbox.core.world import World
from rainbox.logging_config import setup_logging
from rainbox.modules.renderer import Renderer
from rainbox.modules.solver import make_solver

logger = logging.getLogger(__name__)


def positive_float(text):
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{text!r} is not a number") from None
    if not value > 0 or value == float("inf"):
        raise argparse.ArgumentTypeError(f"{text!r} must be a positive number of milliseconds")
    return value


def build_parser():
    parser = argparse.ArgumentParser(
        prog="rainbox", description="Animate rain flooding a block landscape.")
    parser.add_argument("--config", default=CONFIG_FILE, help="JSON config file")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    parser.add_argument("--headless", action="store_true",
                        help="Run the simulation without a window")
    parser.add_argument("--landscape", default=None, help='Block heights, e.g. "1 3 1 0 2"')
    parser.add_argument("--rain", default=None, help="Hours of rain")
    parser.add_argument("--output", default=None, help="PNG for the final frame (headless)")
    parser.add_argument("--frame-ms", type=positive_float, default=None,
                        help="Synthetic frame interval for headless runs")
    return parser


def run_headless(config_manager, landscape_text, rain_text, output=None, frame_ms=None):
    """Runs a whole simulation on synthetic timestamps. Returns the finished world."""
    sim_config = config_manager.simulation_config()
    if frame_ms is None:
        frame_ms = sim_config.frame_interval_ms
    if not frame_ms > 0:
        raise ValueError(f"Frame interval must be positive, got {frame_ms}")
    landscape = parse_landscape(landscape_text)
    rain_hours = parse_rain_hours(rain_text)

    canvas = Canvas()
    scheduler = ManualScheduler()
    world = World(
        landscape, rain_hours,
        canvas=canvas,
        renderer=Renderer(config_manager.render_config()),
        solver=make_solver(sim_config.solver_substep_hours),
        scheduler=scheduler,
        config=sim_config,
    )
    world.start()
    frames = scheduler.run(frame_ms)
    logger.info("Rain finished after %d frames.", frames)

    if output:
        canvas.save(output)
    return world


def run_gui(config_manager, landscape_text=None, rain_text=None):
    from PySide6.QtWidgets import QApplication
    from rainbox.ui.main_window import RainMainWindow

    app = QApplication.instance() or QApplication(sys.argv)
    app.setStyle('Fusion')

    window = RainMainWindow(config_manager)
    if landscape_text is not None:
        window.landscape_edit.setText(landscape_text)
    if rain_text is not None:
        window.rain_edit.setText(rain_text)
    window.show()
    return app.exec()


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)
    config_manager = ConfigManager(args.config)

    if not args.headless:
        return run_gui(config_manager, args.landscape, args.rain)

    landscape_text = args.landscape if args.landscape is not None else config_manager.default_landscape
    rain_text = args.rain if args.rain is not None else str(config_manager.default_rain_hours)
    try:
        run_headless(config_manager, landscape_text, rain_text, args.output, args.frame_ms)
    except LandscapeParseError as e:
        logger.error("%s", e)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
