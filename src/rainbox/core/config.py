import copy
import json
import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

CONFIG_FILE = "assets/config/rainbox.json"


def hex_to_bgr(color):
    """Converts '#rrggbb' into the (b, g, r) tuple OpenCV draws with."""
    if not isinstance(color, str) or len(color) != 7 or not color.startswith("#"):
        raise ValueError(f"Color must look like '#rrggbb', got {color!r}")
    try:
        r, g, b = (int(color[i:i + 2], 16) for i in (1, 3, 5))
    except ValueError as e:
        raise ValueError(f"Color must look like '#rrggbb', got {color!r}") from e
    return (b, g, r)


@dataclass(frozen=True)
class RenderConfig:
    block_pixels: float = 30.0
    land_color: str = "#eed994"
    water_color: str = "#0c60ae"
    sky_color: str = "#edf4f4"
    cloud_color: str = "#b0b8bb"

    def __post_init__(self):
        if not self.block_pixels > 0:
            raise ValueError(f"block_pixels must be positive, got {self.block_pixels}")
        for color in (self.land_color, self.water_color, self.sky_color, self.cloud_color):
            hex_to_bgr(color)


@dataclass(frozen=True)
class SimulationConfig:
    frame_interval_ms: int = 16
    # One simulated hour of rain per real second.
    ms_per_rain_hour: float = 1000.0
    solver_substep_hours: float = 0.05
    clamp_final_step: bool = False


class ConfigManager:
    def __init__(self, path=CONFIG_FILE):
        self.path = path
        self.default_config = {
            "block_pixels": RenderConfig.block_pixels,
            "colors": {
                "land": RenderConfig.land_color,
                "water": RenderConfig.water_color,
                "sky": RenderConfig.sky_color,
                "cloud": RenderConfig.cloud_color,
            },
            "frame_interval_ms": SimulationConfig.frame_interval_ms,
            "ms_per_rain_hour": SimulationConfig.ms_per_rain_hour,
            "solver_substep_hours": SimulationConfig.solver_substep_hours,
            "clamp_final_step": SimulationConfig.clamp_final_step,
            "default_landscape": "1 3 1 0 2 5 3 4 1 1 2",
            "default_rain_hours": 3.0,
        }
        self.data = self.load()

    def load(self):
        data = copy.deepcopy(self.default_config)
        if not os.path.exists(self.path):
            logger.debug("No config at %s, using defaults.", self.path)
            return data
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                stored = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Cannot read config %s (%s), using defaults.", self.path, e)
            return data
        if not isinstance(stored, dict):
            logger.warning("Config %s is not a JSON object, using defaults.", self.path)
            return data

        for key, value in stored.items():
            if key not in data:
                logger.debug("Ignoring unknown config key %r.", key)
            elif key == "colors" and isinstance(value, dict):
                data["colors"].update({k: v for k, v in value.items() if k in data["colors"]})
            else:
                data[key] = value
        logger.info("Loaded config from %s.", self.path)
        return data

    def save(self, path=None):
        path = path or self.path
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.data, f, indent=4)

    def render_config(self):
        colors = self.data["colors"]
        return RenderConfig(
            block_pixels=float(self.data["block_pixels"]),
            land_color=colors["land"],
            water_color=colors["water"],
            sky_color=colors["sky"],
            cloud_color=colors["cloud"],
        )

    def simulation_config(self):
        return SimulationConfig(
            frame_interval_ms=int(self.data["frame_interval_ms"]),
            ms_per_rain_hour=float(self.data["ms_per_rain_hour"]),
            solver_substep_hours=float(self.data["solver_substep_hours"]),
            clamp_final_step=bool(self.data["clamp_final_step"]),
        )

    @property
    def default_landscape(self):
        return str(self.data["default_landscape"])

    @property
    def default_rain_hours(self):
        return float(self.data["default_rain_hours"])
