import enum
import logging
import math
from dataclasses import dataclass

import numpy as np

from rainbox.core.config import SimulationConfig
from rainbox.core.errors import SolverContractError, WorldFinishedError

logger = logging.getLogger(__name__)


class WorldState(enum.Enum):
    RAINING = "raining"
    FINISHED = "finished"


class StepOutcome(enum.Enum):
    CONTINUE = "continue"
    FINISHED = "finished"


@dataclass(frozen=True)
class CanvasGeometry:
    width: float
    height: float

    @classmethod
    def for_landscape(cls, landscape, rain_hours, block_pixels):
        """Room for every segment side by side and for the water column of all the rain."""
        width = len(landscape) * block_pixels
        max_segment_height = max([0.0, *landscape])
        height = math.ceil(max_segment_height + rain_hours) * block_pixels \
            if math.isfinite(max_segment_height + rain_hours) else 0.0
        return cls(width=width, height=max(height, 0.0))


class World:
    """
    State of one rain simulation run.

    A world is created per run and discarded when it finishes. Between frames
    the only reference to it is the continuation held by the scheduler, so
    nothing else can touch the surface or the budget while a step is pending.
    """

    def __init__(self, landscape, rain_hours, *, canvas, renderer, solver, scheduler,
                 on_finished=None, on_frame=None, config=None):
        self.config = config or SimulationConfig()
        self._landscape = np.array(landscape, dtype=np.float64)
        self._surface = self._landscape.copy()
        self._remaining_rain_hours = float(rain_hours)
        self._last_timestamp = None
        self._steps = 0
        self.canvas = canvas
        self.renderer = renderer
        self.solver = solver
        self.scheduler = scheduler
        self.on_finished = on_finished
        self.on_frame = on_frame
        self._state = WorldState.RAINING if self._remaining_rain_hours > 0 else WorldState.FINISHED

        logger.info("Simulate world with landscape: %s and %s hours of rain.",
                    self._landscape.tolist(), rain_hours)
        self._geometry = CanvasGeometry.for_landscape(
            self._landscape.tolist(), self._remaining_rain_hours,
            renderer.config.block_pixels)
        logger.info("Setting canvas size (w x h) to %s x %s.",
                    self._geometry.width, self._geometry.height)
        self.canvas.set_size(self._geometry.width, self._geometry.height)
        self.draw_land_sky()
        self._frame_drawn()

    @property
    def landscape(self):
        return self._landscape.copy()

    @property
    def surface(self):
        return self._surface.copy()

    @property
    def remaining_rain_hours(self):
        return self._remaining_rain_hours

    @property
    def last_timestamp(self):
        return self._last_timestamp

    @property
    def steps(self):
        return self._steps

    @property
    def state(self):
        return self._state

    @property
    def geometry(self):
        return self._geometry

    @property
    def raining(self):
        return self._remaining_rain_hours > 0

    def draw_land_sky(self):
        self.renderer.draw_terrain_and_backdrop(self.canvas, self._landscape, self.raining)

    def draw_water(self):
        self.renderer.draw_water(self.canvas, self._landscape, self._surface)

    def start(self):
        """Schedules the first step, or finishes straight away when there is no rain."""
        self.schedule_next_or_finish()

    def schedule_next_or_finish(self):
        if not self.raining:
            self._finish()
            return
        self.scheduler.request_step(self.step)

    def step(self, timestamp):
        """Scheduled once per frame with the frame timestamp in milliseconds."""
        if self._last_timestamp is None:
            elapsed_ms = 0.0  # first frame only warms up
        else:
            elapsed_ms = timestamp - self._last_timestamp
        self._last_timestamp = timestamp
        logger.debug("step, elapsed_ms: %s", elapsed_ms)

        if self.tick(elapsed_ms / self.config.ms_per_rain_hour) is StepOutcome.CONTINUE:
            self.scheduler.request_step(self.step)

    def tick(self, rain_hours):
        """Advances the simulation by `rain_hours` and redraws."""
        if self._state is WorldState.FINISHED:
            raise WorldFinishedError("The rain is over, start a new world")

        if self.config.clamp_final_step:
            rain_hours = min(rain_hours, self._remaining_rain_hours)
        surface = np.asarray(self.solver(self._surface.copy(), rain_hours), dtype=np.float64)
        if surface.shape != self._landscape.shape:
            raise SolverContractError(
                f"Solver returned {surface.size} segments, expected {self._landscape.size}")
        self._surface = surface
        self._remaining_rain_hours -= rain_hours
        self._steps += 1

        if not self.raining:
            # Switch from cloudy sky to clear sky
            self.draw_land_sky()
        self.draw_water()
        self._frame_drawn()

        if not self.raining:
            self._finish()
            return StepOutcome.FINISHED
        return StepOutcome.CONTINUE

    def _frame_drawn(self):
        if self.on_frame is not None:
            self.on_frame(self.canvas)

    def _finish(self):
        self._state = WorldState.FINISHED
        logger.info("Final landscape: %s.", self._surface.tolist())
        if self.on_finished is not None:
            self.on_finished()
