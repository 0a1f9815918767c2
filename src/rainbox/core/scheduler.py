import logging
from typing import Callable, Optional, Protocol

from PySide6.QtCore import QElapsedTimer, QTimer

from rainbox.core.errors import SchedulerError

logger = logging.getLogger(__name__)

Continuation = Callable[[float], None]


class FrameScheduler(Protocol):
    def request_step(self, continuation: Continuation) -> None:
        """Invoke `continuation` once, at the next frame, with a ms timestamp."""


class QtFrameScheduler:
    """Drives the animation from the Qt event loop.

    A single-shot timer stands in for the display refresh. Each request fires
    exactly once; looping means requesting again from inside the continuation.
    """

    def __init__(self, interval_ms: int = 16):
        self.interval_ms = interval_ms
        self.clock = QElapsedTimer()
        self.clock.start()

    def request_step(self, continuation: Continuation) -> None:
        QTimer.singleShot(self.interval_ms, lambda: continuation(self.now()))

    def now(self) -> float:
        return self.clock.nsecsElapsed() / 1e6


class ManualScheduler:
    """Delivers synthetic timestamps, for headless runs and tests."""

    def __init__(self):
        self._pending: Optional[Continuation] = None
        self.last_timestamp: Optional[float] = None
        self.requests = 0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def request_step(self, continuation: Continuation) -> None:
        if self._pending is not None:
            raise SchedulerError("A step is already pending")
        self._pending = continuation
        self.requests += 1

    def deliver(self, timestamp: float) -> None:
        if self._pending is None:
            raise SchedulerError("No step is pending")
        if self.last_timestamp is not None and timestamp < self.last_timestamp:
            raise SchedulerError(
                f"Timestamp {timestamp} is earlier than the previous {self.last_timestamp}")
        continuation, self._pending = self._pending, None
        self.last_timestamp = timestamp
        continuation(timestamp)

    def run(self, frame_interval_ms: float, start: float = 0.0,
            max_frames: Optional[int] = None) -> int:
        """Delivers evenly spaced frames until nothing is pending. Returns the frame count."""
        frames = 0
        timestamp = start
        while self.pending and (max_frames is None or frames < max_frames):
            self.deliver(timestamp)
            frames += 1
            timestamp += frame_interval_ms
        logger.debug("Delivered %d frames", frames)
        return frames
