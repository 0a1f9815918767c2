import logging
import math

import cv2
import numpy as np

from rainbox.core.config import hex_to_bgr

logger = logging.getLogger(__name__)


def _pixel_size(value):
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        return 0
    return int(round(value))


class Canvas:
    """Fixed-size BGR raster the renderer paints rectangles on."""

    def __init__(self, width=0, height=0):
        self.fill_color = (0, 0, 0)
        self.pixels = np.zeros((0, 0, 3), dtype=np.uint8)
        self.set_size(width, height)

    @property
    def width(self):
        return self.pixels.shape[1]

    @property
    def height(self):
        return self.pixels.shape[0]

    def set_size(self, width, height):
        """Resizes the raster. Like an HTML canvas, this also clears it."""
        w, h = _pixel_size(width), _pixel_size(height)
        self.pixels = np.zeros((h, w, 3), dtype=np.uint8)

    def set_fill_color(self, color):
        self.fill_color = hex_to_bgr(color)

    def fill_rect(self, x, y, width, height):
        if not all(math.isfinite(v) for v in (x, y, width, height)):
            return
        x0, y0 = int(round(x)), int(round(y))
        x1, y1 = int(round(x + width)), int(round(y + height))
        # Clip to the raster, cv2.rectangle end points are inclusive
        x0, y0 = max(x0, 0), max(y0, 0)
        x1, y1 = min(x1, self.width), min(y1, self.height)
        if x1 <= x0 or y1 <= y0:
            return
        cv2.rectangle(self.pixels, (x0, y0), (x1 - 1, y1 - 1), self.fill_color, -1)

    def save(self, filename):
        if not cv2.imwrite(filename, self.pixels):
            raise OSError(f"Could not write canvas to {filename}")
        logger.info("Canvas (%d x %d) saved to %s", self.width, self.height, filename)
