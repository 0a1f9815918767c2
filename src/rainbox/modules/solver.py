"""
Water leveling on a one-dimensional block landscape.

Rain falls at one block per hour on every segment. A parcel of water runs
downhill over the current water surface, splitting evenly when it lands on
a crest, until it reaches a flat region whose neighbours are both higher.
There it raises the region up to the lower of the two rims; whatever does
not fit spills over that rim and keeps running. Both landscape ends are
infinitely high walls, so no water is ever lost.
"""
import math
from functools import partial

import numpy as np

DEFAULT_SUBSTEP_HOURS = 0.05


def _plateau(levels, i):
    """Bounds (inclusive) of the flat run of equal levels containing segment i."""
    lo = hi = i
    while lo > 0 and levels[lo - 1] == levels[i]:
        lo -= 1
    while hi < len(levels) - 1 and levels[hi + 1] == levels[i]:
        hi += 1
    return lo, hi


def _settle(levels, pending):
    """Routes the water volumes in `pending` (one per segment) until all of it rests."""
    n = len(levels)
    while np.any(pending > 0):
        moving = np.zeros_like(pending)
        for i in np.flatnonzero(pending > 0):
            volume = pending[i]
            lo, hi = _plateau(levels, i)
            level = levels[i]
            left = levels[lo - 1] if lo > 0 else math.inf
            right = levels[hi + 1] if hi < n - 1 else math.inf

            if left < level and right < level:
                moving[lo - 1] += volume / 2
                moving[hi + 1] += volume / 2
            elif left < level:
                moving[lo - 1] += volume
            elif right < level:
                moving[hi + 1] += volume
            else:
                width = hi - lo + 1
                rim = min(left, right)
                room = (rim - level) * width
                if volume <= room:
                    levels[lo:hi + 1] = min(level + volume / width, rim)
                else:
                    # Full up to the rim, the rest spills once the plateau merges with it
                    levels[lo:hi + 1] = rim
                    moving[i] += volume - room
        pending = moving
    return levels


def solve_landscape(surface, rain_hours, substep_hours=DEFAULT_SUBSTEP_HOURS):
    """
    Returns the water surface after `rain_hours` more hours of rain.

    `surface` is the current water surface per segment (initially the bare
    landscape). The input is never modified. Zero, negative or non-finite
    rain leaves the surface as it is.
    """
    levels = np.array(surface, dtype=np.float64)
    if levels.size == 0 or not math.isfinite(rain_hours) or rain_hours <= 0:
        return levels
    if not np.all(np.isfinite(levels)):
        return levels

    substeps = max(1, math.ceil(rain_hours / substep_hours))
    dt = rain_hours / substeps
    for _ in range(substeps):
        _settle(levels, np.full(levels.size, dt))
    return levels


def make_solver(substep_hours=DEFAULT_SUBSTEP_HOURS):
    return partial(solve_landscape, substep_hours=substep_hours)
