"""
Y-axis scaling for rate charts.

Picks a tick interval on base-1024 boundaries so a rate axis never shows
more than MAX_TICKS labels.
"""

import math

from ..core.errors import NumericError
from ..web.template_helpers import RATE_BASE

MAX_TICKS = 10


def pick_interval(max_value: float) -> float:
    """
    Choose the y-axis tick spacing for a chart whose largest sample is max_value.

    Starts at the largest power of 1024 not above max_value and doubles it
    until at most MAX_TICKS intervals fit under max_value.

    Raises:
        NumericError: max_value is NaN, infinite or not positive
    """
    if not math.isfinite(max_value) or max_value <= 0:
        raise NumericError(f"cannot scale axis for maximum {max_value!r}")

    c = max(0, math.floor(math.log(max_value) / math.log(RATE_BASE)))
    interval = float(RATE_BASE ** c)
    while max_value / interval > MAX_TICKS:
        interval *= 2
    return interval


def axis_max(max_value: float, interval: float) -> float:
    """Displayed axis maximum: max_value rounded up to a whole interval."""
    return math.ceil(max_value / interval) * interval
