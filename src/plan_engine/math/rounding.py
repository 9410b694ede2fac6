"""Fixed-precision rounding shared by the aggregator and the planner.

Half-up rounding through ``Decimal`` keeps results independent of binary
float ties, so re-serializing a rounded value is idempotent.
"""

from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float, places: int) -> float | int:
    """Round *value* to *places* decimals, halves away from zero.

    Returns an ``int`` when *places* is 0. Non-finite input yields 0.
    """
    if not math.isfinite(value):
        return 0
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    if places == 0:
        return int(rounded)
    result = float(rounded)
    return 0.0 if result == 0 else result


def round_to_nearest(value: float, step: int = 5) -> int:
    """Round *value* to the nearest multiple of *step* (halves round up)."""
    return int(math.floor(value / step + 0.5) * step)
