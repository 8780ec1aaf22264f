from __future__ import annotations

import math

from contracts.fragments import InvalidArgument

# Row tolerance used when the caller knows nothing about the image scale.
DEFAULT_Y_THRESHOLD_PX = 10.0

# y_threshold = max(MIN_Y_THRESHOLD_PX, round_half_up(image_height * Y_THRESHOLD_RATIO))
Y_THRESHOLD_RATIO = 0.02
MIN_Y_THRESHOLD_PX = 8.0


def derive_y_threshold(
    image_height: float,
    *,
    ratio: float = Y_THRESHOLD_RATIO,
    floor: float = MIN_Y_THRESHOLD_PX,
) -> float:
    """
    Row-clustering tolerance from the rendered image height.

    Caller-side helper; `group_into_rows` itself takes the threshold as-is.
    """

    for name, value in (("image_height", image_height), ("ratio", ratio), ("floor", floor)):
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise InvalidArgument(f"{name} must be a finite number, got {value!r}")
        if value <= 0:
            raise InvalidArgument(f"{name} must be > 0, got {value!r}")
    # Half-up rounding, so 8.5 -> 9 rather than banker's 8.
    return max(float(floor), float(math.floor(image_height * ratio + 0.5)))
