"""
Row grouping: geometry only.

- fragments -> rows by vertical proximity (greedy first-fit on running y-centers)
- deterministic ordering: rows by final y-center, fragments by x-center

No text inspection, no OCR correction.
"""

from .config import DEFAULT_Y_THRESHOLD_PX, derive_y_threshold
from .group_rows import group_into_rows

__all__ = ["DEFAULT_Y_THRESHOLD_PX", "derive_y_threshold", "group_into_rows"]
