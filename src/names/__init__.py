"""
Row text to name strings.

- `normalize` / `row_to_candidate`: lexical cleanup of one row into a capitalized
  name, or None when the row is noise.
- `dedupe`: order-preserving fuzzy removal of near-duplicate names.

No geometry here; rows come from `grouping`.
"""

from .dedupe import DEFAULT_FUZZY_THRESHOLD, dedupe, edit_distance
from .normalize import extract_candidates, normalize, row_to_candidate, rows_to_candidates

__all__ = [
    "DEFAULT_FUZZY_THRESHOLD",
    "dedupe",
    "edit_distance",
    "extract_candidates",
    "normalize",
    "row_to_candidate",
    "rows_to_candidates",
]
