from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from grouping.config import DEFAULT_Y_THRESHOLD_PX
from grouping.group_rows import validate_y_threshold
from names.dedupe import DEFAULT_FUZZY_THRESHOLD, validate_fuzzy_threshold


@dataclass(frozen=True, slots=True)
class ExtractionOptions:
    """
    Per-call pipeline parameters.

    Passed explicitly into every call; nothing is remembered between calls.
    """

    y_threshold: float = DEFAULT_Y_THRESHOLD_PX  # row-clustering tolerance, pixels
    fuzzy_enabled: bool = True
    fuzzy_threshold: int = DEFAULT_FUZZY_THRESHOLD  # max edit distance for a duplicate

    def validate(self) -> None:
        validate_y_threshold(self.y_threshold)
        validate_fuzzy_threshold(self.fuzzy_threshold)

    def __post_init__(self) -> None:
        self.validate()

    def to_dict(self) -> dict[str, Any]:
        return {
            "y_threshold": float(self.y_threshold),
            "fuzzy_enabled": bool(self.fuzzy_enabled),
            "fuzzy_threshold": self.fuzzy_threshold,
        }
