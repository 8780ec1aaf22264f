"""
Canonical pipeline contracts.

These models are the boundary between the grouping, normalization and
deduplication stages and the callers that feed OCR output in and render
results out.

Stage code should consume/produce these contract objects (not ad-hoc dicts).
"""

from .extraction import Candidate, DropReason, DroppedFragment, ExtractionResult
from .fragments import BBox, Fragment, InvalidArgument
from .rows import Row

__all__ = [
    "BBox",
    "Fragment",
    "InvalidArgument",
    "Row",
    "Candidate",
    "DropReason",
    "DroppedFragment",
    "ExtractionResult",
]
