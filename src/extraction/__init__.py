"""
Name extraction pipeline: OCR fragments -> rows -> candidates -> names.

Each call is a pure function of its fragments and `ExtractionOptions`; rows are
returned alongside the names so callers can draw overlays.
"""

from .artifacts import serialize_extraction_result, write_extraction_json_artifact
from .config import ExtractionOptions
from .module import coerce_fragments, extract_names

__all__ = [
    "ExtractionOptions",
    "coerce_fragments",
    "extract_names",
    "serialize_extraction_result",
    "write_extraction_json_artifact",
]
