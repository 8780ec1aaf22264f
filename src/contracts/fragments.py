from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Sequence


class InvalidArgument(ValueError):
    """Raised for malformed parameters or geometry; never silently coerced."""


def _coord(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgument(f"bbox.{name} must be a number, got {type(value).__name__}")
    v = float(value)
    if not math.isfinite(v):
        raise InvalidArgument(f"bbox.{name} must be finite, got {value!r}")
    if v < 0:
        raise InvalidArgument(f"bbox.{name} must be >= 0, got {value!r}")
    return v


@dataclass(frozen=True, slots=True)
class BBox:
    """
    Pixel coordinates relative to the source image's native resolution:
    - (x0, y0) is top-left
    - (x1, y1) is bottom-right
    """

    x0: float
    y0: float
    x1: float
    y1: float

    def __post_init__(self) -> None:
        for name in ("x0", "y0", "x1", "y1"):
            object.__setattr__(self, name, _coord(name, getattr(self, name)))
        if self.x1 < self.x0:
            raise InvalidArgument(f"bbox x1 < x0 ({self.x1} < {self.x0})")
        if self.y1 < self.y0:
            raise InvalidArgument(f"bbox y1 < y0 ({self.y1} < {self.y0})")

    @property
    def cx(self) -> float:
        return (self.x0 + self.x1) / 2.0

    @property
    def cy(self) -> float:
        return (self.y0 + self.y1) / 2.0

    def width(self) -> float:
        return self.x1 - self.x0

    def height(self) -> float:
        return self.y1 - self.y0

    def union(self, other: "BBox") -> "BBox":
        return BBox(
            x0=min(self.x0, other.x0),
            y0=min(self.y0, other.y0),
            x1=max(self.x1, other.x1),
            y1=max(self.y1, other.y1),
        )

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> "BBox":
        try:
            return BBox(x0=d["x0"], y0=d["y0"], x1=d["x1"], y1=d["y1"])
        except KeyError as e:
            raise InvalidArgument(f"bbox is missing key {e.args[0]!r}") from None

    @staticmethod
    def from_any(raw: Any) -> "BBox":
        """Accept a BBox, a mapping with x0/y0/x1/y1, or a 4-sequence (x0, y0, x1, y1)."""
        if isinstance(raw, BBox):
            return raw
        if isinstance(raw, Mapping):
            return BBox.from_dict(raw)
        if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
            if len(raw) != 4:
                raise InvalidArgument(f"bbox sequence must have 4 values, got {len(raw)}")
            return BBox(*raw)
        raise InvalidArgument(f"bbox must be a mapping or a 4-sequence, got {type(raw).__name__}")

    def to_dict(self) -> dict[str, Any]:
        return {"x0": self.x0, "y0": self.y0, "x1": self.x1, "y1": self.y1}


@dataclass(frozen=True, slots=True)
class Fragment:
    """
    Single OCR text hypothesis with its bounding box.

    `text` is kept exactly as recognized; cleanup happens in `names.normalize`.
    """

    text: str
    bbox: BBox

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise InvalidArgument(f"fragment text must be a string, got {type(self.text).__name__}")
        if not isinstance(self.bbox, BBox):
            raise InvalidArgument(f"fragment bbox must be a BBox, got {type(self.bbox).__name__}")

    @property
    def cx(self) -> float:
        return self.bbox.cx

    @property
    def cy(self) -> float:
        return self.bbox.cy

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> "Fragment":
        if "text" not in d or d["text"] is None:
            raise InvalidArgument("fragment is missing text")
        if "bbox" not in d or d["bbox"] is None:
            raise InvalidArgument("fragment is missing bbox")
        return Fragment(text=d["text"], bbox=BBox.from_any(d["bbox"]))

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "bbox": self.bbox.to_dict()}
