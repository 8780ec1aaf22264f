from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .fragments import BBox, Fragment, InvalidArgument


@dataclass(frozen=True, slots=True)
class Row:
    fragments: tuple[Fragment, ...]  # ascending cx
    cy: float  # mean cy of all members

    @property
    def bbox(self) -> BBox:
        out = self.fragments[0].bbox
        for f in self.fragments[1:]:
            out = out.union(f.bbox)
        return out

    @property
    def text(self) -> str:
        return " ".join(f.text for f in self.fragments)

    def __len__(self) -> int:
        return len(self.fragments)

    def to_dict(self) -> dict[str, Any]:
        return {
            "cy": self.cy,
            "bbox": self.bbox.to_dict(),
            "text": self.text,
            "fragments": [f.to_dict() for f in self.fragments],
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Row":
        fragments = tuple(Fragment.from_dict(f) for f in (d.get("fragments") or []))
        if not fragments:
            raise InvalidArgument("row must contain at least one fragment")
        return Row(fragments=fragments, cy=float(d["cy"]))
